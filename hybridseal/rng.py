"""
hybridseal Random Sources
=========================

Two ways to obtain random bytes:

* :func:`new_secure_random`: the operating system CSPRNG.  Use this
  everywhere outside of tests.
* :func:`new_seeded_random_for_testing`: a deterministic stream derived
  from a caller-supplied seed, so key pairs and envelopes can be reproduced
  in tests.  Never use it for real keys.

Both expose ``read(n) -> bytes``, which is also the ``randfunc`` signature
PyCryptodome expects.

A :class:`SeededRandom` carries keystream state: do not share one instance
between threads or reuse it across unrelated operations.
"""

from __future__ import annotations

import hashlib
import os
from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from hybridseal.errors import InvalidInputError

# ChaCha20 in ``cryptography`` takes a 16-byte nonce (4-byte counter || 12-byte nonce)
_CHACHA_NONCE = b"\x00" * 16


class SecureRandom:
    """Random bytes from ``os.urandom``."""

    def read(self, n: int) -> bytes:
        return os.urandom(n)


class SeededRandom:
    """
    Deterministic byte stream: the ChaCha20 keystream keyed with
    ``SHA-256(seed)``.  Identical seeds produce identical streams.
    """

    def __init__(self, seed: bytes):
        if not isinstance(seed, (bytes, bytearray)) or len(seed) == 0:
            raise InvalidInputError("Seed must be non-empty bytes.")
        key = hashlib.sha256(bytes(seed)).digest()
        self._stream = Cipher(algorithms.ChaCha20(key, _CHACHA_NONCE), mode=None).encryptor()

    def read(self, n: int) -> bytes:
        return self._stream.update(b"\x00" * n)


def new_secure_random() -> SecureRandom:
    """Return the production random source."""
    return SecureRandom()


def new_seeded_random_for_testing(seed: bytes) -> SeededRandom:
    """Return a reproducible random source.  Testing only."""
    return SeededRandom(seed)


def resolve(random=None, seed: Optional[bytes] = None):
    """
    Pick the random source for an operation: an explicit *random* wins,
    then a *seed*, then the secure default.
    """
    if random is not None:
        return random
    if seed is not None:
        return new_seeded_random_for_testing(seed)
    return new_secure_random()
