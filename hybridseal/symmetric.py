"""
hybridseal AES-256-GCM Primitive
================================

Authenticated symmetric encryption with a 32-byte key.

Output layout::

    nonce(12) || ciphertext || tag(16)

The tag is appended by ``AESGCM`` and is the only integrity check on this
layer: a wrong key, flipped bit or truncated input all raise
:class:`~hybridseal.errors.AuthenticationError`.

Passphrase keys
---------------
:func:`key_from_passphrase` is a single unsalted SHA-256 of the UTF-8
passphrase.  That is weak (no salt, no work factor) but existing payloads
depend on it, so it is kept as-is.  :func:`derive_key` offers PBKDF2 for
callers who can store the salt themselves; nothing in this package switches
to it implicitly.
"""

from __future__ import annotations

import hashlib
import logging

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from hybridseal import rng
from hybridseal.errors import AuthenticationError, InvalidInputError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

KEY_SIZE: int = 32     # AES-256
NONCE_SIZE: int = 12   # AES-GCM recommended nonce
MAC_SIZE: int = 128    # tag length in bits
TAG_SIZE: int = MAC_SIZE // 8
SALT_SIZE: int = 16    # PBKDF2 salt
PBKDF2_ITERATIONS: int = 600_000


# ---------------------------------------------------------------------------
# Key helpers
# ---------------------------------------------------------------------------


def key_from_passphrase(passphrase: str) -> bytes:
    """SHA-256 of the UTF-8 passphrase.  Wire-compatible, not hardened."""
    _validate_passphrase(passphrase)
    return hashlib.sha256(passphrase.encode("utf-8")).digest()


def new_salt(random=None) -> bytes:
    """A fresh PBKDF2 salt drawn from *random* (the OS CSPRNG by default)."""
    return rng.resolve(random).read(SALT_SIZE)


def derive_key(passphrase: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    """
    PBKDF2-HMAC-SHA256 key for *passphrase*, the opt-in hardened sibling of
    :func:`key_from_passphrase`.

    Ciphertexts carry no salt or iteration count, so whoever encrypts must
    store both next to the payload and hand them back for decryption.

    Raises
    ------
    InvalidInputError
        *salt* is not :data:`SALT_SIZE` bytes or *iterations* is below 1.
    """
    _validate_passphrase(passphrase)
    if not isinstance(salt, (bytes, bytearray)) or len(salt) != SALT_SIZE:
        raise InvalidInputError(f"PBKDF2 salt must be {SALT_SIZE} bytes.")
    if iterations < 1:
        raise InvalidInputError("PBKDF2 iteration count must be positive.")
    stretcher = PBKDF2HMAC(hashes.SHA256(), KEY_SIZE, bytes(salt), iterations)
    logger.debug("Stretched passphrase with %d PBKDF2 iterations", iterations)
    return stretcher.derive(passphrase.encode("utf-8"))


# ---------------------------------------------------------------------------
# Encrypter / Decrypter
# ---------------------------------------------------------------------------


class AesEncrypter:
    """
    AES-GCM encrypter bound to one key.

    *random* supplies nonces; it defaults to the OS CSPRNG.  A seeded source
    makes output reproducible and must only be used in tests.
    """

    def __init__(self, key: bytes, random=None):
        _validate_key(key)
        self._aesgcm = AESGCM(bytes(key))
        self._random = rng.resolve(random)

    @classmethod
    def from_passphrase(cls, passphrase: str, random=None) -> "AesEncrypter":
        return cls(key_from_passphrase(passphrase), random=random)

    @classmethod
    def from_derived_passphrase(
        cls, passphrase: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS, random=None
    ) -> "AesEncrypter":
        """Encrypter keyed with :func:`derive_key`; store *salt* and *iterations* alongside."""
        return cls(derive_key(passphrase, salt, iterations), random=random)

    def encrypt(self, plaintext: bytes) -> bytes:
        nonce = self._random.read(NONCE_SIZE)
        return nonce + self._aesgcm.encrypt(nonce, bytes(plaintext), None)


class AesDecrypter:
    """AES-GCM decrypter bound to one key."""

    def __init__(self, key: bytes):
        _validate_key(key)
        self._aesgcm = AESGCM(bytes(key))

    @classmethod
    def from_passphrase(cls, passphrase: str) -> "AesDecrypter":
        return cls(key_from_passphrase(passphrase))

    @classmethod
    def from_derived_passphrase(
        cls, passphrase: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS
    ) -> "AesDecrypter":
        return cls(derive_key(passphrase, salt, iterations))

    def decrypt(self, data: bytes) -> bytes:
        """
        Decrypt ``nonce || ciphertext || tag``.

        Raises
        ------
        AuthenticationError
            Wrong key, corrupted data or truncated input.
        """
        if len(data) < NONCE_SIZE + TAG_SIZE:
            raise AuthenticationError(
                f"Authentication failed: {len(data)} bytes is too short for nonce and tag."
            )
        nonce = bytes(data[:NONCE_SIZE])
        ct = bytes(data[NONCE_SIZE:])
        try:
            return self._aesgcm.decrypt(nonce, ct, None)
        except InvalidTag as exc:
            logger.warning("AES-GCM tag check failed on %d-byte payload", len(data))
            raise AuthenticationError(
                "Authentication failed: wrong key or corrupted data."
            ) from exc


# ---------------------------------------------------------------------------
# Validation helpers (module-private)
# ---------------------------------------------------------------------------


def _validate_key(key: bytes) -> None:
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidInputError("Key must be bytes.")
    if len(key) != KEY_SIZE:
        raise InvalidInputError(
            f"Key must be exactly {KEY_SIZE} bytes (got {len(key)})."
        )


def _validate_passphrase(passphrase: str) -> None:
    if not isinstance(passphrase, str):
        raise InvalidInputError("Passphrase must be a string.")


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def encrypt(key: bytes, plaintext: bytes, random=None) -> bytes:
    return AesEncrypter(key, random=random).encrypt(plaintext)


def decrypt(key: bytes, data: bytes) -> bytes:
    return AesDecrypter(key).decrypt(data)
