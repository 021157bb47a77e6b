"""
hybridseal Key Pairs
====================

RSA key-pair generation and PEM interchange.

Generation runs on PyCryptodome because it accepts a caller-supplied
``randfunc``: that is what lets a test seed reproduce a key pair exactly.
Everything downstream only sees DER bytes, so the rest of the package stays
on ``cryptography``.

Output encodings::

    public_key   DER SubjectPublicKeyInfo
    private_key  DER PKCS#8 (unencrypted)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from Crypto.PublicKey import RSA
from cryptography.hazmat.primitives import serialization

from hybridseal import config, rng
from hybridseal.asymmetric import load_private_key, load_public_key
from hybridseal.errors import InvalidInputError
from hybridseal.fingerprint import format_fingerprint, sha256

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT: int = 65537


@dataclass(frozen=True)
class KeyPair:
    """An RSA key pair as DER bytes, plus the public key's fingerprint."""

    public_key: bytes
    private_key: bytes
    fingerprint: str
    fingerprint_raw: bytes

    @classmethod
    def from_der(cls, public_key: bytes, private_key: bytes) -> "KeyPair":
        digest = sha256(public_key)
        return cls(bytes(public_key), bytes(private_key), format_fingerprint(digest), digest)


class KeyGenerator:
    """
    Generates RSA key pairs from one random source.

    A generator built on a seeded source yields the same sequence of key
    pairs every run; keep such generators in tests.
    """

    def __init__(self, random=None):
        self._random = rng.resolve(random)

    def generate(self, strength: Optional[int] = None) -> KeyPair:
        """
        Generate a key pair with a *strength*-bit modulus.

        No policy is enforced on *strength*; choose 2048 or more for real
        use.  Sizes the backend refuses (below 1024) raise
        :class:`InvalidInputError`.
        """
        bits = strength if strength is not None else config.DEFAULT_KEY_STRENGTH
        try:
            key = RSA.generate(bits, randfunc=self._random.read, e=PUBLIC_EXPONENT)
        except ValueError as exc:
            raise InvalidInputError(f"Cannot generate a {bits}-bit RSA key: {exc}") from exc

        pair = KeyPair.from_der(
            key.publickey().export_key(format="DER"),
            key.export_key(format="DER", pkcs=8),
        )
        logger.info("Generated %d-bit RSA key pair %s", bits, pair.fingerprint)
        return pair


def generate_keypair(strength: Optional[int] = None, seed: Optional[bytes] = None) -> KeyPair:
    """One-shot generation; *seed* is for reproducible tests only."""
    return KeyGenerator(rng.resolve(seed=seed)).generate(strength)


# ---------------------------------------------------------------------------
# PEM interchange
# ---------------------------------------------------------------------------


def public_key_to_pem(der: bytes) -> bytes:
    """Re-encode a DER public key as PEM."""
    return load_public_key(der).public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def public_key_from_pem(pem: bytes) -> bytes:
    """Load an RSA public key from PEM and return its DER encoding."""
    try:
        key = serialization.load_pem_public_key(pem)
    except ValueError as exc:
        raise InvalidInputError("Could not parse PEM public key.") from exc
    der = key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    # round-trip through the DER loader for the RSA type check
    load_public_key(der)
    return der


def private_key_to_pem(der: bytes, passphrase: Optional[str] = None) -> bytes:
    """
    Re-encode a DER private key as PKCS#8 PEM.

    If *passphrase* is given the key is encrypted with the ``cryptography``
    library's best available PEM encryption.
    """
    enc: serialization.KeySerializationEncryption
    if passphrase:
        enc = serialization.BestAvailableEncryption(passphrase.encode("utf-8"))
    else:
        enc = serialization.NoEncryption()
    return load_private_key(der).private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=enc,
    )


def private_key_from_pem(pem: bytes, passphrase: Optional[str] = None) -> bytes:
    """Load an RSA private key from PEM (optionally encrypted), return PKCS#8 DER."""
    pwd = passphrase.encode("utf-8") if passphrase else None
    try:
        key = serialization.load_pem_private_key(pem, password=pwd)
    except (ValueError, TypeError) as exc:
        raise InvalidInputError("Could not parse PEM private key.") from exc
    der = key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    load_private_key(der)
    return der
