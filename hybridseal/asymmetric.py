"""
hybridseal RSA Primitive
========================

Thin wrappers over the ``cryptography`` RSA implementation:

* encryption with PKCS#1 v1.5 padding (used to wrap 32-byte AES keys)
* signatures with RSASSA-PKCS1-v1_5 over SHA-256

Keys cross this boundary as DER bytes (SubjectPublicKeyInfo for public
keys, PKCS#8 or PKCS#1 for private keys).
"""

from __future__ import annotations

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.asymmetric.rsa import (
    RSAPrivateKey,
    RSAPublicKey,
)

from hybridseal.errors import (
    DecryptionError,
    EncryptionError,
    InvalidInputError,
    SignatureMismatchError,
)

logger = logging.getLogger(__name__)

SIGNATURE_HASH = hashes.SHA256


# ---------------------------------------------------------------------------
# Key parsing
# ---------------------------------------------------------------------------


def load_public_key(der: bytes) -> RSAPublicKey:
    """Parse a DER SubjectPublicKeyInfo into an RSA public key."""
    try:
        key = serialization.load_der_public_key(bytes(der))
    except (ValueError, TypeError) as exc:
        raise InvalidInputError("Could not parse DER public key.") from exc
    if not isinstance(key, RSAPublicKey):
        raise InvalidInputError("DER does not contain an RSA public key.")
    return key


def load_private_key(der: bytes) -> RSAPrivateKey:
    """Parse an unencrypted DER private key (PKCS#8 or PKCS#1)."""
    try:
        key = serialization.load_der_private_key(bytes(der), password=None)
    except (ValueError, TypeError) as exc:
        raise InvalidInputError("Could not parse DER private key.") from exc
    if not isinstance(key, RSAPrivateKey):
        raise InvalidInputError("DER does not contain an RSA private key.")
    return key


# ---------------------------------------------------------------------------
# Encryption
# ---------------------------------------------------------------------------


class RsaEncrypter:
    """Encrypts with a recipient's public key."""

    def __init__(self, public_key: bytes):
        self._key = load_public_key(public_key)

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        RSA-encrypt *plaintext* with PKCS#1 v1.5 padding.

        Raises
        ------
        EncryptionError
            If *plaintext* is longer than ``modulus_bytes - 11``.
        """
        try:
            return self._key.encrypt(bytes(plaintext), asym_padding.PKCS1v15())
        except ValueError as exc:
            limit = self._key.key_size // 8 - 11
            raise EncryptionError(
                f"RSA encryption failed: {len(plaintext)} bytes exceeds the {limit}-byte limit."
            ) from exc


class RsaDecrypter:
    """Decrypts with the matching private key."""

    def __init__(self, private_key: bytes):
        self._key = load_private_key(private_key)

    def decrypt(self, ciphertext: bytes) -> bytes:
        try:
            return self._key.decrypt(bytes(ciphertext), asym_padding.PKCS1v15())
        except ValueError as exc:
            logger.warning("RSA decryption rejected %d-byte ciphertext", len(ciphertext))
            raise DecryptionError("RSA decryption failed: wrong private key or corrupted data.") from exc


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


class RsaSigner:
    """SHA256withRSA signer."""

    def __init__(self, private_key: bytes):
        self._key = load_private_key(private_key)

    def sign(self, message: bytes) -> bytes:
        return self._key.sign(bytes(message), asym_padding.PKCS1v15(), SIGNATURE_HASH())


class RsaVerifier:
    """SHA256withRSA verifier.  Success is the absence of an exception."""

    def __init__(self, public_key: bytes):
        self._key = load_public_key(public_key)

    def verify(self, message: bytes, signature: bytes) -> None:
        """
        Raises
        ------
        SignatureMismatchError
            If *signature* was not produced over *message* by the paired key.
        """
        try:
            self._key.verify(
                bytes(signature),
                bytes(message),
                asym_padding.PKCS1v15(),
                SIGNATURE_HASH(),
            )
        except InvalidSignature as exc:
            logger.warning("RSA signature rejected for %d-byte message", len(message))
            raise SignatureMismatchError("Signature mismatch") from exc


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def encrypt(public_key: bytes, plaintext: bytes) -> bytes:
    return RsaEncrypter(public_key).encrypt(plaintext)


def decrypt(private_key: bytes, ciphertext: bytes) -> bytes:
    return RsaDecrypter(private_key).decrypt(ciphertext)


def sign(private_key: bytes, message: bytes) -> bytes:
    return RsaSigner(private_key).sign(message)


def verify(public_key: bytes, message: bytes, signature: bytes) -> None:
    RsaVerifier(public_key).verify(message, signature)
