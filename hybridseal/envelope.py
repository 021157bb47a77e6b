"""
hybridseal Encryption Envelope
==============================

Hybrid RSA + AES-256-GCM encryption for a single recipient.

Layout (all integers signed little-endian)::

    [0-31]   SHA-256 of the recipient's DER public key
    [32-35]  length N of the RSA-wrapped AES key
    [36..]   RSA PKCS#1 v1.5 ciphertext of the AES key (N bytes)
    [..]     nonce(12) || AES-GCM ciphertext || tag(16)

A fresh AES key is drawn for every message.  The leading fingerprint only
identifies the intended recipient; decryption never checks it, see
:func:`package_fingerprint` for callers that want to route on it.
"""

from __future__ import annotations

import logging
from typing import Optional

from hybridseal import framing, rng
from hybridseal.asymmetric import RsaDecrypter, RsaEncrypter
from hybridseal.errors import DecryptionError
from hybridseal.fingerprint import DIGEST_SIZE, format_fingerprint, sha256
from hybridseal.symmetric import KEY_SIZE, AesDecrypter, AesEncrypter

logger = logging.getLogger(__name__)


class EnvelopeEncrypter:
    """
    Seals messages for the holder of *recipient_public_key* (DER).

    *random* feeds both the per-message AES key and the GCM nonce.  Leave it
    unset outside of tests.
    """

    def __init__(self, recipient_public_key: bytes, random=None):
        self._rsa = RsaEncrypter(recipient_public_key)
        self._fingerprint_raw = sha256(recipient_public_key)
        self._random = rng.resolve(random)

    @property
    def fingerprint(self) -> str:
        return format_fingerprint(self._fingerprint_raw)

    def encrypt(self, plaintext: bytes) -> bytes:
        aes_key = self._random.read(KEY_SIZE)
        wrapped_key = self._rsa.encrypt(aes_key)
        payload = AesEncrypter(aes_key, random=self._random).encrypt(plaintext)
        logger.debug(
            "Sealed %d bytes for %s (wrapped key %d bytes)",
            len(plaintext), self.fingerprint, len(wrapped_key),
        )
        return framing.frame(self._fingerprint_raw, wrapped_key, payload)


class EnvelopeDecrypter:
    """Opens envelopes addressed to the public half of *private_key* (DER)."""

    def __init__(self, private_key: bytes):
        self._rsa = RsaDecrypter(private_key)

    def decrypt(self, envelope: bytes) -> bytes:
        """
        Recover the plaintext.

        Raises
        ------
        EnvelopeFormatError
            Envelope is truncated or its length field is impossible.
        DecryptionError
            The wrapped key does not open with this private key.
        AuthenticationError
            The AES-GCM tag does not verify (tampering, or a wrong key that
            slipped past the RSA padding check).
        """
        _fingerprint, wrapped_key, payload = framing.unframe(envelope, "wrapped AES key")
        aes_key = self._rsa.decrypt(wrapped_key)
        if len(aes_key) != KEY_SIZE:
            raise DecryptionError(
                f"Unwrapped AES key is {len(aes_key)} bytes, expected {KEY_SIZE}: wrong private key."
            )
        return AesDecrypter(aes_key).decrypt(payload)


def package_fingerprint(envelope: bytes) -> bytes:
    """Raw recipient fingerprint of *envelope*, read without decrypting."""
    fingerprint_raw, _ = framing.read_exact(envelope, 0, DIGEST_SIZE, "fingerprint")
    return fingerprint_raw


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def envelope_encrypt(
    recipient_public_key: bytes,
    plaintext: bytes,
    seed: Optional[bytes] = None,
) -> bytes:
    """Seal *plaintext*; *seed* makes the AES segment reproducible (tests only)."""
    return EnvelopeEncrypter(recipient_public_key, random=rng.resolve(seed=seed)).encrypt(plaintext)


def envelope_decrypt(recipient_private_key: bytes, envelope: bytes) -> bytes:
    return EnvelopeDecrypter(recipient_private_key).decrypt(envelope)
