"""
hybridseal Exceptions
=====================

Every failure surfaced by the library derives from :class:`HybridSealError`,
so callers that only need "reject the message" can catch the base class.
"""

from __future__ import annotations


class HybridSealError(Exception):
    """Base exception for all hybridseal errors."""


class InvalidInputError(HybridSealError):
    """Argument is malformed: wrong fingerprint length, bad key bytes, etc."""


class EnvelopeFormatError(InvalidInputError):
    """Envelope bytes are truncated or carry an impossible length field."""


class EncryptionError(HybridSealError):
    """RSA refused the plaintext (larger than the modulus allows)."""


class DecryptionError(HybridSealError):
    """RSA decryption failed: wrong private key or corrupted ciphertext."""


class AuthenticationError(DecryptionError):
    """AES-GCM tag verification failed."""


class SignatureMismatchError(HybridSealError):
    """RSA signature does not match the message."""
