"""
hybridseal
==========

Hybrid RSA + AES-256-GCM encryption envelopes and RSA signing envelopes
with SHA-256 key fingerprints.

Uses the ``cryptography`` library for every primitive, and PyCryptodome
for (optionally seeded) RSA key generation.
"""

from hybridseal.codec import (
    decrypt_base64,
    decrypt_to_text,
    encrypt_text,
    encrypt_to_base64,
)
from hybridseal.envelope import (
    EnvelopeDecrypter,
    EnvelopeEncrypter,
    envelope_decrypt,
    envelope_encrypt,
    package_fingerprint,
)
from hybridseal.errors import (
    AuthenticationError,
    DecryptionError,
    EncryptionError,
    EnvelopeFormatError,
    HybridSealError,
    InvalidInputError,
    SignatureMismatchError,
)
from hybridseal.fingerprint import format_fingerprint, parse_fingerprint, sha256_fingerprint
from hybridseal.keys import KeyGenerator, KeyPair, generate_keypair
from hybridseal.rng import new_secure_random, new_seeded_random_for_testing
from hybridseal.signed import (
    EnvelopeSigner,
    EnvelopeVerifier,
    SignedMessage,
    envelope_sign,
    envelope_verify,
    envelope_verify_content,
)

__version__ = "1.0.0"

__all__ = [
    "AuthenticationError",
    "DecryptionError",
    "EncryptionError",
    "EnvelopeDecrypter",
    "EnvelopeEncrypter",
    "EnvelopeFormatError",
    "EnvelopeSigner",
    "EnvelopeVerifier",
    "HybridSealError",
    "InvalidInputError",
    "KeyGenerator",
    "KeyPair",
    "SignatureMismatchError",
    "SignedMessage",
    "decrypt_base64",
    "decrypt_to_text",
    "encrypt_text",
    "encrypt_to_base64",
    "envelope_decrypt",
    "envelope_encrypt",
    "envelope_sign",
    "envelope_verify",
    "envelope_verify_content",
    "format_fingerprint",
    "generate_keypair",
    "new_secure_random",
    "new_seeded_random_for_testing",
    "package_fingerprint",
    "parse_fingerprint",
    "sha256_fingerprint",
]
