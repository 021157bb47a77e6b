"""
hybridseal Signing Envelope
===========================

Detached-looking but self-contained signatures: the message travels in the
clear after its signature.

Layout (all integers signed little-endian)::

    [0-31]   fingerprint of the signer's public key (as supplied by the signer)
    [32-35]  length N of the signature
    [36..]   SHA256withRSA signature (N bytes)
    [..]     message, to the end of the envelope

The fingerprint is carried, not enforced.  The signer states it and the
verifier reports it; neither side checks it against the key actually used.
Compare :attr:`SignedMessage.fingerprint` with the fingerprint you expect
when key identity matters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hybridseal import framing
from hybridseal.asymmetric import RsaSigner, RsaVerifier
from hybridseal.errors import InvalidInputError
from hybridseal.fingerprint import DIGEST_SIZE, format_fingerprint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedMessage:
    """A verified signing envelope, split into its parts."""

    content: bytes
    signature: bytes
    fingerprint: str


class EnvelopeSigner:
    """
    Signs messages with *private_key* (DER).

    *public_key_fingerprint_raw* must be the 32-byte SHA-256 of the DER
    public key paired with *private_key*.  It is written into every envelope
    as given; this class does not derive or check it.
    """

    def __init__(self, private_key: bytes, public_key_fingerprint_raw: bytes):
        if (
            not isinstance(public_key_fingerprint_raw, (bytes, bytearray))
            or len(public_key_fingerprint_raw) != DIGEST_SIZE
        ):
            raise InvalidInputError("Signing key's fingerprint was not valid; it must be 32 bytes.")
        self._signer = RsaSigner(private_key)
        self._fingerprint_raw = bytes(public_key_fingerprint_raw)

    def sign(self, message: bytes) -> bytes:
        signature = self._signer.sign(message)
        return framing.frame(self._fingerprint_raw, signature, message)


class EnvelopeVerifier:
    """Verifies envelopes against *public_key* (DER)."""

    def __init__(self, public_key: bytes):
        self._verifier = RsaVerifier(public_key)

    def verify(self, envelope: bytes) -> SignedMessage:
        """
        Check the signature and return content, signature and the embedded
        fingerprint.

        Raises
        ------
        EnvelopeFormatError
            Envelope is truncated or its length field is impossible.
        SignatureMismatchError
            The signature does not cover the content under this key.
        """
        fingerprint_raw, signature, content = framing.unframe(envelope, "signature")
        fingerprint = format_fingerprint(fingerprint_raw)
        self._verifier.verify(content, signature)
        logger.debug("Verified %d-byte message signed as %s", len(content), fingerprint)
        return SignedMessage(content=content, signature=signature, fingerprint=fingerprint)

    def verify_content(self, envelope: bytes) -> bytes:
        """Like :meth:`verify`, returning only the content."""
        return self.verify(envelope).content


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def envelope_sign(private_key: bytes, public_key_fingerprint_raw: bytes, message: bytes) -> bytes:
    return EnvelopeSigner(private_key, public_key_fingerprint_raw).sign(message)


def envelope_verify(public_key: bytes, envelope: bytes) -> SignedMessage:
    return EnvelopeVerifier(public_key).verify(envelope)


def envelope_verify_content(public_key: bytes, envelope: bytes) -> bytes:
    return EnvelopeVerifier(public_key).verify_content(envelope)
