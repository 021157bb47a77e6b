# tests/test_signed.py

import struct

import pytest

from hybridseal.errors import EnvelopeFormatError, InvalidInputError, SignatureMismatchError
from hybridseal.signed import (
    EnvelopeSigner,
    EnvelopeVerifier,
    SignedMessage,
    envelope_sign,
    envelope_verify,
    envelope_verify_content,
)

SIGNATURE_SIZE = 1024 // 8
CONTENT_OFFSET = 32 + 4 + SIGNATURE_SIZE


class TestRoundTrip:
    def test_hello_world(self, keypair):
        envelope = EnvelopeSigner(keypair.private_key, keypair.fingerprint_raw).sign(b"Hello World")
        message = EnvelopeVerifier(keypair.public_key).verify(envelope)
        assert isinstance(message, SignedMessage)
        assert message.content == b"Hello World"
        assert message.fingerprint == keypair.fingerprint
        assert len(message.signature) == SIGNATURE_SIZE

    def test_content_only_variant(self, keypair):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"Hello World")
        assert envelope_verify_content(keypair.public_key, envelope) == b"Hello World"

    @pytest.mark.parametrize("message", [b"", b"\x00", b"a" * 10_000])
    def test_message_sizes(self, keypair, message):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, message)
        assert envelope_verify(keypair.public_key, envelope).content == message


class TestWireLayout:
    def test_layout(self, keypair):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"Hello World")
        assert envelope[:32] == keypair.fingerprint_raw
        assert envelope[32:36] == struct.pack("<i", SIGNATURE_SIZE)
        assert envelope[CONTENT_OFFSET:] == b"Hello World"

    def test_content_stays_plaintext(self, keypair):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"readable")
        assert envelope.endswith(b"readable")


class TestRejection:
    def test_altered_message(self, keypair):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"Hello World")
        forged = envelope[:CONTENT_OFFSET] + b"Hello XWorld"
        with pytest.raises(SignatureMismatchError):
            envelope_verify(keypair.public_key, forged)

    def test_single_bit_flip_in_content(self, keypair):
        envelope = bytearray(envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"Hello World"))
        envelope[-1] ^= 0x01
        with pytest.raises(SignatureMismatchError):
            envelope_verify(keypair.public_key, bytes(envelope))

    def test_wrong_public_key(self, keypair, second_keypair):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"Hello World")
        with pytest.raises(SignatureMismatchError):
            envelope_verify(second_keypair.public_key, envelope)

    @pytest.mark.parametrize("size", [0, 16, 31, 33])
    def test_bad_fingerprint_length(self, keypair, size):
        with pytest.raises(InvalidInputError):
            EnvelopeSigner(keypair.private_key, b"\x00" * size)

    @pytest.mark.parametrize("length", [0, 20, 33, 36, CONTENT_OFFSET - 1])
    def test_truncated(self, keypair, length):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"Hello World")
        with pytest.raises(EnvelopeFormatError):
            envelope_verify(keypair.public_key, envelope[:length])


class TestFingerprintCarriage:
    def test_fingerprint_is_reported_not_enforced(self, keypair, second_keypair):
        # Signed with keypair's private key but labelled with second_keypair's fingerprint
        envelope = envelope_sign(keypair.private_key, second_keypair.fingerprint_raw, b"data")
        message = envelope_verify(keypair.public_key, envelope)
        assert message.content == b"data"
        assert message.fingerprint == second_keypair.fingerprint

    def test_relabelled_envelope_still_verifies(self, keypair):
        envelope = envelope_sign(keypair.private_key, keypair.fingerprint_raw, b"data")
        relabelled = b"\xff" * 32 + envelope[32:]
        message = envelope_verify(keypair.public_key, relabelled)
        assert message.fingerprint == "-".join(["ffff"] * 16)
