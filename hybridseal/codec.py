"""
hybridseal Text & Base64 Conversions
====================================

Every encrypter in the package exposes ``encrypt(bytes) -> bytes`` and every
decrypter ``decrypt(bytes) -> bytes``.  The text and Base64 variants live
here once instead of on each class:

=====================  ==========================  =================
function               input                       output
=====================  ==========================  =================
encrypt_text           str (UTF-8)                 bytes
encrypt_to_base64      bytes or str                Base64 str
decrypt_base64         Base64 str                  bytes
decrypt_to_text        bytes or Base64 str         str (UTF-8)
=====================  ==========================  =================

Base64 is the standard alphabet with padding.
"""

from __future__ import annotations

import base64
import binascii
from typing import Protocol, Union

from hybridseal.errors import InvalidInputError


class Encrypter(Protocol):
    def encrypt(self, message: bytes) -> bytes: ...


class Decrypter(Protocol):
    def decrypt(self, message: bytes) -> bytes: ...


def to_bytes(message: Union[bytes, bytearray, str]) -> bytes:
    """UTF-8 encode text; pass bytes through."""
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    raise InvalidInputError(f"Expected bytes or str, got {type(message).__name__}.")


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(text: Union[str, bytes]) -> bytes:
    """Strict standard-alphabet decode of Base64 text or its ASCII bytes."""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("Invalid Base64 encoding.") from exc


def encrypt_text(encrypter: Encrypter, text: str) -> bytes:
    return encrypter.encrypt(to_bytes(text))


def encrypt_to_base64(encrypter: Encrypter, message: Union[bytes, str]) -> str:
    return b64encode(encrypter.encrypt(to_bytes(message)))


def decrypt_base64(decrypter: Decrypter, message: str) -> bytes:
    return decrypter.decrypt(b64decode(message))


def decrypt_to_text(decrypter: Decrypter, message: Union[bytes, str]) -> str:
    """
    Decrypt and UTF-8 decode.  A ``str`` argument is taken to be Base64,
    matching what :func:`encrypt_to_base64` produces.
    """
    raw = b64decode(message) if isinstance(message, str) else message
    plaintext = decrypter.decrypt(raw)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidInputError("Decrypted payload is not valid UTF-8.") from exc
