"""
hybridseal Envelope Framing
===========================

Shared byte-layout helpers for both envelope kinds::

    fingerprint(32) || length(4, signed little-endian) || block(length) || rest

Readers work on ``(data, offset)`` pairs and raise
:class:`~hybridseal.errors.EnvelopeFormatError` instead of returning short
slices.
"""

from __future__ import annotations

import struct
from typing import Tuple

from hybridseal.errors import EnvelopeFormatError
from hybridseal.fingerprint import DIGEST_SIZE

LENGTH_FORMAT = "<i"
LENGTH_SIZE: int = struct.calcsize(LENGTH_FORMAT)  # 4


def pack_length(n: int) -> bytes:
    return struct.pack(LENGTH_FORMAT, n)


def read_exact(data: bytes, offset: int, size: int, what: str) -> Tuple[bytes, int]:
    """Return ``(data[offset:offset+size], new_offset)`` or raise if short."""
    chunk = data[offset : offset + size]
    if len(chunk) != size:
        raise EnvelopeFormatError(
            f"Envelope truncated: expected {size} bytes of {what}, found {len(chunk)}."
        )
    return bytes(chunk), offset + size


def read_length(data: bytes, offset: int, what: str) -> Tuple[int, int]:
    """Read a length prefix and check it fits in the remaining bytes."""
    raw, offset = read_exact(data, offset, LENGTH_SIZE, f"{what} length")
    (n,) = struct.unpack(LENGTH_FORMAT, raw)
    if n < 0 or n > len(data) - offset:
        raise EnvelopeFormatError(
            f"Envelope declares a {n}-byte {what} but only {len(data) - offset} bytes remain."
        )
    return n, offset


def frame(fingerprint_raw: bytes, block: bytes, rest: bytes) -> bytes:
    """Assemble ``fingerprint || len(block) || block || rest``."""
    return bytes(fingerprint_raw) + pack_length(len(block)) + bytes(block) + bytes(rest)


def unframe(data: bytes, what: str) -> Tuple[bytes, bytes, bytes]:
    """Inverse of :func:`frame`: returns ``(fingerprint_raw, block, rest)``."""
    fingerprint_raw, offset = read_exact(data, 0, DIGEST_SIZE, "fingerprint")
    n, offset = read_length(data, offset, what)
    block, offset = read_exact(data, offset, n, what)
    return fingerprint_raw, block, bytes(data[offset:])
