"""
hybridseal Fingerprints
=======================

A fingerprint is the SHA-256 digest of a DER-encoded public key, rendered
as lowercase hex grouped two bytes at a time::

    09fe-de45-...-77a0        (79 characters for a 32-byte digest)

The raw 32-byte digest is what travels inside envelopes; the formatted
string is for people and logs.
"""

from __future__ import annotations

import hashlib
import string

from hybridseal.errors import InvalidInputError

DIGEST_SIZE: int = 32   # SHA-256
GROUP_BYTES: int = 2
SEPARATOR: str = "-"
FINGERPRINT_LENGTH: int = DIGEST_SIZE * 2 + DIGEST_SIZE // GROUP_BYTES - 1  # 79


def sha256(data: bytes) -> bytes:
    """Raw SHA-256 digest of *data*."""
    return hashlib.sha256(data).digest()


def format_fingerprint(digest: bytes) -> str:
    """
    Render a 32-byte digest as a dash-grouped lowercase hex string.

    Raises
    ------
    InvalidInputError
        If *digest* is not exactly 32 bytes.
    """
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != DIGEST_SIZE:
        size = len(digest) if isinstance(digest, (bytes, bytearray)) else type(digest).__name__
        raise InvalidInputError(
            f"Cannot create a fingerprint from {size}; it must be {DIGEST_SIZE} bytes."
        )
    hexed = bytes(digest).hex()
    step = GROUP_BYTES * 2
    return SEPARATOR.join(hexed[i : i + step] for i in range(0, len(hexed), step))


def sha256_fingerprint(data: bytes) -> str:
    """Fingerprint of *data* (normally a DER public key)."""
    return format_fingerprint(sha256(data))


def parse_fingerprint(text: str) -> bytes:
    """
    Turn a formatted fingerprint back into its raw 32-byte digest.

    Case-insensitive.  Raises :class:`InvalidInputError` for anything that
    :func:`format_fingerprint` could not have produced.
    """
    if not isinstance(text, str) or len(text) != FINGERPRINT_LENGTH:
        raise InvalidInputError("Fingerprint must be a 79-character dash-grouped hex string.")
    groups = text.split(SEPARATOR)
    if len(groups) != DIGEST_SIZE // GROUP_BYTES or any(len(g) != GROUP_BYTES * 2 for g in groups):
        raise InvalidInputError("Fingerprint must use groups of 4 hex digits separated by '-'.")
    # bytes.fromhex skips whitespace, so check every character up front
    if any(c not in string.hexdigits for g in groups for c in g):
        raise InvalidInputError("Fingerprint contains non-hex characters.")
    return bytes.fromhex("".join(groups))
