"""
Short checksums over byte strings.

The checksum is the trailing `CHECKSUM_BYTES` of the SHA-512/256 digest. It
guards human-transcribed data (addresses, identifiers) against typos; it is
not a MAC, so comparisons need not be constant time, although we use
`hmac.compare_digest` anyway.
"""

from __future__ import annotations

import hmac

from ..errors import ChecksumMismatch
from .bytes import BytesLike, require_bytes
from .hash import sha512_256

CHECKSUM_BYTES = 4


def checksum(data: BytesLike) -> bytes:
    """Return the protocol checksum of *data*."""
    return sha512_256(data)[-CHECKSUM_BYTES:]


def append_checksum(data: BytesLike) -> bytes:
    """Return data || checksum(data)."""
    payload = require_bytes(data)
    return payload + checksum(payload)


def verify_checksum(data: BytesLike, digest: BytesLike) -> bool:
    """True iff `digest` is the checksum of `data`."""
    expected = checksum(data)
    got = require_bytes(digest, "digest")
    return len(got) == CHECKSUM_BYTES and hmac.compare_digest(expected, got)


def verify_and_strip(data: BytesLike) -> bytes:
    """
    Split `payload || checksum`, verify the checksum and return the payload.

    Raises ChecksumMismatch if the input is too short or the checksum differs.
    """
    buf = require_bytes(data)
    if len(buf) < CHECKSUM_BYTES:
        raise ChecksumMismatch("input shorter than checksum", length=len(buf))
    payload, digest = buf[:-CHECKSUM_BYTES], buf[-CHECKSUM_BYTES:]
    if not verify_checksum(payload, digest):
        raise ChecksumMismatch(expected=checksum(payload), got=digest)
    return payload


__all__ = [
    "CHECKSUM_BYTES",
    "checksum",
    "append_checksum",
    "verify_checksum",
    "verify_and_strip",
]
