"""
Byte-string inputs for the codecs.

Hashes, checksums and the address codec work on raw bytes only. Text is never
reinterpreted here (as hex or as UTF-8); whoever holds text converts it first.
"""

from __future__ import annotations

from typing import Any, Union

from ..errors import ValidationError

BytesLike = Union[bytes, bytearray, memoryview]


def is_bytes_like(data: object) -> bool:
    return isinstance(data, (bytes, bytearray, memoryview))


def require_bytes(data: Any, what: str = "data") -> bytes:
    """Return `data` as immutable bytes; anything else is a ValidationError."""
    if not is_bytes_like(data):
        raise ValidationError(
            f"{what} must be bytes-like", field=what, got=type(data).__name__
        )
    return bytes(data)


__all__ = ["BytesLike", "is_bytes_like", "require_bytes"]
