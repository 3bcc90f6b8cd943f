"""
algo_sdk.utils
==============

Small, dependency-light helpers shared by the codecs and the record model:

- bytes    : bytes-like checks (no text reinterpretation)
- hash     : SHA-512/256, the protocol hash
- checksum : 4-byte checksums used by addresses and identifiers
"""

from .bytes import BytesLike, is_bytes_like, require_bytes
from .checksum import (
    CHECKSUM_BYTES,
    append_checksum,
    checksum,
    verify_and_strip,
    verify_checksum,
)
from .hash import sha512_256, sha512_256_hex

__all__ = [
    "BytesLike",
    "is_bytes_like",
    "require_bytes",
    "CHECKSUM_BYTES",
    "checksum",
    "append_checksum",
    "verify_checksum",
    "verify_and_strip",
    "sha512_256",
    "sha512_256_hex",
]
