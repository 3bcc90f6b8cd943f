"""
algo_sdk.encoding
=================

Canonical msgpack encoding shared by records, signed blobs and the CLI.
"""

from .canonical import (
    UINT64_MAX,
    canonicalize,
    decode,
    encode,
    is_default,
    normalize,
    omit_defaults,
    sort_keys,
)

__all__ = [
    "UINT64_MAX",
    "canonicalize",
    "decode",
    "encode",
    "is_default",
    "normalize",
    "omit_defaults",
    "sort_keys",
]
