"""
algo_sdk.address
================

Address encoding and validation.

Format
------
An address is the RFC 4648 base32 text (uppercase, `=` padding stripped) of

    payload = public_key (32 bytes) || checksum(public_key) (4 bytes)

where `checksum` is the last 4 bytes of SHA-512/256 over the key. 36 bytes of
payload always render as 58 characters.

This module provides:
- encode(public_key) -> str
- decode(address) -> bytes (the 32-byte public key)
- is_valid_address(address) -> bool (never raises)
- is_valid(address) -> bool (alias)
- Address: frozen value type wrapping a public key
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from .errors import ChecksumMismatch, InvalidAddress
from .utils.bytes import BytesLike, is_bytes_like
from .utils.checksum import CHECKSUM_BYTES, append_checksum, verify_and_strip

PUBLIC_KEY_BYTES = 32
ADDRESS_LENGTH = 58

# base32 of 36 bytes is 64 characters of which 6 are padding.
_PAD = "=" * 6

__all__ = [
    "PUBLIC_KEY_BYTES",
    "ADDRESS_LENGTH",
    "encode",
    "decode",
    "is_valid_address",
    "is_valid",
    "Address",
]


def encode(public_key: BytesLike) -> str:
    """
    Encode a 32-byte public key as its checksummed base32 address.

    Raises InvalidAddress if `public_key` is not 32 bytes.
    """
    if not is_bytes_like(public_key):
        raise InvalidAddress("public key must be bytes", got=type(public_key).__name__)
    pk = bytes(public_key)
    if len(pk) != PUBLIC_KEY_BYTES:
        raise InvalidAddress("public key must be 32 bytes", length=len(pk))
    return base64.b32encode(append_checksum(pk)).decode("ascii").rstrip("=")


def decode(address: str) -> bytes:
    """
    Decode an address back to its 32-byte public key.

    Raises InvalidAddress on: non-string input, wrong length, characters
    outside the uppercase base32 alphabet, checksum mismatch, or non-zero
    trailing bits (an input that does not re-encode to itself).
    """
    if not isinstance(address, str):
        raise InvalidAddress("address must be a string", got=type(address).__name__)
    if len(address) != ADDRESS_LENGTH:
        raise InvalidAddress("address must be 58 characters", length=len(address))
    try:
        raw = base64.b32decode(address + _PAD, casefold=False)
    except (binascii.Error, ValueError) as e:
        raise InvalidAddress("address is not valid base32", reason=str(e)) from e
    if len(raw) != PUBLIC_KEY_BYTES + CHECKSUM_BYTES:
        raise InvalidAddress("decoded address has wrong length", length=len(raw))
    try:
        pk = verify_and_strip(raw)
    except ChecksumMismatch as e:
        raise InvalidAddress("address checksum mismatch") from e
    if encode(pk) != address:
        raise InvalidAddress("address is not in canonical form")
    return pk


def is_valid_address(address: Any) -> bool:
    """True iff `address` decodes cleanly. Never raises."""
    try:
        decode(address)
    except InvalidAddress:
        return False
    return True


# Alias kept for symmetry with the other codecs.
is_valid = is_valid_address


@dataclass(frozen=True, slots=True)
class Address:
    """A 32-byte public key with its checksummed text form."""

    public_key: bytes

    def __post_init__(self) -> None:
        if not is_bytes_like(self.public_key) or len(self.public_key) != PUBLIC_KEY_BYTES:
            raise InvalidAddress("public key must be 32 bytes")
        object.__setattr__(self, "public_key", bytes(self.public_key))

    @classmethod
    def from_string(cls, address: str) -> "Address":
        return cls(decode(address))

    def __str__(self) -> str:
        return encode(self.public_key)
