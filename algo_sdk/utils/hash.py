"""
Hash primitive used across the protocol: SHA-512/256 (FIPS 180-4).

CPython's hashlib only exposes "sha512_256" when the linked OpenSSL provides
it, so we go through `cryptography`, which always ships the algorithm.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes

from .bytes import BytesLike, require_bytes

DIGEST_BYTES = 32


def sha512_256(data: BytesLike) -> bytes:
    """Return the 32-byte SHA-512/256 digest of *data* (bytes-like only)."""
    h = hashes.Hash(hashes.SHA512_256())
    h.update(require_bytes(data))
    return h.finalize()


def sha512_256_hex(data: BytesLike, *, prefix: bool = False) -> str:
    hexed = sha512_256(data).hex()
    return "0x" + hexed if prefix else hexed


__all__ = ["DIGEST_BYTES", "sha512_256", "sha512_256_hex"]
