"""
algo_sdk.wallet.signer
======================

Ed25519 signers for the SDK.

A thin, typed facade over `cryptography`'s Ed25519 implementation. Key
generation, signing and verification are delegated entirely to the library;
this module only fixes the key formats used by the protocol:

- seed        : 32 random bytes, the root secret
- public key  : 32 raw bytes
- secret key  : 64 bytes, seed || public key (the layout produced by NaCl's
                `crypto_sign_keypair`, which other SDKs exchange)
- signature   : 64 raw bytes

Domain separation
-----------------
`sign(message, domain=b"TX")` signs `domain || message`. Records build their
own prefixed pre-image (see `algo_sdk.types`), so pass `domain` only when the
message is not already prefixed.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .. import address as _address
from ..errors import ValidationError
from ..utils.bytes import BytesLike, is_bytes_like
from .mnemonic import SEED_BYTES, random_seed

PUBLIC_KEY_BYTES = 32
SECRET_KEY_BYTES = 64
SIGNATURE_BYTES = 64

__all__ = [
    "PUBLIC_KEY_BYTES",
    "SECRET_KEY_BYTES",
    "SIGNATURE_BYTES",
    "KeyPair",
    "Signer",
    "verify_signature",
]


def _raw_public(pk: Ed25519PublicKey) -> bytes:
    return pk.public_bytes(Encoding.Raw, PublicFormat.Raw)


def _prefixed(message: BytesLike, domain: Optional[bytes]) -> bytes:
    msg = bytes(message)
    return bytes(domain) + msg if domain else msg


@dataclass(frozen=True)
class KeyPair:
    """
    Public/secret key pair.

    Attributes
    ----------
    public_key : bytes
        32 raw bytes.
    secret_key : bytes
        64 bytes, seed || public_key.
    """

    public_key: bytes
    secret_key: bytes

    @property
    def seed(self) -> bytes:
        return self.secret_key[:SEED_BYTES]

    @property
    def address(self) -> str:
        return _address.encode(self.public_key)

    def __repr__(self) -> str:
        # Never render secret material.
        return f"KeyPair(address={self.address!r})"


class Signer:
    """
    Ed25519 signer bound to one key pair.

    Construct with `from_seed`, `from_secret_key` or `generate`.
    """

    __slots__ = ("_sk", "keypair")

    def __init__(self, private_key: Ed25519PrivateKey, keypair: KeyPair) -> None:
        self._sk = private_key
        self.keypair = keypair

    # ---- constructors ----

    @classmethod
    def from_seed(cls, seed: BytesLike) -> "Signer":
        """Derive the key pair deterministically from a 32-byte seed."""
        if not is_bytes_like(seed) or len(seed) != SEED_BYTES:
            raise ValidationError("seed must be 32 bytes", field="seed")
        seed = bytes(seed)
        sk = Ed25519PrivateKey.from_private_bytes(seed)
        pk = _raw_public(sk.public_key())
        return cls(sk, KeyPair(public_key=pk, secret_key=seed + pk))

    @classmethod
    def from_secret_key(cls, secret_key: BytesLike) -> "Signer":
        """
        Load a 64-byte secret key (seed || public key). The embedded public
        key must match the one derived from the seed.
        """
        if not is_bytes_like(secret_key) or len(secret_key) != SECRET_KEY_BYTES:
            raise ValidationError("secret key must be 64 bytes", field="secret_key")
        secret_key = bytes(secret_key)
        signer = cls.from_seed(secret_key[:SEED_BYTES])
        if not hmac.compare_digest(signer.public_key, secret_key[SEED_BYTES:]):
            raise ValidationError(
                "secret key public half does not match its seed", field="secret_key"
            )
        return signer

    @classmethod
    def generate(cls) -> "Signer":
        """Fresh key pair from the OS CSPRNG."""
        return cls.from_seed(random_seed())

    # ---- accessors ----

    @property
    def public_key(self) -> bytes:
        return self.keypair.public_key

    @property
    def secret_key(self) -> bytes:
        return self.keypair.secret_key

    @property
    def address(self) -> str:
        return self.keypair.address

    # ---- operations ----

    def sign(self, message: BytesLike, *, domain: Optional[bytes] = None) -> bytes:
        """Sign `domain || message` and return the 64-byte signature."""
        return self._sk.sign(_prefixed(message, domain))

    def verify(
        self, message: BytesLike, signature: BytesLike, *, domain: Optional[bytes] = None
    ) -> bool:
        return verify_signature(self.public_key, _prefixed(message, domain), signature)

    def __repr__(self) -> str:
        return f"Signer(address={self.address!r})"


def verify_signature(public_key: BytesLike, message: BytesLike, signature: BytesLike) -> bool:
    """
    Verify an Ed25519 signature. Returns False (never raises) on a bad
    signature or malformed key/signature lengths.
    """
    if not (is_bytes_like(public_key) and is_bytes_like(signature) and is_bytes_like(message)):
        return False
    if len(public_key) != PUBLIC_KEY_BYTES or len(signature) != SIGNATURE_BYTES:
        return False
    try:
        Ed25519PublicKey.from_public_bytes(bytes(public_key)).verify(
            bytes(signature), bytes(message)
        )
    except (InvalidSignature, ValueError):
        return False
    return True
