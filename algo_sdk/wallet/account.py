"""
Account helpers mirroring the JavaScript SDK's top-level functions.

Accounts are plain dicts `{"addr": <address>, "sk": <64-byte secret key>}` so
they can be handed straight to `sign_transaction` / `sign_bid`.

The "master derivation key" used by key-management daemons is a 32-byte value
with the same mnemonic encoding as a seed.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from .. import address as _address
from ..errors import ValidationError
from ..utils.bytes import BytesLike, is_bytes_like
from .mnemonic import SEED_BYTES, mnemonic_from_seed, seed_from_mnemonic
from .signer import SECRET_KEY_BYTES, Signer

log = logging.getLogger("algo_sdk.wallet.account")

Account = Dict[str, Any]

__all__ = [
    "Account",
    "generate_account",
    "is_valid_address",
    "secret_key_to_mnemonic",
    "mnemonic_to_secret_key",
    "mnemonic_to_master_derivation_key",
    "master_derivation_key_to_mnemonic",
]


def _account(signer: Signer) -> Account:
    return {"addr": signer.address, "sk": signer.secret_key}


def generate_account() -> Account:
    """New random account."""
    signer = Signer.generate()
    log.debug("account generated", extra={"addr": signer.address})
    return _account(signer)


def is_valid_address(addr: Any) -> bool:
    return _address.is_valid_address(addr)


def secret_key_to_mnemonic(sk: BytesLike) -> str:
    """Mnemonic of the seed half (first 32 bytes) of a 64-byte secret key."""
    if not is_bytes_like(sk) or len(sk) != SECRET_KEY_BYTES:
        raise ValidationError("secret key must be 64 bytes", field="sk")
    return mnemonic_from_seed(bytes(sk[:SEED_BYTES]))


def mnemonic_to_secret_key(mn: str) -> Account:
    """Recover {"addr", "sk"} from a 25-word mnemonic. Raises InvalidMnemonic."""
    return _account(Signer.from_seed(seed_from_mnemonic(mn)))


def mnemonic_to_master_derivation_key(mn: str) -> bytes:
    return seed_from_mnemonic(mn)


def master_derivation_key_to_mnemonic(mdk: BytesLike) -> str:
    return mnemonic_from_seed(mdk)
