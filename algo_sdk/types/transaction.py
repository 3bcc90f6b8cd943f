"""
algo_sdk.types.transaction
==========================

Payment transactions.

Wire form (canonical msgpack map; default-valued entries are omitted)::

    {
      "amt":   <u64>     amount in microalgos
      "close": <bytes32> close-remainder-to public key
      "fee":   <u64>     total fee in microalgos
      "fv":    <u64>     first valid round
      "gen":   <str>     genesis id
      "gh":    <bytes32> genesis hash
      "lv":    <u64>     last valid round
      "note":  <bytes>   arbitrary note
      "rcv":   <bytes32> receiver public key
      "snd":   <bytes32> sender public key
      "type":  "pay"
    }

Signing pre-image: b"TX" || canonical bytes. Identifier: the address codec
applied to SHA-512/256 of the pre-image (58 characters, checksummed).

Fees
----
`flat_fee=True` (default) takes `fee` as the total. With `flat_fee=False`,
`fee` is a per-byte rate: it is multiplied by the estimated size of the signed
blob and raised to `SDKConfig.min_fee`. The stored record is always flat, so
`dataclasses.replace()` never multiplies twice.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, ClassVar, Dict, Mapping, Optional

from .. import address as _address
from ..address import Address
from ..encoding.canonical import decode, encode
from ..errors import DecodeError, ValidationError
from ..wallet.signer import SIGNATURE_BYTES, verify_signature
from .record import (
    Record,
    address_bytes,
    check_wire_form,
    coerce_address,
    coerce_bytes,
    coerce_str,
    coerce_u64,
    limits,
    remap_fields,
)

log = logging.getLogger("algo_sdk.types.transaction")

TX_PREFIX = b"TX"
PAY_TYPE = "pay"
GENESIS_HASH_BYTES = 32

_FIELDS = (
    "sender",
    "receiver",
    "amount",
    "fee",
    "first_round",
    "last_round",
    "note",
    "genesis_id",
    "genesis_hash",
    "close_remainder_to",
    "flat_fee",
)

# Names used by the JavaScript SDK's transaction builder.
_ALIASES = {
    "from": "sender",
    "to": "receiver",
    "firstRound": "first_round",
    "lastRound": "last_round",
    "genesisID": "genesis_id",
    "genesisHash": "genesis_hash",
    "closeRemainderTo": "close_remainder_to",
    "flatFee": "flat_fee",
}

_WIRE_SCHEMA: Dict[str, type] = {
    "amt": int,
    "close": bytes,
    "fee": int,
    "fv": int,
    "gen": str,
    "gh": bytes,
    "lv": int,
    "note": bytes,
    "rcv": bytes,
    "snd": bytes,
    "type": str,
}

# Stand-in values used only to size a not-yet-signed transaction.
_PLACEHOLDER_SIG = bytes(SIGNATURE_BYTES)
_PLACEHOLDER_SENDER = bytes(32)


@dataclass(frozen=True)
class Transaction(Record):
    sender: Optional[Address] = None
    receiver: Optional[Address] = None
    amount: int = 0
    fee: int = 0
    first_round: int = 0
    last_round: int = 0
    note: bytes = b""
    genesis_id: str = ""
    genesis_hash: bytes = b""
    close_remainder_to: Optional[Address] = None
    flat_fee: bool = True

    PREFIX: ClassVar[bytes] = TX_PREFIX
    BLOB_KEY: ClassVar[str] = "txn"

    def __post_init__(self) -> None:
        cfg = limits()

        self._set("sender", coerce_address("sender", self.sender))
        self._set("receiver", coerce_address("receiver", self.receiver, required=True))
        self._set("close_remainder_to", coerce_address("close_remainder_to", self.close_remainder_to))
        for name in ("amount", "fee", "first_round", "last_round"):
            self._set(name, coerce_u64(name, getattr(self, name)))
        self._set("note", coerce_bytes("note", self.note, max_len=cfg.max_note_bytes))
        self._set("genesis_id", coerce_str("genesis_id", self.genesis_id))
        self._set("genesis_hash", coerce_bytes("genesis_hash", self.genesis_hash))
        if not isinstance(self.flat_fee, bool):
            raise ValidationError("flat_fee must be a boolean", field="flat_fee")

        if self.genesis_hash and len(self.genesis_hash) != GENESIS_HASH_BYTES:
            raise ValidationError(
                "genesis_hash must be 32 bytes", field="genesis_hash", length=len(self.genesis_hash)
            )
        if self.last_round < self.first_round:
            raise ValidationError(
                "last_round must not precede first_round",
                field="last_round",
                first_round=self.first_round,
                last_round=self.last_round,
            )
        if self.last_round - self.first_round > cfg.max_txn_life:
            raise ValidationError(
                "validity window too long",
                field="last_round",
                window=self.last_round - self.first_round,
                max=cfg.max_txn_life,
            )

        if not self.flat_fee:
            total = max(self.fee * self.estimate_size(), cfg.min_fee)
            self._set("fee", coerce_u64("fee", total))
            self._set("flat_fee", True)

    # ---- construction helpers ----

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "Transaction":
        """
        Build from a mapping of field names. Accepts snake_case names and the
        JavaScript SDK's names (`from`, `to`, `firstRound`, `genesisID`, ...).
        """
        return cls(**remap_fields("Transaction", fields, _FIELDS, _ALIASES))

    @classmethod
    def from_canonical(cls, obj: Mapping[str, Any]) -> "Transaction":
        """Rebuild from a decoded wire map, restoring omitted defaults."""
        obj = check_wire_form("Transaction", obj, _WIRE_SCHEMA)
        if obj.get("type") != PAY_TYPE:
            raise ValidationError("unsupported transaction type", field="type", got=obj.get("type"))
        return cls(
            sender=obj.get("snd"),
            receiver=obj.get("rcv"),
            amount=obj.get("amt", 0),
            fee=obj.get("fee", 0),
            first_round=obj.get("fv", 0),
            last_round=obj.get("lv", 0),
            note=obj.get("note", b""),
            genesis_id=obj.get("gen", ""),
            genesis_hash=obj.get("gh", b""),
            close_remainder_to=obj.get("close"),
        )

    def with_sender(self, sender: Any) -> "Transaction":
        return dataclasses.replace(self, sender=sender)

    # ---- encoding ----

    def _wire(self, sender: Optional[bytes]) -> Dict[str, Any]:
        return {
            "amt": self.amount,
            "close": address_bytes(self.close_remainder_to),
            "fee": self.fee,
            "fv": self.first_round,
            "gen": self.genesis_id,
            "gh": self.genesis_hash,
            "lv": self.last_round,
            "note": self.note,
            "rcv": address_bytes(self.receiver),
            "snd": sender,
            "type": PAY_TYPE,
        }

    def to_canonical(self) -> Dict[str, Any]:
        """Wire map of the transaction. Requires a sender."""
        if self.sender is None:
            raise ValidationError("sender is required before encoding", field="sender")
        return self._wire(self.sender.public_key)

    def estimate_size(self) -> int:
        """Size in bytes of the signed blob this transaction would produce."""
        sender = address_bytes(self.sender) or _PLACEHOLDER_SENDER
        return len(encode({"sig": _PLACEHOLDER_SIG, "txn": self._wire(sender)}))

    def raw_txid(self) -> bytes:
        return self.raw_id()

    def txid(self) -> str:
        return _address.encode(self.raw_txid())

    # ---- signing ----

    def sign(self, secret_key: Any) -> "SignedTransaction":
        """
        Sign with a 64-byte secret key (or a `Signer`). The sender must be set
        and must be the signing key's address.
        """
        if self.sender is None:
            raise ValidationError("sender is required before signing", field="sender")
        signer = self._signer_for(secret_key, self.sender, "sender")
        sig = signer.sign(self.bytes_to_sign())
        log.debug("transaction signed", extra={"txid": self.txid()})
        return SignedTransaction(transaction=self, signature=sig)

    def sign_txn(self, secret_key: Any) -> bytes:
        """Sign and return the canonical blob {"sig", "txn"}."""
        return self.sign(secret_key).blob


@dataclass(frozen=True)
class SignedTransaction:
    transaction: Transaction
    signature: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.transaction, Transaction):
            raise ValidationError("transaction must be a Transaction", field="transaction")
        sig = coerce_bytes("signature", self.signature)
        if len(sig) != SIGNATURE_BYTES:
            raise ValidationError("signature must be 64 bytes", field="signature", length=len(sig))
        object.__setattr__(self, "signature", sig)

    @cached_property
    def blob(self) -> bytes:
        return encode({"sig": self.signature, "txn": self.transaction.to_canonical()})

    @property
    def txid(self) -> str:
        return self.transaction.txid()

    def verify(self) -> bool:
        """True iff the signature is valid for the sender over b"TX" || bytes."""
        txn = self.transaction
        if txn.sender is None:
            return False
        return verify_signature(txn.sender.public_key, txn.bytes_to_sign(), self.signature)

    @classmethod
    def from_blob(cls, blob: bytes) -> "SignedTransaction":
        """Parse a signed transaction blob. Raises DecodeError if it is not one."""
        obj = decode(blob)
        if not isinstance(obj, dict) or set(obj) != {"sig", "txn"}:
            raise DecodeError("not a signed transaction blob")
        try:
            return cls(transaction=Transaction.from_canonical(obj["txn"]), signature=obj["sig"])
        except ValidationError as e:
            raise DecodeError("signed transaction blob has invalid fields", reason=e.message) from e


__all__ = [
    "TX_PREFIX",
    "PAY_TYPE",
    "Transaction",
    "SignedTransaction",
]
