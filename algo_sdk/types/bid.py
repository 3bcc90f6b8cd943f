"""
algo_sdk.types.bid
==================

Auction bids.

Wire form::

    {
      "aid":    <u64>      auction id
      "auc":    <bytes32>  auction key (public key of the auction)
      "bidder": <bytes32>  bidder public key
      "cur":    <u64>      bid amount (currency units)
      "id":     <u64>      bid id
      "price":  <u64>      maximum price
    }

Signing pre-image: b"aB" || canonical bytes. The distinct prefix keeps a bid
signature from ever verifying as a transaction signature and vice versa.

A signed bid travels inside a transaction note as `SignedBid.to_note()`:
canonical msgpack of {"t": "b", "b": {"sig": ..., "bid": ...}}.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, ClassVar, Dict, Mapping, Optional

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
    coerce_u64,
    remap_fields,
)

log = logging.getLogger("algo_sdk.types.bid")

BID_PREFIX = b"aB"
NOTE_TAG = "b"

_FIELDS = ("bidder", "bid_amount", "max_price", "bid_id", "auction_key", "auction_id")

# Names used by the JavaScript SDK's bid builder.
_ALIASES = {
    "bidderKey": "bidder",
    "bidAmount": "bid_amount",
    "maxPrice": "max_price",
    "bidID": "bid_id",
    "auctionKey": "auction_key",
    "auctionID": "auction_id",
}

_WIRE_SCHEMA: Dict[str, type] = {
    "aid": int,
    "auc": bytes,
    "bidder": bytes,
    "cur": int,
    "id": int,
    "price": int,
}


@dataclass(frozen=True)
class Bid(Record):
    bidder: Optional[Address] = None
    bid_amount: int = 0
    max_price: int = 0
    bid_id: int = 0
    auction_key: Optional[Address] = None
    auction_id: int = 0

    PREFIX: ClassVar[bytes] = BID_PREFIX
    BLOB_KEY: ClassVar[str] = "bid"

    def __post_init__(self) -> None:
        self._set("bidder", coerce_address("bidder", self.bidder, required=True))
        self._set("auction_key", coerce_address("auction_key", self.auction_key, required=True))
        for name in ("bid_amount", "max_price", "bid_id", "auction_id"):
            self._set(name, coerce_u64(name, getattr(self, name)))

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "Bid":
        """Build from snake_case names or the JavaScript SDK's names."""
        return cls(**remap_fields("Bid", fields, _FIELDS, _ALIASES))

    @classmethod
    def from_canonical(cls, obj: Mapping[str, Any]) -> "Bid":
        obj = check_wire_form("Bid", obj, _WIRE_SCHEMA)
        return cls(
            bidder=obj.get("bidder"),
            bid_amount=obj.get("cur", 0),
            max_price=obj.get("price", 0),
            bid_id=obj.get("id", 0),
            auction_key=obj.get("auc"),
            auction_id=obj.get("aid", 0),
        )

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "aid": self.auction_id,
            "auc": address_bytes(self.auction_key),
            "bidder": address_bytes(self.bidder),
            "cur": self.bid_amount,
            "id": self.bid_id,
            "price": self.max_price,
        }

    def sign(self, secret_key: Any) -> "SignedBid":
        """Sign with the bidder's 64-byte secret key (or a `Signer`)."""
        signer = self._signer_for(secret_key, self.bidder, "bidder")
        sig = signer.sign(self.bytes_to_sign())
        log.debug("bid signed", extra={"bid_id": self.bid_id, "auction_id": self.auction_id})
        return SignedBid(bid=self, signature=sig)

    def sign_bid(self, secret_key: Any) -> bytes:
        """Sign and return the canonical blob {"sig", "bid"}."""
        return self.sign(secret_key).blob


@dataclass(frozen=True)
class SignedBid:
    bid: Bid
    signature: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.bid, Bid):
            raise ValidationError("bid must be a Bid", field="bid")
        sig = coerce_bytes("signature", self.signature)
        if len(sig) != SIGNATURE_BYTES:
            raise ValidationError("signature must be 64 bytes", field="signature", length=len(sig))
        object.__setattr__(self, "signature", sig)

    def _envelope(self) -> Dict[str, Any]:
        return {"sig": self.signature, "bid": self.bid.to_canonical()}

    @cached_property
    def blob(self) -> bytes:
        return encode(self._envelope())

    def to_note(self) -> bytes:
        """Canonical note payload {"t": "b", "b": {"sig", "bid"}}."""
        return encode({"t": NOTE_TAG, "b": self._envelope()})

    def verify(self) -> bool:
        return verify_signature(
            self.bid.bidder.public_key, self.bid.bytes_to_sign(), self.signature
        )

    @classmethod
    def from_envelope(cls, obj: Any) -> "SignedBid":
        if not isinstance(obj, dict) or set(obj) != {"sig", "bid"}:
            raise DecodeError("not a signed bid")
        try:
            return cls(bid=Bid.from_canonical(obj["bid"]), signature=obj["sig"])
        except ValidationError as e:
            raise DecodeError("signed bid has invalid fields", reason=e.message) from e

    @classmethod
    def from_blob(cls, blob: bytes) -> "SignedBid":
        """Parse a signed bid blob or a bid note. Raises DecodeError otherwise."""
        obj = decode(blob)
        if isinstance(obj, dict) and obj.get("t") == NOTE_TAG and set(obj) == {"t", "b"}:
            obj = obj["b"]
        return cls.from_envelope(obj)


__all__ = ["BID_PREFIX", "Bid", "SignedBid"]
