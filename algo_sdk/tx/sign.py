"""
algo_sdk.tx.sign
================

High-level signing entry points.

This module provides:
- `sign_transaction(txn, secret_key)` -> {"txID": str, "blob": bytes}
- `sign_bid(bid, secret_key)` -> bytes
- `unpack_signed(blob)` -> SignedTransaction | SignedBid
- `verify_blob(blob)` -> bool

`txn` / `bid` may be record instances or plain mappings of their fields (the
JavaScript SDK's camelCase names are accepted). Anything else raises
BuilderTypeError. All validation happens before any bytes are signed.

Examples
--------
    from algo_sdk.tx import sign_transaction

    out = sign_transaction(
        {"to": "CEIRCEIR...", "amount": 1000, "fee": 10, "firstRound": 51, "lastRound": 61},
        sk,
    )
    out["txID"], out["blob"]
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Union

from ..encoding.canonical import decode
from ..errors import AlgoSdkError, BuilderTypeError, DecodeError
from ..types.bid import NOTE_TAG, Bid, SignedBid
from ..types.transaction import SignedTransaction, Transaction
from ..wallet.signer import Signer

log = logging.getLogger("algo_sdk.tx")

SignedRecord = Union[SignedTransaction, SignedBid]

__all__ = [
    "sign_transaction",
    "sign_bid",
    "unpack_signed",
    "verify_blob",
]


def _as_transaction(txn: Any) -> Transaction:
    if isinstance(txn, Transaction):
        return txn
    if isinstance(txn, Mapping):
        return Transaction.from_fields(txn)
    raise BuilderTypeError("Transaction", txn)


def _as_bid(bid: Any) -> Bid:
    if isinstance(bid, Bid):
        return bid
    if isinstance(bid, Mapping):
        return Bid.from_fields(bid)
    raise BuilderTypeError("Bid", bid)


def sign_transaction(txn: Any, secret_key: Any) -> Dict[str, Any]:
    """
    Sign a payment transaction.

    The sender is filled in from `secret_key` when the transaction has none;
    a sender that differs from the key raises ValidationError. This differs
    from the JavaScript SDK's `signTransaction`, which always overwrites
    `from` with the key's address and so silently re-targets a transaction
    built for another account.

    Returns {"txID": <58-char identifier>, "blob": <signed canonical bytes>}.
    """
    record = _as_transaction(txn)
    signer = secret_key if isinstance(secret_key, Signer) else Signer.from_secret_key(secret_key)
    if record.sender is None:
        record = record.with_sender(signer.address)
    signed = record.sign(signer)
    log.info("transaction signed", extra={"txid": signed.txid})
    return {"txID": signed.txid, "blob": signed.blob}


def sign_bid(bid: Any, secret_key: Any) -> bytes:
    """Sign an auction bid and return the canonical blob {"sig", "bid"}."""
    record = _as_bid(bid)
    signed = record.sign(secret_key)
    log.info("bid signed", extra={"bid_id": record.bid_id, "auction_id": record.auction_id})
    return signed.blob


def unpack_signed(blob: bytes) -> SignedRecord:
    """
    Parse a signed blob of either kind (a bid note is accepted too).

    Raises DecodeError if the bytes are not a signed transaction or bid.
    """
    obj = decode(blob)
    if isinstance(obj, dict):
        if "txn" in obj:
            return SignedTransaction.from_blob(blob)
        if "bid" in obj or obj.get("t") == NOTE_TAG:
            return SignedBid.from_blob(blob)
    raise DecodeError("not a signed transaction or bid")


def verify_blob(blob: bytes) -> bool:
    """True iff `blob` parses as a signed record whose signature verifies."""
    try:
        signed = unpack_signed(blob)
    except AlgoSdkError as e:
        log.debug("blob rejected", extra={"reason": e.message})
        return False
    return signed.verify()
