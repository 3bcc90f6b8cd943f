"""
algo_sdk.types
==============

Signable records: payment transactions and auction bids, plus their signed
forms. See `record.py` for the Built -> Encoded -> Signed lifecycle.
"""

from .bid import BID_PREFIX, Bid, SignedBid
from .record import Record
from .transaction import PAY_TYPE, TX_PREFIX, SignedTransaction, Transaction

__all__ = [
    "Record",
    "TX_PREFIX",
    "PAY_TYPE",
    "Transaction",
    "SignedTransaction",
    "BID_PREFIX",
    "Bid",
    "SignedBid",
]
