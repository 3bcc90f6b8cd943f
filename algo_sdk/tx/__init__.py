"""
algo_sdk.tx
===========

Signing orchestration for transactions and bids.
"""

from .sign import sign_bid, sign_transaction, unpack_signed, verify_blob

__all__ = ["sign_transaction", "sign_bid", "unpack_signed", "verify_blob"]
