"""
Algorand SDK, Python
Convenience exports for the most common client APIs: accounts and mnemonics,
canonical encoding, and transaction / bid signing.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import SDKConfig  # noqa: F401
from .errors import (  # noqa: F401
    AlgoSdkError,
    BuilderTypeError,
    ChecksumMismatch,
    DecodeError,
    EncodeError,
    InvalidAddress,
    InvalidMnemonic,
    ValidationError,
)

# Addresses
from .address import Address, is_valid_address  # noqa: F401

# Encoding
from .encoding.canonical import decode as decode_obj  # noqa: F401
from .encoding.canonical import encode as encode_obj  # noqa: F401

# Wallet
from .wallet.account import (  # noqa: F401
    generate_account,
    master_derivation_key_to_mnemonic,
    mnemonic_to_master_derivation_key,
    mnemonic_to_secret_key,
    secret_key_to_mnemonic,
)
from .wallet.signer import Signer  # noqa: F401

# Records & signing
from .types import Bid, SignedBid, SignedTransaction, Transaction  # noqa: F401
from .tx.sign import sign_bid, sign_transaction, unpack_signed, verify_blob  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "SDKConfig",
    "AlgoSdkError", "BuilderTypeError", "ChecksumMismatch", "DecodeError",
    "EncodeError", "InvalidAddress", "InvalidMnemonic", "ValidationError",
    # Address
    "Address", "is_valid_address",
    # Encoding
    "encode_obj", "decode_obj",
    # Wallet
    "generate_account", "secret_key_to_mnemonic", "mnemonic_to_secret_key",
    "mnemonic_to_master_derivation_key", "master_derivation_key_to_mnemonic",
    "Signer",
    # Records & signing
    "Transaction", "SignedTransaction", "Bid", "SignedBid",
    "sign_transaction", "sign_bid", "unpack_signed", "verify_blob",
]
