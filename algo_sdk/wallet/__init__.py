"""
algo_sdk.wallet
===============

Key material: 25-word mnemonics, Ed25519 signers and account helpers.
"""

from .account import (
    Account,
    generate_account,
    master_derivation_key_to_mnemonic,
    mnemonic_to_master_derivation_key,
    mnemonic_to_secret_key,
    secret_key_to_mnemonic,
)
from .mnemonic import (
    MNEMONIC_WORDS,
    SEED_BYTES,
    WORDLIST,
    mnemonic_from_seed,
    random_seed,
    seed_from_mnemonic,
    validate_mnemonic,
)
from .signer import KeyPair, Signer, verify_signature

__all__ = [
    "Account",
    "generate_account",
    "secret_key_to_mnemonic",
    "mnemonic_to_secret_key",
    "mnemonic_to_master_derivation_key",
    "master_derivation_key_to_mnemonic",
    "MNEMONIC_WORDS",
    "SEED_BYTES",
    "WORDLIST",
    "mnemonic_from_seed",
    "seed_from_mnemonic",
    "validate_mnemonic",
    "random_seed",
    "KeyPair",
    "Signer",
    "verify_signature",
]
