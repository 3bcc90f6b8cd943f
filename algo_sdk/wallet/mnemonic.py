"""
25-word mnemonics for 32-byte seeds.

Format
------
- Wordlist: the BIP-39 English list (2048 words, 11 bits per word), taken from
  the `mnemonic` (Trezor) package and frozen at import.
- The seed is packed into 11-bit groups least-significant bit first: each
  byte is shifted in above the bits already buffered, and a group is emitted
  whenever 11 bits are available. 256 bits give 23 full groups plus a final
  group holding 3 data bits and 8 zero bits, i.e. 24 words.
- A 25th checksum word is appended: the low 11 bits (little-endian) of the
  first two bytes of SHA-512/256(seed).

This is *not* BIP-39: there is no PBKDF2 stretching and the phrase is the seed
itself, so `mnemonic_from_seed` / `seed_from_mnemonic` are exact inverses.

    >>> phrase = mnemonic_from_seed(bytes(32))
    >>> phrase.split()[-1]
    'invest'
    >>> seed_from_mnemonic(phrase) == bytes(32)
    True
"""

from __future__ import annotations

import logging
import secrets
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from mnemonic import Mnemonic

from ..errors import InvalidMnemonic
from ..utils.bytes import BytesLike, is_bytes_like
from ..utils.hash import sha512_256

log = logging.getLogger("algo_sdk.wallet.mnemonic")

SEED_BYTES = 32
MNEMONIC_WORDS = 25
BITS_PER_WORD = 11

_MASK = (1 << BITS_PER_WORD) - 1
# 24 words carry 264 bits: the 256-bit seed plus one zero padding byte.
_DATA_WORDS = MNEMONIC_WORDS - 1
_PACKED_BYTES = SEED_BYTES + 1


def _load_wordlist() -> Tuple[str, ...]:
    words = tuple(Mnemonic("english").wordlist)
    if len(words) != 1 << BITS_PER_WORD or len(set(words)) != len(words):
        raise RuntimeError("BIP-39 English wordlist must hold 2048 distinct words")
    return words


WORDLIST: Tuple[str, ...] = _load_wordlist()
WORD_INDEX: Mapping[str, int] = MappingProxyType({w: i for i, w in enumerate(WORDLIST)})


# ---------- bit packing ----------


def _to_uint11(data: bytes) -> List[int]:
    out: List[int] = []
    acc = 0
    acc_bits = 0
    for octet in data:
        acc |= octet << acc_bits
        acc_bits += 8
        if acc_bits >= BITS_PER_WORD:
            out.append(acc & _MASK)
            acc >>= BITS_PER_WORD
            acc_bits -= BITS_PER_WORD
    if acc_bits:
        out.append(acc)
    return out


def _from_uint11(groups: Sequence[int]) -> bytes:
    out = bytearray()
    acc = 0
    acc_bits = 0
    for g in groups:
        acc |= g << acc_bits
        acc_bits += BITS_PER_WORD
        while acc_bits >= 8:
            out.append(acc & 0xFF)
            acc >>= 8
            acc_bits -= 8
    if acc_bits:
        out.append(acc)
    return bytes(out)


def _checksum_index(seed: bytes) -> int:
    h = sha512_256(seed)
    return (h[0] | (h[1] << 8)) & _MASK


# ---------- Public API ----------


def mnemonic_from_seed(seed: BytesLike) -> str:
    """
    Encode a 32-byte seed as a 25-word phrase (single spaces).

    Raises InvalidMnemonic if `seed` is not exactly 32 bytes.
    """
    if not is_bytes_like(seed) or len(seed) != SEED_BYTES:
        raise InvalidMnemonic("seed must be 32 bytes")
    seed = bytes(seed)
    indices = _to_uint11(seed)
    indices.append(_checksum_index(seed))
    return " ".join(WORDLIST[i] for i in indices)


def seed_from_mnemonic(phrase: str) -> bytes:
    """
    Decode a 25-word phrase back to its 32-byte seed.

    Words are matched exactly against the wordlist (no case folding). Raises
    InvalidMnemonic on: wrong word count, unknown word, non-zero padding bits,
    or checksum word mismatch.
    """
    if not isinstance(phrase, str):
        raise InvalidMnemonic("mnemonic must be a string")
    words = phrase.split()
    if len(words) != MNEMONIC_WORDS:
        raise InvalidMnemonic("mnemonic must have 25 words", words=len(words))
    try:
        indices = [WORD_INDEX[w] for w in words]
    except KeyError as e:
        raise InvalidMnemonic("unknown word in mnemonic", word=str(e.args[0])) from e

    packed = _from_uint11(indices[:_DATA_WORDS])
    if len(packed) != _PACKED_BYTES or packed[-1] != 0:
        raise InvalidMnemonic("mnemonic padding bits must be zero")
    seed = packed[:SEED_BYTES]
    if indices[-1] != _checksum_index(seed):
        log.debug("mnemonic checksum word mismatch")
        raise InvalidMnemonic("mnemonic checksum mismatch")
    return seed


def validate_mnemonic(phrase: str) -> bool:
    """True iff `phrase` decodes to a seed. Never raises."""
    try:
        seed_from_mnemonic(phrase)
    except InvalidMnemonic:
        return False
    return True


def random_seed() -> bytes:
    """Fresh 32-byte seed from the OS CSPRNG."""
    return secrets.token_bytes(SEED_BYTES)


__all__ = [
    "SEED_BYTES",
    "MNEMONIC_WORDS",
    "WORDLIST",
    "WORD_INDEX",
    "mnemonic_from_seed",
    "seed_from_mnemonic",
    "validate_mnemonic",
    "random_seed",
]
