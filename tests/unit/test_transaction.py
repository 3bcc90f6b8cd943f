# SPDX-License-Identifier: Apache-2.0
"""
Payment transaction record: golden encoding, identifier and signature,
validation boundaries, fee modes and the immutable lifecycle.
"""

from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from algo_sdk.address import Address
from algo_sdk.encoding.canonical import decode, encode
from algo_sdk.errors import DecodeError, ValidationError
from algo_sdk.tx import verify_blob
from algo_sdk.types import SignedTransaction, Transaction

from .vectors import (
    GOLDEN_BLOB,
    GOLDEN_RAW_TXID,
    GOLDEN_SIG,
    GOLDEN_SIGNED_SIZE,
    GOLDEN_TXID,
    GOLDEN_TXN_BYTES,
    RECEIVER_ADDR,
    RECEIVER_PK,
    SENDER_ADDR,
    ZERO_SEED_ADDR,
)


def _golden(**overrides) -> Transaction:
    fields = dict(
        sender=SENDER_ADDR,
        receiver=RECEIVER_ADDR,
        amount=1000,
        fee=10,
        first_round=51,
        last_round=61,
    )
    fields.update(overrides)
    return Transaction(**fields)


# -- Golden vectors -----------------------------------------------------------


def test_golden_canonical_bytes():
    txn = _golden()
    assert txn.canonical_bytes == GOLDEN_TXN_BYTES
    assert txn.bytes_to_sign() == b"TX" + GOLDEN_TXN_BYTES


def test_golden_identifier():
    txn = _golden()
    assert txn.raw_txid() == GOLDEN_RAW_TXID
    assert txn.txid() == GOLDEN_TXID
    assert len(txn.txid()) == 58


def test_golden_signature_and_blob(sender):
    signed = _golden().sign(sender.secret_key)
    assert signed.signature == GOLDEN_SIG
    assert signed.blob == GOLDEN_BLOB
    assert signed.txid == GOLDEN_TXID
    assert signed.verify()
    assert _golden().sign_txn(sender) == GOLDEN_BLOB


def test_blob_decodes_to_sig_and_txn():
    obj = decode(GOLDEN_BLOB)
    assert set(obj) == {"sig", "txn"}
    assert obj["sig"] == GOLDEN_SIG
    assert obj["txn"]["rcv"] == RECEIVER_PK
    assert obj["txn"]["type"] == "pay"
    assert "note" not in obj["txn"] and "gen" not in obj["txn"]


def test_from_blob_roundtrip():
    signed = SignedTransaction.from_blob(GOLDEN_BLOB)
    assert signed.transaction == _golden()
    assert signed.verify()
    assert signed.blob == GOLDEN_BLOB


def test_tampered_blob_does_not_verify():
    tampered = GOLDEN_BLOB.replace(bytes.fromhex("cd03e8"), bytes.fromhex("cd03e9"))
    assert SignedTransaction.from_blob(tampered).verify() is False


# -- Canonical form -----------------------------------------------------------


def test_field_assignment_order_does_not_matter():
    a = Transaction(sender=SENDER_ADDR, receiver=RECEIVER_ADDR, amount=5, first_round=1, last_round=2)
    b = Transaction.from_fields(
        {"lastRound": 2, "firstRound": 1, "amount": 5, "to": RECEIVER_ADDR, "from": SENDER_ADDR}
    )
    assert a == b
    assert a.canonical_bytes == b.canonical_bytes


def test_zero_fields_are_structurally_absent():
    txn = _golden(amount=0, fee=0)
    assert b"amt" not in txn.canonical_bytes
    assert b"fee" not in txn.canonical_bytes


def test_optional_fields_are_encoded():
    txn = _golden(
        note=b"hi",
        genesis_id="testnet-v1.0",
        genesis_hash=b"\x07" * 32,
        close_remainder_to=ZERO_SEED_ADDR,
    )
    obj = decode(txn.canonical_bytes)
    assert obj["note"] == b"hi"
    assert obj["gen"] == "testnet-v1.0"
    assert obj["gh"] == b"\x07" * 32
    assert obj["close"] == Address.from_string(ZERO_SEED_ADDR).public_key
    assert list(obj) == sorted(obj)
    assert Transaction.from_canonical(obj) == txn


def test_encoding_requires_sender():
    txn = Transaction(receiver=RECEIVER_ADDR, amount=1)
    with pytest.raises(ValidationError) as ei:
        txn.canonical_bytes
    assert ei.value.field == "sender"
    with pytest.raises(ValidationError):
        txn.txid()


# -- Validation ---------------------------------------------------------------


def test_receiver_required():
    with pytest.raises(ValidationError) as ei:
        Transaction(sender=SENDER_ADDR, amount=1)
    assert ei.value.field == "receiver"


@pytest.mark.parametrize("bad", ["NOTANADDRESS", RECEIVER_ADDR.lower(), b"\x00" * 31, 12])
def test_malformed_receiver(bad):
    with pytest.raises(ValidationError) as ei:
        _golden(receiver=bad)
    assert ei.value.field == "receiver"


@pytest.mark.parametrize("field", ["amount", "fee", "first_round", "last_round"])
@pytest.mark.parametrize("bad", [-1, 1 << 64, True, 1.0, "1"])
def test_integer_fields_bounds(field: str, bad):
    with pytest.raises(ValidationError) as ei:
        _golden(**{field: bad})
    assert ei.value.field == field


def test_integer_upper_bound_is_inclusive():
    txn = _golden(amount=(1 << 64) - 1)
    assert decode(txn.canonical_bytes)["amt"] == (1 << 64) - 1


def test_round_window():
    assert _golden(first_round=10, last_round=10).last_round == 10
    with pytest.raises(ValidationError):
        _golden(first_round=10, last_round=9)
    assert _golden(first_round=0, last_round=1000).last_round == 1000
    with pytest.raises(ValidationError):
        _golden(first_round=0, last_round=1001)


def test_round_window_follows_config(set_config):
    set_config(max_txn_life=5)
    with pytest.raises(ValidationError):
        _golden(first_round=1, last_round=7)


def test_note_limit():
    assert len(_golden(note=b"\x01" * 1024).note) == 1024
    with pytest.raises(ValidationError) as ei:
        _golden(note=b"\x01" * 1025)
    assert ei.value.field == "note"


@pytest.mark.parametrize("field", ["note", "genesis_id"])
def test_text_fields_must_be_valid_utf8(field: str):
    with pytest.raises(ValidationError) as ei:
        _golden(**{field: "\ud800"})
    assert ei.value.field == field


def test_str_note_is_utf8_encoded():
    assert _golden(note="h\u00e9").note == b"h\xc3\xa9"


def test_genesis_hash_length():
    with pytest.raises(ValidationError):
        _golden(genesis_hash=b"\x01" * 31)


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError) as ei:
        Transaction.from_fields({"to": RECEIVER_ADDR, "amount": 1, "bogus": 1})
    assert ei.value.field == "bogus"


def test_duplicate_alias_rejected():
    with pytest.raises(ValidationError):
        Transaction.from_fields({"to": RECEIVER_ADDR, "receiver": RECEIVER_ADDR})


def test_from_canonical_rejects_wrong_type():
    obj = decode(GOLDEN_TXN_BYTES)
    obj["type"] = "keyreg"
    with pytest.raises(ValidationError):
        Transaction.from_canonical(obj)


def test_from_blob_rejects_other_shapes():
    with pytest.raises(DecodeError):
        SignedTransaction.from_blob(bytes.fromhex("81a3736967c401ff"))


@pytest.mark.parametrize(
    "key, value",
    [
        ("rcv", RECEIVER_ADDR),
        ("snd", SENDER_ADDR),
        ("note", "hi"),
        ("gh", "x" * 32),
        ("gen", b"testnet"),
        ("amt", True),
    ],
)
def test_from_blob_requires_wire_types(key: str, value):
    txn = decode(GOLDEN_TXN_BYTES)
    txn[key] = value
    blob = encode({"sig": GOLDEN_SIG, "txn": txn})
    with pytest.raises(DecodeError):
        SignedTransaction.from_blob(blob)
    assert verify_blob(blob) is False


# -- Fees ---------------------------------------------------------------------


def test_flat_fee_is_taken_as_is():
    assert _golden(fee=10).fee == 10


def test_per_byte_fee_multiplies_estimated_size():
    txn = _golden(fee=10, flat_fee=False)
    assert txn.fee == 10 * GOLDEN_SIGNED_SIZE
    assert txn.flat_fee is True


def test_per_byte_fee_respects_min_fee(set_config):
    assert _golden(fee=1, flat_fee=False).fee == 1000
    set_config(min_fee=5000)
    assert _golden(fee=1, flat_fee=False).fee == 5000


def test_per_byte_fee_without_sender_sizes_like_with_sender():
    a = _golden(fee=10, flat_fee=False)
    b = _golden(sender=None, fee=10, flat_fee=False)
    assert a.fee == b.fee


def test_replace_does_not_remultiply():
    txn = _golden(fee=10, flat_fee=False)
    assert dataclasses.replace(txn, note=b"x").fee == txn.fee


# -- Lifecycle ----------------------------------------------------------------


def test_records_are_immutable():
    txn = _golden()
    with pytest.raises(dataclasses.FrozenInstanceError):
        txn.amount = 5  # type: ignore[misc]


def test_with_sender_returns_new_record():
    txn = Transaction(receiver=RECEIVER_ADDR, amount=1000, fee=10, first_round=51, last_round=61)
    filled = txn.with_sender(SENDER_ADDR)
    assert txn.sender is None
    assert filled == _golden()


def test_signing_with_wrong_key_rejected(zero_signer):
    with pytest.raises(ValidationError) as ei:
        _golden().sign(zero_signer.secret_key)
    assert ei.value.field == "sender"


def test_same_record_signs_identically(sender):
    a = _golden().sign(sender.secret_key)
    b = _golden().sign(sender.secret_key)
    assert a.signature == b.signature and a.txid == b.txid


@given(
    amount=st.integers(min_value=0, max_value=(1 << 64) - 1),
    fee=st.integers(min_value=0, max_value=(1 << 64) - 1),
    first=st.integers(min_value=0, max_value=10_000),
    life=st.integers(min_value=0, max_value=1000),
    note=st.binary(max_size=64),
)
def test_canonical_roundtrip_property(amount, fee, first, life, note):
    txn = _golden(amount=amount, fee=fee, first_round=first, last_round=first + life, note=note)
    assert Transaction.from_canonical(decode(txn.canonical_bytes)) == txn
