# SPDX-License-Identifier: Apache-2.0
"""
`algo-sdk` CLI: every command through Typer's CliRunner, plus `main()`.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from algo_sdk.cli.main import app, main
from algo_sdk.encoding.canonical import decode
from algo_sdk.types import Bid
from algo_sdk.wallet.account import mnemonic_to_secret_key
from algo_sdk.wallet.mnemonic import mnemonic_from_seed

from .vectors import (
    GOLDEN_BLOB,
    GOLDEN_TXID,
    RECEIVER_ADDR,
    SENDER_ADDR,
    SENDER_PK,
    SENDER_SEED,
    ZERO_SEED_ADDR,
    ZERO_SEED_MNEMONIC,
)

runner = CliRunner()

SENDER_MNEMONIC = mnemonic_from_seed(SENDER_SEED)


def _json(result) -> dict:
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "algo-sdk 0.1.0"


def test_env_reports_active_config(set_config):
    set_config(min_fee=2500)
    out = _json(runner.invoke(app, ["env"]))
    assert out["min_fee"] == 2500
    assert out["max_note_bytes"] == 1024
    assert out["sdk_version"] == "0.1.0"


def test_new_account_is_self_consistent():
    out = _json(runner.invoke(app, ["new-account"]))
    assert set(out) == {"addr", "sk", "mnemonic"}
    assert len(out["sk"]) == 128
    assert len(out["mnemonic"].split()) == 25
    assert mnemonic_to_secret_key(out["mnemonic"])["addr"] == out["addr"]


def test_address_of_option_and_env():
    out = _json(runner.invoke(app, ["address-of", "-m", ZERO_SEED_MNEMONIC]))
    assert out == {"addr": ZERO_SEED_ADDR}

    out = _json(runner.invoke(app, ["address-of"], env={"ALGO_SDK_MNEMONIC": SENDER_MNEMONIC}))
    assert out == {"addr": SENDER_ADDR}


def test_address_of_bad_mnemonic():
    result = runner.invoke(app, ["address-of", "-m", "abandon " * 25])
    assert result.exit_code == 1
    assert "SDK/INVALID_MNEMONIC" in result.output


def test_validate_address():
    out = _json(runner.invoke(app, ["validate-address", ZERO_SEED_ADDR]))
    assert out == {"address": ZERO_SEED_ADDR, "valid": True}

    result = runner.invoke(app, ["validate-address", ZERO_SEED_ADDR[:-1] + "A"])
    assert result.exit_code == 1
    assert json.loads(result.stdout)["valid"] is False


def test_decode_signed_transaction():
    out = _json(runner.invoke(app, ["decode", GOLDEN_BLOB.hex()]))
    assert out["kind"] == "SignedTransaction"
    assert out["verified"] is True
    assert out["txID"] == GOLDEN_TXID
    assert out["value"]["txn"]["type"] == "pay"
    assert out["value"]["txn"]["rcv"] == "11" * 32


def test_decode_plain_value():
    out = _json(runner.invoke(app, ["decode", "82a161c40101a16201"]))
    assert out == {"value": {"a": "01", "b": 1}}
    assert _json(runner.invoke(app, ["decode", "0x82A161C40101A16201"])) == out


@pytest.mark.parametrize("data", ["zz", "abc", "c1", "81a16101c0", "91" * 1000 + "01"])
def test_decode_rejects_bad_input(data: str):
    result = runner.invoke(app, ["decode", data])
    assert result.exit_code == 1
    assert "error" in result.output


def test_sign_txn_golden():
    args = [
        "sign-txn",
        "--to", RECEIVER_ADDR,
        "--amount", "1000",
        "--fee", "10",
        "--first-round", "51",
        "--last-round", "61",
        "-m", SENDER_MNEMONIC,
    ]
    out = _json(runner.invoke(app, args))
    assert out == {"txID": GOLDEN_TXID, "blob": GOLDEN_BLOB.hex()}


def test_sign_txn_per_byte_fee():
    args = [
        "sign-txn",
        "--to", RECEIVER_ADDR,
        "--amount", "1000",
        "--fee", "10",
        "--first-round", "51",
        "--last-round", "61",
        "--note", "0102",
        "--per-byte-fee",
    ]
    out = _json(runner.invoke(app, args, env={"ALGO_SDK_MNEMONIC": SENDER_MNEMONIC}))
    txn = decode(bytes.fromhex(out["blob"]))["txn"]
    assert txn["note"] == b"\x01\x02"
    # 181 bytes for the golden blob, plus "note" key (5) and 2-byte bin (4).
    assert txn["fee"] == 10 * 190


def test_sign_txn_validation_error():
    args = [
        "sign-txn",
        "--to", RECEIVER_ADDR,
        "--first-round", "61",
        "--last-round", "51",
        "-m", SENDER_MNEMONIC,
    ]
    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "SDK/VALIDATION" in result.output


def test_sign_bid_matches_library():
    args = [
        "sign-bid",
        "--auction-key", RECEIVER_ADDR,
        "--bid-amount", "1000",
        "--max-price", "10",
        "--bid-id", "51",
        "--auction-id", "61",
        "-m", SENDER_MNEMONIC,
    ]
    out = _json(runner.invoke(app, args))
    expected = Bid(
        bidder=SENDER_ADDR,
        bid_amount=1000,
        max_price=10,
        bid_id=51,
        auction_key=RECEIVER_ADDR,
        auction_id=61,
    ).sign(SENDER_SEED + SENDER_PK)
    assert out["blob"] == expected.blob.hex()
    assert out["note"] == expected.to_note().hex()


def test_main_returns_exit_codes(capsys):
    assert main(["version"]) == 0
    assert "algo-sdk 0.1.0" in capsys.readouterr().out
    assert main(["validate-address", "nope"]) == 1
