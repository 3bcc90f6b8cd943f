"""
algo_sdk.cli.main
=================

`algo-sdk`: offline key, encoding and signing utilities.

Examples
--------
    $ algo-sdk version
    $ algo-sdk new-account
    $ algo-sdk address-of --mnemonic "abandon abandon ... invest"
    $ algo-sdk validate-address HNVCPPGOW2SC2YVDVDICU3YNONSTEFLXDXREHJR2YBEKDC2Z3IUZSC6YGI
    $ algo-sdk decode 82a3736967c440...
    $ algo-sdk sign-txn --to CEIR... --amount 1000 --fee 10 --first-round 51 --last-round 61
    $ algo-sdk sign-bid --auction-key CEIR... --bid-amount 10 --max-price 5 --bid-id 1 --auction-id 2

Configuration
-------------
- Mnemonic    : `--mnemonic` or env `ALGO_SDK_MNEMONIC` (signing commands)
- Log level   : `--log-level` or env `ALGO_SDK_LOG_LEVEL` (default: WARNING)
- Log format  : `--log-json` or env `ALGO_SDK_LOG_FORMAT=json`
- Record limits come from `SDKConfig.from_env()` (see `algo_sdk.config`).

All output is JSON on stdout. Failures print the error's `to_dict()` on stderr
and exit with status 1.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

import typer

from .. import config as _config
from .. import logging as alog
from ..address import is_valid_address
from ..encoding.canonical import decode as decode_canonical
from ..errors import AlgoSdkError
from ..tx.sign import sign_transaction, unpack_signed
from ..types.bid import Bid
from ..version import __version__ as SDK_VERSION
from ..wallet.account import generate_account, mnemonic_to_secret_key, secret_key_to_mnemonic

app = typer.Typer(
    name="algo-sdk",
    help="Algorand SDK CLI: accounts, mnemonics, canonical encoding and offline signing.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]


def _mnemonic_option() -> Any:
    return typer.Option(
        ...,
        "--mnemonic",
        "-m",
        help="25-word account mnemonic.",
        envvar="ALGO_SDK_MNEMONIC",
    )


def _parse_hex(text: str) -> bytes:
    """Hex argument (optional 0x prefix) to bytes; ValueError if malformed."""
    text = text.strip()
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if len(text) % 2:
        raise ValueError("hex input must have an even number of digits")
    return bytes.fromhex(text)


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _jsonable(v: Any) -> Any:
    if isinstance(v, bytes):
        return v.hex()
    if isinstance(v, dict):
        return {k: _jsonable(x) for k, x in v.items()}
    if isinstance(v, list):
        return [_jsonable(x) for x in v]
    return v


def _fail(err: Exception) -> None:
    payload = err.to_dict() if isinstance(err, AlgoSdkError) else {"message": str(err)}
    typer.echo(json.dumps({"error": payload}), err=True)
    raise typer.Exit(code=1)


@app.callback()
def _root(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Minimum log level.", envvar="ALGO_SDK_LOG_LEVEL"
    ),
    log_json: bool = typer.Option(False, "--log-json", help="Emit JSON log lines."),
) -> None:
    """Configure logging for this CLI process."""
    cfg = _config.get_config()
    overrides: Dict[str, Any] = {}
    if log_level:
        overrides["log_level"] = log_level
    if log_json:
        overrides["log_format"] = "json"
    if overrides:
        cfg = _config.SDKConfig.with_overrides(cfg, **overrides)
    alog.configure_from_config(cfg)


# --- commands ----------------------------------------------------------------


@app.command("version")
def version() -> None:
    """Print the SDK version."""
    typer.echo(f"algo-sdk {SDK_VERSION}")


@app.command("env")
def env() -> None:
    """Show the effective SDK configuration."""
    _print_json({**_config.get_config().to_dict(), "sdk_version": SDK_VERSION})


@app.command("new-account")
def new_account() -> None:
    """Generate a random account and print its address, secret key and mnemonic."""
    acct = generate_account()
    _print_json(
        {
            "addr": acct["addr"],
            "sk": acct["sk"].hex(),
            "mnemonic": secret_key_to_mnemonic(acct["sk"]),
        }
    )


@app.command("address-of")
def address_of(mnemonic: str = _mnemonic_option()) -> None:
    """Print the address controlled by a mnemonic."""
    try:
        acct = mnemonic_to_secret_key(mnemonic)
    except AlgoSdkError as e:
        _fail(e)
    _print_json({"addr": acct["addr"]})


@app.command("validate-address")
def validate_address(address: str = typer.Argument(..., help="Address to check.")) -> None:
    """Check an address; exits 1 when it is invalid."""
    ok = is_valid_address(address)
    _print_json({"address": address, "valid": ok})
    if not ok:
        raise typer.Exit(code=1)


@app.command("decode")
def decode(data: str = typer.Argument(..., help="Hex-encoded msgpack bytes.")) -> None:
    """Decode canonical msgpack (bytes are shown as hex)."""
    try:
        raw = _parse_hex(data)
    except ValueError as e:
        _fail(e)
    try:
        value = decode_canonical(raw)
    except AlgoSdkError as e:
        _fail(e)
    out: Dict[str, Any] = {"value": _jsonable(value)}
    try:
        signed = unpack_signed(raw)
    except AlgoSdkError:
        pass
    else:
        out["kind"] = type(signed).__name__
        out["verified"] = signed.verify()
        if hasattr(signed, "txid"):
            out["txID"] = signed.txid
    _print_json(out)


@app.command("sign-txn")
def sign_txn(
    to: str = typer.Option(..., "--to", help="Receiver address."),
    amount: int = typer.Option(0, "--amount", min=0, help="Amount in microalgos."),
    fee: int = typer.Option(0, "--fee", min=0, help="Fee (total, or per byte with --per-byte-fee)."),
    first_round: int = typer.Option(..., "--first-round", min=0),
    last_round: int = typer.Option(..., "--last-round", min=0),
    note: Optional[str] = typer.Option(None, "--note", help="Note as hex."),
    genesis_id: str = typer.Option("", "--genesis-id"),
    close_to: Optional[str] = typer.Option(None, "--close-to", help="Close remainder to."),
    per_byte_fee: bool = typer.Option(False, "--per-byte-fee"),
    mnemonic: str = _mnemonic_option(),
) -> None:
    """Sign a payment transaction; prints its txID and blob (hex)."""
    try:
        acct = mnemonic_to_secret_key(mnemonic)
        fields = {
            "to": to,
            "amount": amount,
            "fee": fee,
            "firstRound": first_round,
            "lastRound": last_round,
            "note": _parse_hex(note) if note else b"",
            "genesisID": genesis_id,
            "closeRemainderTo": close_to,
            "flatFee": not per_byte_fee,
        }
        out = sign_transaction(fields, acct["sk"])
    except (AlgoSdkError, ValueError) as e:
        _fail(e)
    _print_json({"txID": out["txID"], "blob": out["blob"].hex()})


@app.command("sign-bid")
def sign_bid(
    auction_key: str = typer.Option(..., "--auction-key", help="Auction address."),
    bid_amount: int = typer.Option(..., "--bid-amount", min=0),
    max_price: int = typer.Option(..., "--max-price", min=0),
    bid_id: int = typer.Option(..., "--bid-id", min=0),
    auction_id: int = typer.Option(..., "--auction-id", min=0),
    mnemonic: str = _mnemonic_option(),
) -> None:
    """Sign an auction bid for the mnemonic's account; prints blob and note (hex)."""
    try:
        acct = mnemonic_to_secret_key(mnemonic)
        bid = Bid(
            bidder=acct["addr"],
            bid_amount=bid_amount,
            max_price=max_price,
            bid_id=bid_id,
            auction_key=auction_key,
            auction_id=auction_id,
        )
        signed = bid.sign(acct["sk"])
    except AlgoSdkError as e:
        _fail(e)
    _print_json({"blob": signed.blob.hex(), "note": signed.to_note().hex()})


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        rc = app(prog_name="algo-sdk", standalone_mode=False, args=argv)
        return int(rc or 0)
    except typer.Exit as e:
        return int(e.exit_code)
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        return 1


def run(argv: Optional[list[str]] = None) -> int:
    """Alias for :func:`main`."""
    return main(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
