"""
algo_sdk.logging
----------------

Logging setup for the SDK and its CLI:
- JSON or concise text formats
- Structured extras (`log.info("signed", extra={"txid": ...})`) rendered inline
- Safe JSON serialization (bytes -> hex)

Library modules only ever call `logging.getLogger("algo_sdk.<area>")`; nothing
is configured on import. Applications (and the CLI) call `configure()` once.

Usage
-----
    from algo_sdk import logging as alog

    alog.configure(level="INFO", json=False)
    log = alog.get_logger("algo_sdk.demo")
    log.info("transaction signed", extra={"txid": txid})

Key material (seeds, secret keys) must never be passed as extras.
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
import os
import sys
import traceback
from typing import IO, Any, Dict, Optional

from .config import SDKConfig

ROOT_LOGGER = "algo_sdk"

# LogRecord attributes that are not user extras.
_RESERVED = frozenset(
    (
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    )
)

_LEVEL_TO_INT = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def _utcnow_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="milliseconds")


def _coerce_value(v: Any) -> Any:
    if v is None or isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return bytes(v).hex()
    if isinstance(v, (list, tuple)):
        return [_coerce_value(x) for x in v]
    if isinstance(v, dict):
        return {str(k): _coerce_value(x) for k, x in v.items()}
    return str(v)


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: _coerce_value(v)
        for k, v in record.__dict__.items()
        if not k.startswith("_") and k not in _RESERVED
    }


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": _utcnow_iso(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k, v in _extras(record).items():
            payload.setdefault(k, v)
        if record.exc_info:
            payload["err"] = "".join(
                traceback.format_exception(*record.exc_info)
            ).rstrip()
        return json.dumps(payload, separators=(",", ":"), default=str)


class TextFormatter(logging.Formatter):
    """
    Human-friendly one-liner:
      2026-01-05T12:34:56.789+00:00 | INFO  | algo_sdk.tx | txid=VFC5... | transaction signed
    """

    def format(self, record: logging.LogRecord) -> str:
        line = f"{_utcnow_iso()} | {record.levelname:<5} | {record.name}"
        extras = " ".join(f"{k}={v}" for k, v in _extras(record).items())
        if extras:
            line += f" | {extras}"
        line += f" | {record.getMessage()}"
        if record.exc_info:
            tb = "".join(traceback.format_exception(*record.exc_info)).rstrip()
            line += "\n" + tb
        return line


def configure(
    *,
    json: Optional[bool] = None,
    level: str | int = "WARNING",
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Configure the `algo_sdk` logger hierarchy (not the root logger).

    Parameters
    ----------
    json : bool | None
        If None, determined by env ALGO_SDK_LOG_FORMAT=(json|text); text otherwise.
    level : str | int
        Minimum log level.
    stream : TextIO | None
        Stream for the console handler (default: the current sys.stderr).
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_coerce_level(level))
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(_coerce_level(level))
    handler.setFormatter(JSONFormatter() if _decide_json(json) else TextFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def configure_from_config(cfg: SDKConfig, *, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Configure logging from an `SDKConfig` (log_level / log_format)."""
    return configure(json=cfg.log_format == "json", level=cfg.log_level, stream=stream)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the `algo_sdk` hierarchy."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return _LEVEL_TO_INT.get(level.upper(), logging.WARNING)


def _decide_json(json_flag: Optional[bool]) -> bool:
    if json_flag is not None:
        return json_flag
    return os.environ.get("ALGO_SDK_LOG_FORMAT", "").strip().lower() == "json"


__all__ = [
    "ROOT_LOGGER",
    "JSONFormatter",
    "TextFormatter",
    "configure",
    "configure_from_config",
    "get_logger",
]
