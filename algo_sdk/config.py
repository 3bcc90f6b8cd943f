"""
SDK configuration: record limits and logging defaults.

- Loads sane defaults and supports overrides via environment variables (ALGO_SDK_*).
- The record model reads `DEFAULT` at validation time, so tests and scripts can
  swap it for a customized instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Protocol minimum for a transaction fee (microalgos).
_DEFAULT_MIN_FEE = 1000
_DEFAULT_MAX_NOTE_BYTES = 1024
# Maximum distance between first and last valid round.
_DEFAULT_MAX_TXN_LIFE = 1000

_LOG_FORMATS = ("text", "json")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _parse_non_negative(name: str, val: Any) -> int:
    try:
        n = int(val)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an integer, got: {val!r}") from e
    if n < 0:
        raise ValueError(f"{name} must be non-negative, got: {n}")
    return n


def _parse_log_format(val: Any) -> str:
    fmt = str(val).strip().lower()
    if fmt not in _LOG_FORMATS:
        raise ValueError(f"log_format must be one of {_LOG_FORMATS}, got: {val!r}")
    return fmt


@dataclass(slots=True, frozen=True)
class SDKConfig:
    # Record limits
    min_fee: int = _DEFAULT_MIN_FEE
    max_note_bytes: int = _DEFAULT_MAX_NOTE_BYTES
    max_txn_life: int = _DEFAULT_MAX_TXN_LIFE
    # Logging
    log_level: str = "WARNING"
    log_format: str = "text"

    @classmethod
    def from_env(cls, prefix: str = "ALGO_SDK_") -> "SDKConfig":
        """
        Create config from environment variables:

        ALGO_SDK_MIN_FEE          (int, fee floor for per-byte fees)
        ALGO_SDK_MAX_NOTE_BYTES   (int)
        ALGO_SDK_MAX_TXN_LIFE     (int, rounds)
        ALGO_SDK_LOG_LEVEL        (DEBUG/INFO/WARNING/ERROR)
        ALGO_SDK_LOG_FORMAT       (text|json)
        """
        return cls(
            min_fee=_parse_non_negative(
                "min_fee", _env(f"{prefix}MIN_FEE", str(_DEFAULT_MIN_FEE))
            ),
            max_note_bytes=_parse_non_negative(
                "max_note_bytes",
                _env(f"{prefix}MAX_NOTE_BYTES", str(_DEFAULT_MAX_NOTE_BYTES)),
            ),
            max_txn_life=_parse_non_negative(
                "max_txn_life",
                _env(f"{prefix}MAX_TXN_LIFE", str(_DEFAULT_MAX_TXN_LIFE)),
            ),
            log_level=(_env(f"{prefix}LOG_LEVEL", "WARNING") or "WARNING").upper(),
            log_format=_parse_log_format(_env(f"{prefix}LOG_FORMAT", "text")),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["SDKConfig"] = None, **overrides: Any
    ) -> "SDKConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        for key in ("min_fee", "max_note_bytes", "max_txn_life"):
            data[key] = _parse_non_negative(key, data[key])
        data["log_level"] = str(data["log_level"]).upper()
        data["log_format"] = _parse_log_format(data["log_format"])
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_fee": int(self.min_fee),
            "max_note_bytes": int(self.max_note_bytes),
            "max_txn_life": int(self.max_txn_life),
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


# Convenience singleton (safe to use for simple scripts)
DEFAULT = SDKConfig.from_env()


def get_config() -> SDKConfig:
    """Return the active module-level config."""
    return DEFAULT


__all__ = ["SDKConfig", "DEFAULT", "get_config"]
