"""
algo_sdk.errors
---------------

Typed errors raised by the codecs, the canonical encoder and the record model.

Design goals
------------
- One root `AlgoSdkError` with a machine-friendly `code` and optional `data`.
- Concrete subclasses per failure mode so callers can catch precisely.
- Safe JSON representation (`to_dict`) suitable for logs and CLI output.

Every error here is recoverable: codecs and signers report failures to the
caller and never leave partially built output behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "ErrorCode",
    "AlgoSdkError",
    "ChecksumMismatch",
    "InvalidAddress",
    "InvalidMnemonic",
    "EncodeError",
    "DecodeError",
    "ValidationError",
    "BuilderTypeError",
]


class ErrorCode(str, Enum):
    CHECKSUM_MISMATCH = "SDK/CHECKSUM_MISMATCH"
    INVALID_ADDRESS = "SDK/INVALID_ADDRESS"
    INVALID_MNEMONIC = "SDK/INVALID_MNEMONIC"
    ENCODE = "SDK/ENCODE"
    DECODE = "SDK/DECODE"
    VALIDATION = "SDK/VALIDATION"
    BUILDER_TYPE = "SDK/BUILDER_TYPE"


@dataclass(eq=False)
class AlgoSdkError(Exception):
    """
    Root error for the SDK.

    Attributes
    ----------
    code: str
        Machine-stable error code (see ErrorCode).
    message: str
        Human hint suitable for logs; never carries key material.
    data: dict
        Optional JSON-serializable details (field names, lengths, ...).
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(f"{_code_str(self.code)}: {self.message}")

    def with_context(self, **ctx: Any) -> "AlgoSdkError":
        """Return a copy with extra context merged into `data`."""
        err = type(self).__new__(type(self))
        AlgoSdkError.__init__(
            err,
            code=self.code,
            message=self.message,
            data={**self.data, **_jsonmap(ctx)},
        )
        return err

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": _code_str(self.code),
            "message": self.message,
            "data": _jsonmap(self.data),
        }

    def __str__(self) -> str:
        parts = [f"{_code_str(self.code)}: {self.message}"]
        if self.data:
            preview = ", ".join(f"{k}={v!r}" for k, v in self.data.items())
            parts.append(f"[{preview}]")
        return " ".join(parts)


class ChecksumMismatch(AlgoSdkError):
    def __init__(self, message: str = "checksum mismatch", **data: Any) -> None:
        super().__init__(
            code=ErrorCode.CHECKSUM_MISMATCH, message=message, data=_jsonmap(data)
        )


class InvalidAddress(AlgoSdkError):
    def __init__(self, message: str = "invalid address", **data: Any) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ADDRESS, message=message, data=_jsonmap(data)
        )


class InvalidMnemonic(AlgoSdkError):
    def __init__(self, message: str = "invalid mnemonic", **data: Any) -> None:
        super().__init__(
            code=ErrorCode.INVALID_MNEMONIC, message=message, data=_jsonmap(data)
        )


class EncodeError(AlgoSdkError):
    def __init__(self, message: str = "encoding failed", **data: Any) -> None:
        super().__init__(code=ErrorCode.ENCODE, message=message, data=_jsonmap(data))


class DecodeError(AlgoSdkError):
    def __init__(self, message: str = "decoding failed", **data: Any) -> None:
        super().__init__(code=ErrorCode.DECODE, message=message, data=_jsonmap(data))


class ValidationError(AlgoSdkError):
    """A record field is missing or out of range."""

    def __init__(
        self, message: str = "invalid record", field: Optional[str] = None, **data: Any
    ) -> None:
        if field is not None:
            data["field"] = field
        super().__init__(
            code=ErrorCode.VALIDATION, message=message, data=_jsonmap(data)
        )

    @property
    def field(self) -> Optional[str]:
        return self.data.get("field")


class BuilderTypeError(AlgoSdkError):
    """The signer was handed something that is not a known record type."""

    def __init__(self, expected: str, got: Any) -> None:
        super().__init__(
            code=ErrorCode.BUILDER_TYPE,
            message=f"expected a {expected} (or a mapping of its fields)",
            data={"expected": expected, "got": type(got).__name__},
        )


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------


def _code_str(code: Any) -> str:
    return code.value if isinstance(code, Enum) else str(code)


def _coerce_json(v: Any) -> Any:
    if v is None or isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v).hex()
    if isinstance(v, Mapping):
        return {str(k): _coerce_json(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_coerce_json(x) for x in v]
    return str(v)


def _jsonmap(d: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in d.items()}
