"""
Shared machinery for signable records.

A record goes through three states:

    Built    -> the frozen dataclass is constructed; fields are coerced and
                validated in __post_init__ (ValidationError names the field).
    Encoded  -> `canonical_bytes` is computed on first access and cached.
    Signed   -> `sign(secret_key)` returns a separate signed wrapper; the record
                itself never changes. Re-signing means building a new record.

Subclasses declare the domain prefix (`PREFIX`), the key under which the record
appears in a signed blob (`BLOB_KEY`) and `to_canonical()`.
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional

from .. import config as _config
from ..address import PUBLIC_KEY_BYTES, Address
from ..encoding.canonical import UINT64_MAX, encode
from ..errors import InvalidAddress, ValidationError
from ..utils.hash import sha512_256
from ..utils.bytes import is_bytes_like
from ..wallet.signer import Signer


class Record:
    """Mixin for frozen record dataclasses."""

    PREFIX: ClassVar[bytes] = b""
    BLOB_KEY: ClassVar[str] = ""

    def _set(self, name: str, value: Any) -> None:
        # Frozen dataclasses normalize their own fields in __post_init__.
        object.__setattr__(self, name, value)

    def to_canonical(self) -> Dict[str, Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    @cached_property
    def canonical_bytes(self) -> bytes:
        """Canonical msgpack of `to_canonical()`, computed once."""
        return encode(self.to_canonical())

    def bytes_to_sign(self) -> bytes:
        """Domain prefix || canonical bytes."""
        return self.PREFIX + self.canonical_bytes

    def raw_id(self) -> bytes:
        """SHA-512/256 of the prefixed pre-image."""
        return sha512_256(self.bytes_to_sign())

    def _signer_for(self, secret_key: Any, expected: Optional[Address], field: str) -> Signer:
        signer = secret_key if isinstance(secret_key, Signer) else Signer.from_secret_key(secret_key)
        if expected is not None and expected.public_key != signer.public_key:
            raise ValidationError(
                f"{field} does not match the signing key",
                field=field,
                expected=str(expected),
                signer=signer.address,
            )
        return signer


# -----------------------------------------------------------------------------
# Field coercion (shared by Transaction and Bid)
# -----------------------------------------------------------------------------


def limits() -> _config.SDKConfig:
    return _config.get_config()


def coerce_u64(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field} must be an integer", field=field, got=type(value).__name__
        )
    if value < 0 or value > UINT64_MAX:
        raise ValidationError(f"{field} must be in [0, 2^64-1]", field=field, value=value)
    return int(value)


def coerce_bytes(field: str, value: Any, *, max_len: Optional[int] = None) -> bytes:
    if value is None:
        return b""
    if isinstance(value, str):
        try:
            value = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError(f"{field} is not valid UTF-8 text", field=field) from e
    if not is_bytes_like(value):
        raise ValidationError(f"{field} must be bytes", field=field, got=type(value).__name__)
    out = bytes(value)
    if max_len is not None and len(out) > max_len:
        raise ValidationError(
            f"{field} is too long", field=field, length=len(out), max=max_len
        )
    return out


def coerce_str(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field, got=type(value).__name__)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError(f"{field} is not valid UTF-8 text", field=field) from e
    return value


def coerce_address(field: str, value: Any, *, required: bool = False) -> Optional[Address]:
    """
    Accept an `Address`, its text form, or a raw 32-byte public key. Empty
    values mean "absent".
    """
    if value is None or value == "" or value == b"":
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None
    if isinstance(value, Address):
        return value
    try:
        if isinstance(value, str):
            return Address.from_string(value)
        if is_bytes_like(value) and len(value) == PUBLIC_KEY_BYTES:
            return Address(bytes(value))
    except InvalidAddress as e:
        raise ValidationError(f"{field} is not a valid address", field=field) from e
    raise ValidationError(f"{field} is not a valid address", field=field)


def address_bytes(value: Optional[Address]) -> Optional[bytes]:
    return value.public_key if value is not None else None


def remap_fields(
    cls_name: str,
    fields: Mapping[str, Any],
    known: Iterable[str],
    aliases: Mapping[str, str],
) -> Dict[str, Any]:
    """
    Translate a caller mapping (snake_case names or legacy camelCase aliases)
    into constructor keywords. Unknown keys are rejected.
    """
    if not isinstance(fields, Mapping):
        raise ValidationError(f"{cls_name} fields must be a mapping")
    known = frozenset(known)
    out: Dict[str, Any] = {}
    for key, value in fields.items():
        name = aliases.get(key, key)
        if name not in known:
            raise ValidationError(f"unknown {cls_name} field: {key}", field=str(key))
        if name in out:
            raise ValidationError(f"{cls_name} field given twice: {name}", field=name)
        out[name] = value
    return out


def check_wire_form(cls_name: str, obj: Any, schema: Mapping[str, type]) -> Mapping[str, Any]:
    """
    Check a decoded wire map against `schema` (wire key -> msgpack type).

    Unknown keys and values of the wrong wire type are rejected, so a text
    address or a str note never stands in for the raw bytes that were signed.
    """
    if not isinstance(obj, Mapping):
        raise ValidationError(f"{cls_name} wire form must be a map")
    unknown = sorted(set(obj) - set(schema))
    if unknown:
        raise ValidationError(f"unknown {cls_name} wire keys", keys=unknown)
    for key, value in obj.items():
        expected = schema[key]
        if type(value) is not expected:
            raise ValidationError(
                f"{cls_name} wire key {key!r} must be {expected.__name__}",
                field=key,
                got=type(value).__name__,
            )
    return obj


__all__ = [
    "Record",
    "limits",
    "coerce_u64",
    "coerce_bytes",
    "coerce_str",
    "coerce_address",
    "address_bytes",
    "remap_fields",
    "check_wire_form",
]
