"""
Canonical msgpack encoding.

Every logical value has exactly one byte form, so signatures computed by
independent implementations agree. The canonical form is produced by two
separate passes over a plain value tree:

  1. `omit_defaults` rebuilds the tree, validating types and dropping every map
     entry whose (already normalized) value is a default: None, False, 0, b"",
     "", an empty sequence or an empty map. Omission is structural; there is no
     null marker on the wire.
  2. `sort_keys` orders map keys by their raw UTF-8 bytes, at every level.

The result is serialized with `msgspec.msgpack`, which preserves dict order and
always picks the shortest integer/length forms (positive fixint, uint8..64;
bin8/16/32 for bytes; fixstr/str8.. for text; fixmap/map16.. for maps).

Decoding uses the `msgpack` package in strict mode. It accepts non-canonical
input (unsorted keys, explicit zero fields) but rejects anything outside the
value domain: truncated input, trailing bytes, duplicate or non-string keys,
nil, floats, negative integers and extension types.

Both directions refuse containers nested more than `MAX_DEPTH` levels deep.

Value domain
------------
    int (0 .. 2**64-1) | bool | bytes | str | list/tuple | dict[str, ...]
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import msgpack
import msgspec

from ..errors import DecodeError, EncodeError

log = logging.getLogger("algo_sdk.encoding")

UINT64_MAX = (1 << 64) - 1
# Maximum container nesting accepted by encode and decode.
MAX_DEPTH = 512

CanonicalValue = Any

__all__ = [
    "UINT64_MAX",
    "MAX_DEPTH",
    "is_default",
    "omit_defaults",
    "sort_keys",
    "canonicalize",
    "normalize",
    "encode",
    "decode",
]


# ------------------------------------------
# Omission predicate
# ------------------------------------------


def is_default(value: Any) -> bool:
    """
    True iff `value` is the zero value of its type and must be omitted when it
    appears as a map entry.
    """
    if value is None or value is False:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value == 0
    if isinstance(value, (bytes, bytearray, memoryview, str, list, tuple, Mapping)):
        return len(value) == 0
    return False


# ------------------------------------------
# Pass 1: validate + omit defaults
# ------------------------------------------


def _check_int(value: int, path: str) -> int:
    if value < 0:
        raise EncodeError("negative integers are not encodable", path=path, value=value)
    if value > UINT64_MAX:
        raise EncodeError("integer exceeds 64 bits", path=path)
    return int(value)


def _check_str(value: str, path: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodeError("string is not valid UTF-8", path=path) from e
    return value


def _check_depth(depth: int, path: str) -> None:
    if depth >= MAX_DEPTH:
        raise EncodeError("value is nested too deeply", path=path, max_depth=MAX_DEPTH)


def _omit(value: Any, path: str, depth: int) -> CanonicalValue:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return _check_int(value, path)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return _check_str(value, path)
    if isinstance(value, Mapping):
        _check_depth(depth, path)
        out: Dict[str, CanonicalValue] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise EncodeError("map keys must be strings", path=path, key=repr(k))
            _check_str(k, path)
            child_path = f"{path}.{k}"
            if v is None:
                continue
            child = _omit(v, child_path, depth + 1)
            if is_default(child):
                continue
            out[k] = child
        return out
    if isinstance(value, (list, tuple)):
        _check_depth(depth, path)
        items: List[CanonicalValue] = []
        for i, v in enumerate(value):
            if v is None:
                raise EncodeError("None is not allowed inside sequences", path=f"{path}[{i}]")
            items.append(_omit(v, f"{path}[{i}]", depth + 1))
        return items
    if isinstance(value, float):
        raise EncodeError("floats are not encodable", path=path)
    if value is None:
        raise EncodeError("None is only meaningful as an omitted map value", path=path)
    raise EncodeError("unsupported type", path=path, type=type(value).__name__)


def omit_defaults(value: Any) -> CanonicalValue:
    """
    Pass 1: return a validated copy of `value` with default-valued map entries
    removed recursively. A child map or sequence is normalized first, so a map
    that only held defaults is itself dropped from its parent. Sequence
    positions are preserved.

    Raises EncodeError for values outside the canonical domain.
    """
    return _omit(value, "$", 0)


# ------------------------------------------
# Pass 2: key ordering
# ------------------------------------------


def _key_bytes(item: Tuple[str, Any]) -> bytes:
    return item[0].encode("utf-8")


def _sort(value: CanonicalValue, path: str, depth: int) -> CanonicalValue:
    if isinstance(value, Mapping):
        _check_depth(depth, path)
        out: Dict[str, CanonicalValue] = {}
        for k, v in sorted(value.items(), key=_key_bytes):
            out[k] = _sort(v, f"{path}.{k}", depth + 1)
        return out
    if isinstance(value, (list, tuple)):
        _check_depth(depth, path)
        items: List[CanonicalValue] = []
        for i, v in enumerate(value):
            items.append(_sort(v, f"{path}[{i}]", depth + 1))
        return items
    return value


def sort_keys(value: CanonicalValue) -> CanonicalValue:
    """Pass 2: order map keys by raw UTF-8 bytes, recursively."""
    return _sort(value, "$", 0)


def canonicalize(value: Any) -> CanonicalValue:
    """omit_defaults, then sort_keys."""
    return sort_keys(omit_defaults(value))


# `decode(encode(v)) == normalize(v)`
normalize = omit_defaults


# ------------------------------------------
# Encoding / decoding
# ------------------------------------------


def encode(value: Any) -> bytes:
    """
    Encode `value` to its canonical msgpack bytes.

    Raises EncodeError if `value` (or anything inside it) is outside the
    canonical domain. No partial output is ever returned.
    """
    tree = canonicalize(value)
    try:
        return msgspec.msgpack.encode(tree)
    except (TypeError, OverflowError, msgspec.EncodeError) as e:  # pragma: no cover - pass 1 validates
        raise EncodeError("msgpack encoding failed", reason=str(e)) from e


def _pairs_hook(pairs: Sequence[Tuple[Any, Any]]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in pairs:
        if not isinstance(k, str):
            raise DecodeError("map keys must be strings", key=repr(k))
        if k in out:
            raise DecodeError("duplicate map key", key=k)
        out[k] = v
    return out


def _check_decoded(value: Any) -> None:
    # Explicit stack: msgpack nests deeper than the interpreter recursion limit.
    stack: List[Tuple[Any, str, int]] = [(value, "$", 0)]
    while stack:
        node, path, depth = stack.pop()
        if isinstance(node, (bool, bytes, str)):
            continue
        if isinstance(node, int):
            if node < 0:
                raise DecodeError("negative integers are not allowed", path=path)
            continue
        if isinstance(node, (dict, list)):
            if depth >= MAX_DEPTH:
                raise DecodeError("value is nested too deeply", path=path, max_depth=MAX_DEPTH)
            if isinstance(node, dict):
                stack.extend((v, f"{path}.{k}", depth + 1) for k, v in node.items())
            else:
                stack.extend((v, f"{path}[{i}]", depth + 1) for i, v in enumerate(node))
            continue
        if node is None:
            raise DecodeError("nil is not allowed", path=path)
        if isinstance(node, float):
            raise DecodeError("floats are not allowed", path=path)
        raise DecodeError("unsupported msgpack tag", path=path, type=type(node).__name__)


def decode(data: bytes) -> CanonicalValue:
    """
    Decode msgpack bytes into a value tree.

    Omitted fields are simply absent; callers restore their defaults. Raises
    DecodeError on truncated input, trailing bytes, duplicate or non-string
    keys, and any tag outside the canonical domain.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError("input must be bytes", got=type(data).__name__)
    buf = bytes(data)
    if not buf:
        raise DecodeError("empty input")
    try:
        value = msgpack.unpackb(
            buf,
            raw=False,
            strict_map_key=True,
            use_list=True,
            object_pairs_hook=_pairs_hook,
        )
    except msgpack.ExtraData as e:
        raise DecodeError("trailing bytes after value", extra=len(e.extra)) from e
    except (ValueError, TypeError, RecursionError, msgpack.UnpackException) as e:
        log.debug("msgpack decode failed", extra={"reason": str(e)})
        raise DecodeError("malformed msgpack", reason=str(e)) from e
    _check_decoded(value)
    return value
