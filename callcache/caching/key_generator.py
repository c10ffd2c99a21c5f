"""
Cache Key Generation

Keys have two parts:

    md5(lower(callable_identity)) + md5(canonical(arguments))

The argument part is empty for calls without arguments.

Canonical form:
    str, bool, None, 64-bit ints and finite floats are written as JSON
    scalars; dicts with only str keys as JSON objects with sorted keys.
    Every other value becomes a JSON array whose first element names its
    type, e.g. ["tuple", [...]], ["set", [...]], ["decimal", "1.5"],
    ["float", "nan"], ["map", [[k, v], ...]]. Lists are tagged too
    (["list", [...]]), so a user list can never read as a tagged value.

Sets and non-str-keyed mappings are sorted by the encoded form of their
elements, so the key never depends on iteration order or memory addresses.

Uses MD5 for fast hashing (collision risk acceptable for cache, worst case
is a wrong hit between two distinct argument lists, which requires a real
MD5 collision).

Author: System Architect
Date: 2026-10-17
"""

import dataclasses
import hashlib
import math
import uuid
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

import orjson
from pydantic import BaseModel

from callcache.core.exceptions import ArgumentSerializationError

_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1


def _type_name(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def _sorted_encoded(items: list[Any]) -> list[Any]:
    return sorted(items, key=lambda item: orjson.dumps(item, option=orjson.OPT_SORT_KEYS))


def _canonical(value: Any) -> Any:
    """
    Rewrite a value into plain JSON types, tagging everything that JSON
    would otherwise conflate.

    Raises:
        TypeError: The value has no value-based encoding
    """
    if value is None or type(value) in (bool, str):
        return value
    if isinstance(value, Enum):
        return ["enum", _type_name(value), _canonical(value.value)]
    if isinstance(value, int):
        if type(value) is int and _INT64_MIN <= value <= _UINT64_MAX:
            return value
        return ["int", str(int(value))]
    if isinstance(value, float):
        if type(value) is float and math.isfinite(value):
            return value
        return ["float", repr(float(value))]
    if isinstance(value, str):
        return ["str", _type_name(value), str(value)]
    if isinstance(value, Decimal):
        return ["decimal", str(value)]
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ["bytes", bytes(value).hex()]
    if isinstance(value, datetime):
        return ["datetime", value.isoformat()]
    if isinstance(value, date):
        return ["date", value.isoformat()]
    if isinstance(value, time):
        return ["time", value.isoformat()]
    if isinstance(value, uuid.UUID):
        return ["uuid", str(value)]
    if isinstance(value, BaseModel):
        return ["model", _type_name(value), _canonical(value.model_dump())]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return ["dataclass", _type_name(value), _canonical(fields)]
    if isinstance(value, (set, frozenset)):
        return ["set", _sorted_encoded([_canonical(item) for item in value])]
    if isinstance(value, Mapping):
        if all(type(k) is str for k in value):
            return {k: _canonical(v) for k, v in value.items()}
        pairs = [[_canonical(k), _canonical(v)] for k, v in value.items()]
        return ["map", _sorted_encoded(pairs)]
    if isinstance(value, tuple):
        return ["tuple", [_canonical(item) for item in value]]
    if isinstance(value, Sequence):
        return ["list", [_canonical(item) for item in value]]
    raise TypeError(f"Type is not serializable for a cache key: {type(value).__name__}")


def serialize_arguments(args: Sequence[Any], kwargs: Mapping[str, Any] | None = None) -> bytes:
    """
    Canonical, order-preserving encoding of a call's arguments.

    Raises:
        ArgumentSerializationError: If any argument has no value-based encoding
    """
    try:
        payload: Any = ["args", [_canonical(arg) for arg in args]]
        if kwargs:
            payload = {"args": payload, "kwargs": _canonical(dict(kwargs))}
        return orjson.dumps(payload, option=orjson.OPT_SORT_KEYS)
    except TypeError as e:
        argument_types = [type(arg).__name__ for arg in args]
        raise ArgumentSerializationError(
            f"Can't serialize arguments {argument_types}: {e}",
            details={"argument_types": argument_types},
        ).with_suggestion(
            "Pass plain values, dataclasses or pydantic models as arguments"
        ) from e


def generate_arguments_key(args: Sequence[Any], kwargs: Mapping[str, Any] | None = None) -> str:
    """Digest of the arguments, or an empty string when there are none."""
    if not args and not kwargs:
        return ""
    return hashlib.md5(serialize_arguments(args, kwargs)).hexdigest()


def generate_key(
    callable_identity: str,
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> str:
    """
    Generate a cache key from a callable identity and its arguments.

    Args:
        callable_identity: e.g. "reports.ReportService::monthly_total"
        args: Positional arguments, in call order
        kwargs: Keyword arguments (order-insensitive)

    Returns:
        32 hex chars for the identity, plus 32 more when arguments are given

    Example:
        >>> generate_key("a.B::Foo", [1, 2]) == generate_key("a.b::foo", [1, 2])
        True
    """
    callable_key = hashlib.md5(callable_identity.lower().encode("utf-8")).hexdigest()
    return callable_key + generate_arguments_key(args, kwargs)

