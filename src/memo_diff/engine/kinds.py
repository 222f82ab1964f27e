"""Value-kind inspection.

Every value is tagged with a ``ValueKind`` before it is compared or
diffed, so the differ dispatches on an explicit variant instead of ad-hoc
``isinstance`` chains.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import fractions
import uuid
from collections.abc import Mapping, Sequence, Set
from typing import Any

from pydantic import BaseModel

from memo_diff.models import ValueKind

_SCALAR_TYPES = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    decimal.Decimal,
    fractions.Fraction,
    enum.Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
)

_NUMBER_TYPES = (int, float, decimal.Decimal, fractions.Fraction)


def _is_container(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, Sequence, Set))


def _has_attributes(value: Any) -> bool:
    return (
        hasattr(value, "__dict__")
        or hasattr(type(value), "__slots__")
        or dataclasses.is_dataclass(value)
    )


def classify(value: Any) -> ValueKind:
    """Tag *value* with its kind. Containers win over ``__call__``."""
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, _SCALAR_TYPES):
        return ValueKind.PRIMITIVE
    if _is_container(value):
        return ValueKind.COMPOSITE
    if callable(value):
        return ValueKind.FUNCTION
    if _has_attributes(value):
        return ValueKind.COMPOSITE
    return ValueKind.PRIMITIVE


def primitive_kind(value: Any) -> str:
    """Group primitives the way a loosely typed caller would see them."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, _NUMBER_TYPES) and not isinstance(value, enum.Enum):
        return "number"
    if isinstance(value, str) and not isinstance(value, enum.Enum):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    return type(value).__name__


def ref_equal(a: Any, b: Any) -> bool:
    """Identity, or value equality between primitives of the same kind."""
    if a is b:
        return True
    if classify(a) is not ValueKind.PRIMITIVE or classify(b) is not ValueKind.PRIMITIVE:
        return False
    if primitive_kind(a) != primitive_kind(b):
        return False
    try:
        return bool(a == b)
    except Exception:
        return False


def composite_entries(value: Any) -> dict[Any, Any]:
    """One-level view of a composite value as key -> item."""
    if isinstance(value, Mapping):
        return dict(value.items())
    if isinstance(value, Set):
        return {repr(item): item for item in value}
    if isinstance(value, Sequence):
        return dict(enumerate(value))
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__"):
        return dict(vars(value))
    slots = getattr(type(value), "__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return {name: getattr(value, name) for name in slots if hasattr(value, name)}
