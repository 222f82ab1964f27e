"""Cycle-safe structural equality."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence, Set
from typing import Any

from memo_diff.engine.kinds import classify, composite_entries, primitive_kind
from memo_diff.models import ValueKind


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values by content.

    Mappings compare key sets and values, sequences compare in order,
    sets compare by matching elements, attribute objects compare their
    fields when the types agree.  NaN equals NaN.

    Pairs are walked with an explicit stack, so nesting depth is not
    bounded by the interpreter's recursion limit.  A pair of containers
    that was already visited is treated as equal, so self-referencing
    structures terminate.
    """
    stack: list[tuple[Any, Any]] = [(a, b)]
    visited: set[tuple[int, int]] = set()

    while stack:
        x, y = stack.pop()
        if x is y or (_is_nan(x) and _is_nan(y)):
            continue

        kind = classify(x)
        if kind is not classify(y):
            return False

        if kind is ValueKind.PRIMITIVE:
            if primitive_kind(x) != primitive_kind(y) or not _safe_eq(x, y):
                return False
            continue
        if kind is not ValueKind.COMPOSITE:
            if not _safe_eq(x, y):
                return False
            continue

        pair = (id(x), id(y))
        if pair in visited:
            continue
        visited.add(pair)

        children = _child_pairs(x, y)
        if children is None:
            return False
        stack.extend(children)

    return True


def _child_pairs(a: Any, b: Any) -> list[tuple[Any, Any]] | None:
    """Pairs to compare next, or None when the shapes already differ."""
    if isinstance(a, Mapping) or isinstance(b, Mapping):
        if not (isinstance(a, Mapping) and isinstance(b, Mapping)):
            return None
        return _mapping_pairs(a, b)

    if type(a) is not type(b):
        return None

    if isinstance(a, Set):
        if len(a) != len(b):
            return None
        if all(any(deep_equal(x, y) for y in b) for x in a):
            return []
        return None

    if isinstance(a, Sequence):
        if len(a) != len(b):
            return None
        return list(zip(a, b, strict=True))

    return _mapping_pairs(composite_entries(a), composite_entries(b))


def _mapping_pairs(a: Mapping, b: Mapping) -> list[tuple[Any, Any]] | None:
    if len(a) != len(b):
        return None
    pairs = []
    for key, value in a.items():
        if key not in b:
            return None
        pairs.append((value, b[key]))
    return pairs


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _safe_eq(a: Any, b: Any) -> bool:
    try:
        return bool(a == b)
    except Exception:
        return False
