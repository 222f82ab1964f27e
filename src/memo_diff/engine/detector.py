"""Change detection between two attribute maps.

Usage::

    from memo_diff import detect

    result = detect("[renders]", "UserCard", prev_props, next_props)
    for key, change in result.changes.items():
        print(key, change.reason)

The detector is pure: it never logs and never mutates its inputs.
Rendering a result is the reporter's job (see ``memo_diff.report``).
"""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from memo_diff.config import MemoDiffConfig
from memo_diff.engine.differ import diff_values
from memo_diff.engine.equality import deep_equal
from memo_diff.engine.kinds import ref_equal
from memo_diff.models import ChangeDescriptor, ChangeReason, ComparisonResult, DiffOptions
from memo_diff.report.reporter import report_diagnostics

Comparator = Callable[[Any, Any], bool]


class MemoDiffError(Exception):
    """Base class for memo-diff errors."""


class InvalidInputError(MemoDiffError):
    """Raised when previous/next are not attribute maps."""


def as_attribute_map(value: Any, side: str = "attributes") -> Mapping[str, Any]:
    """View *value* as a read-only attribute map.

    Accepts mappings, pydantic model instances and dataclass instances.
    Values are taken by reference.
    """
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    msg = f"{side} must be a mapping of attributes, got {type(value).__name__}"
    raise InvalidInputError(msg)


def union_keys(previous: Mapping[Any, Any], next: Mapping[Any, Any]) -> list[Any]:
    """Previous's keys in order, then next's keys not seen yet."""
    keys = list(previous)
    seen = set(keys)
    for key in next:
        if key not in seen:
            seen.add(key)
            keys.append(key)
    return keys


def classify_change(same_ref: bool, same_structure: bool) -> ChangeReason:
    if not same_ref and not same_structure:
        return ChangeReason.DIFFERENT_OBJECTS
    if same_ref and not same_structure:
        return ChangeReason.CHANGED
    if not same_ref and same_structure:
        return ChangeReason.SAME_STRUCTURE
    # Unreachable for changed keys; kept so every combination maps to a reason.
    return ChangeReason.OBJECTS_DIFFER


def detect_changes(
    previous: Any,
    next: Any,
    comparator: Comparator | None = None,
    *,
    options: DiffOptions | None = None,
    tag: str = "",
    display_name: str = "",
) -> ComparisonResult:
    """Compare two attribute maps key by key.

    A key is reported when its values are not reference-equal or not
    structurally equal.  Keys missing on one side read as ``None``.
    Exceptions from *comparator* propagate unchanged.
    """
    prev_map = as_attribute_map(previous, "previous")
    next_map = as_attribute_map(next, "next")

    are_equal = bool(comparator(previous, next)) if comparator else previous is next

    changes: dict[Any, ChangeDescriptor] = {}
    for key in union_keys(prev_map, next_map):
        prev_value = prev_map.get(key)
        next_value = next_map.get(key)
        same_ref = ref_equal(prev_value, next_value)
        same_structure = deep_equal(prev_value, next_value)
        if same_ref and same_structure:
            continue
        changes[key] = ChangeDescriptor(
            previous_value=prev_value,
            next_value=next_value,
            reason=classify_change(same_ref, same_structure),
            diff=diff_values(prev_value, next_value, options),
        )

    return ComparisonResult(
        tag=tag,
        display_name=display_name,
        are_equal=are_equal,
        changes=changes,
    )


def detect(
    tag: str,
    display_name: str,
    previous: Any,
    next: Any,
    comparator: Comparator | None = None,
    *,
    options: DiffOptions | None = None,
) -> ComparisonResult:
    """Labelled entry point. *tag* and *display_name* are carried as-is."""
    return detect_changes(
        previous,
        next,
        comparator,
        options=options,
        tag=tag,
        display_name=display_name,
    )


def make_comparator(
    tag: str | None = None,
    display_name: str = "",
    reporter: Callable[[ComparisonResult], Any] | None = None,
    config: MemoDiffConfig | None = None,
) -> Comparator:
    """Build a custom-equality hook that reports why its inputs differ.

    Tag, diff options and log level come from *config* unless given.
    The hook returns ``previous is next``, so it never changes what an
    identity-based memoization layer would decide.
    """
    config = config or MemoDiffConfig()
    tag = tag if tag is not None else config.tag
    options = config.diff_options()
    if reporter is None:
        reporter = functools.partial(report_diagnostics, level=config.level)

    def comparator(previous: Any, next: Any) -> bool:
        result = detect(tag, display_name, previous, next, options=options)
        reporter(result)
        return previous is next

    return comparator


def adapt_comparator(previous: Any, next: Any) -> bool:
    """Drop-in equality hook with the default tag and reporter."""
    return make_comparator()(previous, next)
