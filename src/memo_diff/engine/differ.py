"""One-level value differ for changed attributes.

Dispatch on the kinds of the two values:

- both absent: nothing to report
- one absent: a ``warnings`` entry naming the missing side
- both composite: one entry per differing key of the next value
- both callable: a ``functions`` entry with both descriptions
- same primitive kind: a ``primitives`` entry with both serialized forms
- anything else: an ``errors`` entry flagging the type mismatch

Serialization problems never escape; they degrade to entries that carry
the raw values and an explanatory message.
"""

from __future__ import annotations

from typing import Any

from memo_diff.engine.equality import deep_equal
from memo_diff.engine.kinds import classify, composite_entries, primitive_kind
from memo_diff.engine.serialize import (
    SERIALIZATION_ERRORS,
    describe_callable,
    serialize,
    truncate,
)
from memo_diff.models import DiffChannel, DiffEntry, DiffOptions, DiffReport, ValueKind

_DEFAULT_OPTIONS = DiffOptions()
_CHANNEL_NAMES = frozenset(channel.value for channel in DiffChannel)


def diff_values(
    previous: Any,
    next: Any,
    options: DiffOptions | None = None,
) -> DiffReport:
    """Explain how *previous* and *next* differ, one level deep."""
    options = options or _DEFAULT_OPTIONS
    prev_kind = classify(previous)
    next_kind = classify(next)

    if prev_kind is ValueKind.ABSENT and next_kind is ValueKind.ABSENT:
        return {}

    if prev_kind is ValueKind.ABSENT or next_kind is ValueKind.ABSENT:
        return {DiffChannel.WARNINGS.value: _absent_entry(previous, next, prev_kind, options)}

    if prev_kind is ValueKind.COMPOSITE and next_kind is ValueKind.COMPOSITE:
        return _diff_composites(previous, next, options)

    if prev_kind is ValueKind.FUNCTION and next_kind is ValueKind.FUNCTION:
        return {
            DiffChannel.FUNCTIONS.value: DiffEntry(
                previous=_describe(previous, options),
                next=_describe(next, options),
            ),
        }

    if (
        prev_kind is ValueKind.PRIMITIVE
        and next_kind is ValueKind.PRIMITIVE
        and primitive_kind(previous) == primitive_kind(next)
    ):
        try:
            entry = DiffEntry(
                previous=_serialize(previous, options),
                next=_serialize(next, options),
            )
        except SERIALIZATION_ERRORS as exc:
            return {
                DiffChannel.WARNINGS.value: DiffEntry(
                    previous=previous,
                    next=next,
                    message=f"Could not serialize values: {exc}",
                ),
            }
        return {DiffChannel.PRIMITIVES.value: entry}

    return {
        DiffChannel.ERRORS.value: DiffEntry(
            previous=previous,
            next=next,
            message=(
                f"Type mismatch: previous is {_kind_label(previous, prev_kind)}, "
                f"next is {_kind_label(next, next_kind)}"
            ),
        ),
    }


def _absent_entry(
    previous: Any,
    next: Any,
    prev_kind: ValueKind,
    options: DiffOptions,
) -> DiffEntry:
    if prev_kind is ValueKind.ABSENT:
        return DiffEntry(
            previous=None,
            next=_render_present(next, options),
            message="Previous value is absent, next value is present",
        )
    return DiffEntry(
        previous=_render_present(previous, options),
        next=None,
        message="Next value is absent, previous value is present",
    )


def _render_present(value: Any, options: DiffOptions) -> Any:
    if classify(value) is ValueKind.FUNCTION:
        return _describe(value, options)
    try:
        return _serialize(value, options)
    except SERIALIZATION_ERRORS:
        return value


def _diff_composites(previous: Any, next: Any, options: DiffOptions) -> DiffReport:
    prev_entries = composite_entries(previous)
    next_entries = composite_entries(next)
    text_keys = {key for key in next_entries if isinstance(key, str)}
    report: DiffReport = {}

    for key, next_item in next_entries.items():
        prev_item = prev_entries.get(key)
        if deep_equal(prev_item, next_item):
            continue
        try:
            entry = DiffEntry(
                previous=_serialize(prev_item, options),
                next=_serialize(next_item, options),
            )
        except SERIALIZATION_ERRORS as exc:
            entry = DiffEntry(
                previous=prev_item,
                next=next_item,
                message=f"Could not serialize values for key {key!r}: {exc}",
            )
        report[_report_key(key, text_keys, report)] = entry

    return report


def _report_key(key: Any, text_keys: set[str], report: DiffReport) -> str:
    """Label for a sub-key, unique within *report* and never a channel name."""
    if isinstance(key, str):
        label = repr(key) if key in _CHANNEL_NAMES else key
    else:
        label = str(key)
        if label in text_keys or label in _CHANNEL_NAMES:
            label = f"{key!r} ({type(key).__name__})"

    base, n = label, 2
    while label in report:
        label = f"{base} #{n}"
        n += 1
    return label


def _serialize(value: Any, options: DiffOptions) -> str:
    return truncate(serialize(value), options.max_value_length)


def _describe(fn: Any, options: DiffOptions) -> str:
    text = describe_callable(fn, include_source=options.include_function_source)
    return truncate(text, options.max_value_length)


def _kind_label(value: Any, kind: ValueKind) -> str:
    if kind is ValueKind.PRIMITIVE:
        return f"primitive ({primitive_kind(value)})"
    return kind.value
