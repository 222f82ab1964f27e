"""Core data models for memo-diff.

Defines the schemas for:
- Value kinds (how a single attribute value is inspected)
- Change reasons (why an attribute is reported as changed)
- Diff reports (one-level detail for a changed attribute)
- Comparison results (what ``detect()`` returns)

Raw attribute values are held by reference.  When a model is dumped in
JSON mode they are rendered with the safe renderer, so a result can always
be serialized even when it carries callables or cyclic containers.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer

from memo_diff.engine.serialize import render_value

# --- Enums ---


class ValueKind(enum.StrEnum):
    ABSENT = "absent"
    PRIMITIVE = "primitive"
    FUNCTION = "function"
    COMPOSITE = "composite"


class ChangeReason(enum.StrEnum):
    DIFFERENT_OBJECTS = "changed and are different objects"
    CHANGED = "changed"
    SAME_STRUCTURE = "same structurally, but different object identity"
    OBJECTS_DIFFER = "objects are different"


class DiffChannel(enum.StrEnum):
    """Reserved report keys for whole-value findings."""

    WARNINGS = "warnings"
    FUNCTIONS = "functions"
    PRIMITIVES = "primitives"
    ERRORS = "errors"


# --- Diff reports ---


class DiffOptions(BaseModel):
    """Rendering options for the value differ."""

    include_function_source: bool = False
    """Describe callables by their source text instead of their name."""

    max_value_length: int | None = Field(None, ge=4)
    """Truncate serialized values longer than this. None disables truncation."""


class DiffEntry(BaseModel):
    """One finding inside a diff report.

    ``previous``/``next`` are serialized strings when rendering succeeded,
    otherwise the raw values.  ``message`` explains warnings and errors.
    """

    previous: Any = None
    next: Any = None
    message: str | None = None

    @field_serializer("previous", "next", when_used="json")
    def serialize_values(self, value: Any) -> Any:
        return render_value(value)


DiffReport = dict[str, DiffEntry]


# --- Comparison results ---


class ChangeDescriptor(BaseModel):
    """A single changed attribute."""

    previous_value: Any = None
    next_value: Any = None
    reason: ChangeReason
    diff: DiffReport = Field(default_factory=dict)

    @field_serializer("previous_value", "next_value", when_used="json")
    def serialize_raw_values(self, value: Any) -> Any:
        return render_value(value)


class ComparisonResult(BaseModel):
    """Output of one comparison.

    ``are_equal`` is the verdict a memoization layer would have received:
    the caller-supplied comparator's answer, or identity of the two maps.
    It does not affect which keys appear in ``changes``.
    """

    tag: str = ""
    display_name: str = ""
    are_equal: bool
    changes: dict[Any, ChangeDescriptor] = Field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    @property
    def changed_keys(self) -> list[Any]:
        return list(self.changes)
