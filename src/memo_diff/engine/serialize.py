"""Best-effort rendering of attribute values for diff reports.

``serialize()`` is strict and raises on anything JSON cannot express
(callables, sets, circular containers).  Callers that must not fail use
``render_value()`` or catch ``SERIALIZATION_ERRORS`` themselves.
"""

from __future__ import annotations

import functools
import inspect
import json
import textwrap
from typing import Any

from pydantic import BaseModel

SERIALIZATION_ERRORS = (TypeError, ValueError, RecursionError)

_ELLIPSIS = "..."


def serialize(value: Any) -> str:
    """Serialize *value* to a JSON string.

    Pydantic models are dumped through ``model_dump(mode="json")`` first.
    Raises one of ``SERIALIZATION_ERRORS`` when the value has no JSON form.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    return json.dumps(value, ensure_ascii=False)


def describe_callable(fn: Any, include_source: bool = False) -> str:
    """Return a textual representation of a callable.

    With *include_source* the dedented source text is used when it can be
    located; otherwise the qualified name and signature.
    """
    if include_source:
        try:
            return textwrap.dedent(inspect.getsource(fn)).strip()
        except (OSError, TypeError):
            pass

    if isinstance(fn, functools.partial):
        return f"functools.partial({describe_callable(fn.func)})"

    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if name is None:
        name = type(fn).__qualname__
    module = getattr(fn, "__module__", None)
    if module and module != "builtins":
        name = f"{module}.{name}"

    try:
        signature = str(inspect.signature(fn))
    except (TypeError, ValueError):
        signature = "(...)"
    return f"{name}{signature}"


def truncate(text: str, max_length: int | None) -> str:
    if max_length is None or len(text) <= max_length:
        return text
    return text[: max_length - len(_ELLIPSIS)] + _ELLIPSIS


def render_value(value: Any) -> Any:
    """Return a JSON-compatible stand-in for *value*. Never raises."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if callable(value):
        return describe_callable(value)
    try:
        return json.loads(serialize(value))
    except SERIALIZATION_ERRORS:
        pass
    try:
        return repr(value)
    except Exception:
        return f"<{type(value).__name__} object>"
