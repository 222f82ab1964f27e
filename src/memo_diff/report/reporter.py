"""Human-readable rendering of comparison results.

Formatting is kept apart from detection: ``format_report()`` turns a
``ComparisonResult`` into lines, ``report_diagnostics()`` sends those
lines to a standard library logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from memo_diff.engine.serialize import render_value
from memo_diff.models import ComparisonResult, DiffEntry

logger = logging.getLogger("memo_diff")


def _fmt(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(render_value(value), ensure_ascii=False, default=str)


def _prefix(result: ComparisonResult) -> str:
    return " ".join(part for part in (result.tag, result.display_name) if part)


def _entry_line(prefix: str, key: Any, channel: str, entry: DiffEntry) -> str:
    line = f"{prefix}   {key}.{channel}: {_fmt(entry.previous)} -> {_fmt(entry.next)}"
    if entry.message:
        line += f" ({entry.message})"
    return line.lstrip()


def format_report(result: ComparisonResult) -> list[str]:
    """Render *result* as log lines, one finding per line."""
    prefix = _prefix(result)
    name = result.display_name or "component"

    def line(text: str) -> str:
        return f"{prefix} {text}" if prefix else text

    lines = [
        line("---- BEGIN RENDER ----"),
        line(f"Are props equal? {result.are_equal}"),
        line(f"*** Why did {name} render? *** {len(result.changes)} changed prop(s)"),
    ]
    for key, change in result.changes.items():
        lines.append(line(f"prop: {key} {change.reason.value}"))
        for channel, entry in change.diff.items():
            lines.append(_entry_line(prefix, key, channel, entry))
    lines.append(line("---- END RENDER ----"))
    return lines


def report_diagnostics(
    result: ComparisonResult,
    log: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Emit the formatted report for *result* to *log* (default ``memo_diff``)."""
    log = log or logger
    if not log.isEnabledFor(level):
        return
    for text in format_report(result):
        log.log(level, text)
