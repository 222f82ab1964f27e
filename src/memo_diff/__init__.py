"""memo-diff: explain which props changed between two renders, and why."""

__version__ = "0.1.0"

from memo_diff.config import MemoDiffConfig, find_config, load_config
from memo_diff.engine.detector import (
    InvalidInputError,
    MemoDiffError,
    adapt_comparator,
    detect,
    detect_changes,
    make_comparator,
)
from memo_diff.engine.differ import diff_values
from memo_diff.engine.equality import deep_equal
from memo_diff.models import (
    ChangeDescriptor,
    ChangeReason,
    ComparisonResult,
    DiffChannel,
    DiffEntry,
    DiffOptions,
    DiffReport,
    ValueKind,
)
from memo_diff.report.reporter import format_report, report_diagnostics

__all__ = [
    "ChangeDescriptor",
    "ChangeReason",
    "ComparisonResult",
    "DiffChannel",
    "DiffEntry",
    "DiffOptions",
    "DiffReport",
    "InvalidInputError",
    "MemoDiffConfig",
    "MemoDiffError",
    "ValueKind",
    "adapt_comparator",
    "deep_equal",
    "detect",
    "detect_changes",
    "diff_values",
    "find_config",
    "format_report",
    "load_config",
    "make_comparator",
    "report_diagnostics",
    "__version__",
]
