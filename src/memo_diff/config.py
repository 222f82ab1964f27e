"""Config file loading and auto-discovery for memo-diff.

Searches for ``memo-diff.yaml`` in the current directory and parent
directories and parses it into a ``MemoDiffConfig``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from memo_diff.models import DiffOptions

CONFIG_FILENAME = "memo-diff.yaml"
DEFAULT_TAG = "memo-diff"


@dataclass(frozen=True)
class MemoDiffConfig:
    """Parsed memo-diff configuration."""

    config_path: Path | None = None
    tag: str = DEFAULT_TAG
    include_function_source: bool = False
    max_value_length: int | None = None
    log_level: str = "DEBUG"

    def __post_init__(self) -> None:
        self.diff_options()
        _ = self.level

    def diff_options(self) -> DiffOptions:
        return DiffOptions(
            include_function_source=self.include_function_source,
            max_value_length=self.max_value_length,
        )

    @property
    def level(self) -> int:
        """Numeric logging level for ``log_level``."""
        value = logging.getLevelName(self.log_level.upper())
        if not isinstance(value, int):
            msg = f"Unknown log level: {self.log_level}"
            raise ValueError(msg)
        return value


def find_config(start: Path | None = None) -> Path | None:
    """Walk from *start* (default ``cwd()``) up to the filesystem root.

    Returns the first ``memo-diff.yaml`` found, or ``None``.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(
    path: str | Path | None = None,
    *,
    auto_discover: bool = True,
) -> MemoDiffConfig:
    """Load a memo-diff config file.

    Resolution order:

    1. Explicit *path* (error if it doesn't exist).
    2. Auto-discover by walking parent directories.
    3. Return an empty ``MemoDiffConfig`` (all defaults).
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).resolve()
        if not config_path.is_file():
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)
    elif auto_discover:
        config_path = find_config()

    if config_path is None:
        return MemoDiffConfig()

    return _parse_config(config_path)


def _parse_config(config_path: Path) -> MemoDiffConfig:
    text = config_path.read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}

    if not isinstance(data, dict):
        msg = f"Expected a YAML mapping in {config_path}, got {type(data).__name__}"
        raise ValueError(msg)

    try:
        options = DiffOptions(
            include_function_source=data.get("include_function_source", False),
            max_value_length=data.get("max_value_length"),
        )
    except ValidationError as exc:
        msg = f"Invalid diff options in {config_path}: {exc}"
        raise ValueError(msg) from exc

    log_level = str(data.get("log_level", "DEBUG"))
    if not isinstance(logging.getLevelName(log_level.upper()), int):
        msg = f"Unknown log level in {config_path}: {log_level}"
        raise ValueError(msg)

    return MemoDiffConfig(
        config_path=config_path,
        tag=str(data.get("tag", DEFAULT_TAG)),
        include_function_source=options.include_function_source,
        max_value_length=options.max_value_length,
        log_level=log_level,
    )
