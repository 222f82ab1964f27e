"""memo-diff CLI: compare two attribute maps stored on disk.

Commands:
    compare     Report which attributes differ between two JSON/YAML files
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from memo_diff import __version__
from memo_diff.config import MemoDiffConfig, load_config
from memo_diff.engine.detector import InvalidInputError, detect
from memo_diff.report.reporter import format_report


def _resolve_cfg(path: str | None) -> MemoDiffConfig:
    """Load config from an explicit path, or auto-discover (falls back to defaults)."""
    if path is not None:
        try:
            return load_config(path)
        except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
            raise click.ClickException(str(exc)) from exc
    try:
        return load_config()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        click.echo(f"Warning: ignoring config file: {exc}", err=True)
        return MemoDiffConfig()


def _load_attributes(path: str) -> Any:
    """Read a JSON (by extension) or YAML file."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        if path.endswith(".json"):
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Cannot parse {path}: {exc}") from exc


# --- Root group ---


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """memo-diff: explain why a component's props changed."""


# --- compare command ---


@cli.command()
@click.argument("previous", type=click.Path(exists=True, dir_okay=False))
@click.argument("next_", metavar="NEXT", type=click.Path(exists=True, dir_okay=False))
@click.option("--tag", default=None, help="Label prefixed to report lines.")
@click.option("--display-name", default="", help="Name of the compared component.")
@click.option("--config", "config_path", default=None, help="Path to memo-diff.yaml.")
@click.option("--json-output", is_flag=True, help="Output as JSON.")
@click.option("--function-source", is_flag=True, help="Describe callables by source text.")
@click.option("--exit-code", is_flag=True, help="Exit with status 1 when props changed.")
def compare(
    previous: str,
    next_: str,
    tag: str | None,
    display_name: str,
    config_path: str | None,
    json_output: bool,
    function_source: bool,
    exit_code: bool,
) -> None:
    """Compare the attribute maps in PREVIOUS and NEXT."""
    cfg = _resolve_cfg(config_path)
    options = cfg.diff_options()
    if function_source:
        options = options.model_copy(update={"include_function_source": True})

    prev_attrs = _load_attributes(previous)
    next_attrs = _load_attributes(next_)

    try:
        tag = tag if tag is not None else cfg.tag
        result = detect(tag, display_name, prev_attrs, next_attrs, options=options)
    except InvalidInputError as exc:
        raise click.ClickException(str(exc)) from exc

    if json_output:
        click.echo(result.model_dump_json(indent=2))
    else:
        for line in format_report(result):
            click.echo(line)

    if exit_code and result.has_changes:
        sys.exit(1)


if __name__ == "__main__":
    cli()
