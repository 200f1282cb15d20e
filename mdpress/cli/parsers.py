"""CLI argument parsers and validators."""

from __future__ import annotations

import typer
import yaml


def parse_var(value: str) -> tuple[str, object]:
    """Parse a template variable in format KEY=VALUE.

    VALUE is read as a YAML scalar, so ``true`` and ``3`` arrive typed.
    """
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, raw = value.split("=", 1)
    key = key.strip()
    if not key.isidentifier():
        raise typer.BadParameter(f"Invalid variable name: {key!r}")
    try:
        parsed = yaml.safe_load(raw) if raw else ""
    except yaml.YAMLError:
        parsed = raw
    if isinstance(parsed, (dict, list)) or parsed is None:
        parsed = raw
    return key, parsed


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e
