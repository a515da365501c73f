"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import re
from enum import Enum
from pathlib import Path

import typer

from dirkit.core.config import DirkitConfig, require_config
from dirkit.fs.models import Status, Template
from dirkit.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for listing commands."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> DirkitConfig:
    """Load the configuration selected by the global --config option."""
    config_path: Path | None = None
    if ctx.obj:
        config_path = ctx.obj.get("config_path")
    return require_config(config_path)


def build_template(template: str | None, regex: str | None) -> Template:
    """Turn the --template / --regex options into a discovery template.

    Raises:
        typer.Exit: If both options are given or the pattern is invalid.
    """
    if template is not None and regex is not None:
        print_error("Use either --template or --regex, not both.")
        raise typer.Exit(code=1)
    if regex is None:
        return template
    try:
        return re.compile(regex)
    except re.error as e:
        print_error(f"Invalid regular expression '{regex}': {e}")
        raise typer.Exit(code=1) from e


def exit_on_status(status: Status, subject: str) -> None:
    """Print an error and exit unless the status is OK.

    Args:
        status: Operation outcome.
        subject: What the operation was about, for the message.

    Raises:
        typer.Exit: With code 1 for any status other than OK.
    """
    if status == Status.OK:
        return
    print_error(f"{status.value.replace('_', ' ')}: {subject}")
    raise typer.Exit(code=1)
