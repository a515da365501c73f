"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from dirkit.fs.entity import Entity

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "#69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "bold_header": "bold #69B9A1",
        "dim": "#b2bec3",
        "entity.file": "#ffffff",
        "entity.directory": "bold #0e8ac8",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def create_entity_table(title: str) -> Table:
    """Create a pre-configured table for displaying entities.

    Args:
        title: Table title.

    Returns:
        Rich Table with kind, name and path columns.
    """
    table = Table(
        title=escape(title),
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Kind", width=9)
    table.add_column("Name", no_wrap=True)
    table.add_column("Path", style="muted")
    return table


def format_entity_row(entity: Entity) -> tuple[str, str, str]:
    """Format an entity as a table row with kind-specific styling.

    Args:
        entity: File or directory to format.

    Returns:
        Tuple of (kind, name, path) with Rich markup.
    """
    style = f"entity.{entity.kind.value}"
    return (
        f"[{style}]{entity.kind.value}[/]",
        f"[{style}]{escape(entity.full_name)}[/]",
        f"[muted]{escape(entity.full_path)}[/]",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_error(message: str) -> None:
    """Print an error message, escaping any markup in it."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
