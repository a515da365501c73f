"""CLI package for dirkit.

This package contains the Typer application and all subcommands.
"""

from dirkit.cli.main import app

__all__ = ["app"]
