"""CLI commands for dirkit.

This package contains all subcommand implementations.
"""

from dirkit.cli.commands import config, fs, store

__all__ = ["config", "fs", "store"]
