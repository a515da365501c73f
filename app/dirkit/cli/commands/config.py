"""Configuration commands.

Provides commands to show the effective configuration and to write a
default configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from dirkit.cli.types import get_config
from dirkit.core.config import ConfigError, get_default_config, save_config
from dirkit.core.paths import get_config_path
from dirkit.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize the dirkit configuration.",
    no_args_is_help=True,
)


def _selected_path(ctx: typer.Context) -> Path:
    if ctx.obj and ctx.obj.get("config_path") is not None:
        return ctx.obj["config_path"]
    return get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = get_config(ctx)
    path = _selected_path(ctx)

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("project_root", escape(str(config.effective_project_root)))
    table.add_row("local_mode", str(config.local_mode).lower())
    table.add_row("search_limit", str(config.search_limit))
    table.add_row("store_path", escape(str(config.effective_store_path)))
    console.print(table)

    if not path.exists():
        console.print(f"\n[dim]Showing defaults, no config file at {escape(str(path))}[/dim]")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default configuration file."""
    path = _selected_path(ctx)
    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(get_default_config(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
