"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from dirkit import __version__
from dirkit.cli.commands import config, fs, store
from dirkit.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="dirkit",
    help="Filesystem entities with bounded recursive search.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dirkit version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to use instead of the default.",
        ),
    ] = None,
) -> None:
    """dirkit - Filesystem entities with bounded recursive search.

    List, search and mutate directories through the entity layer, and
    manage the persistent key-value store.
    """
    setup_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


# Register commands
app.command("ls")(fs.ls)
app.command("find")(fs.find)
app.command("mkdir")(fs.mkdir)
app.command("rmdir")(fs.rmdir)
app.add_typer(store.app, name="store")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
