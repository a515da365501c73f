"""Directory listing, search and mutation commands.

Provides the top-level ls, find, mkdir and rmdir commands. Each command
builds its entities from the loaded configuration and runs the blocking
form of the matching operation.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from dirkit.cli.types import OutputFormat, build_template, exit_on_status, get_config
from dirkit.fs.directory import Directory
from dirkit.fs.entity import Entity
from dirkit.fs.models import ListOptions, RemoveOptions
from dirkit.utils.formatting import (
    console,
    create_entity_table,
    format_entity_row,
    print_error,
    print_info,
    print_success,
)

TemplateOption = Annotated[
    str | None,
    typer.Option("--template", "-t", help="Exact full name to match."),
]
RegexOption = Annotated[
    str | None,
    typer.Option("--regex", "-r", help="Regular expression searched in full names."),
]
FormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format.",
        case_sensitive=False,
    ),
]


def ls(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Directory to list.")] = Path("."),
    template: TemplateOption = None,
    regex: RegexOption = None,
    files: Annotated[
        bool,
        typer.Option("--files", help="Only list files."),
    ] = False,
    dirs: Annotated[
        bool,
        typer.Option("--dirs", help="Only list directories."),
    ] = False,
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """List the direct children of a directory."""
    if files and dirs:
        print_error("Use either --files or --dirs, not both.")
        raise typer.Exit(code=1)

    config = get_config(ctx)
    directory = Directory(path, context=config.to_context())
    options = ListOptions(sync=True, template=build_template(template, regex))

    try:
        if files:
            result = directory.get_files(options)
        elif dirs:
            result = directory.get_directories(options)
        else:
            result = directory.get_all(options)
    except OSError as e:
        print_error(f"Cannot list {directory.full_path}: {e}")
        raise typer.Exit(code=1) from e

    exit_on_status(result.status, directory.full_path)
    _print_entities(result.data, f"Contents of {directory.full_path}", output_format)


def find(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Directory to search from.")] = Path("."),
    template: TemplateOption = None,
    regex: RegexOption = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Number of directories to examine (default: from config).",
        ),
    ] = None,
    dirs: Annotated[
        bool,
        typer.Option("--dirs", help="Collect directories instead of files."),
    ] = False,
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Search a directory tree within a directory budget."""
    config = get_config(ctx)
    directory = Directory(path, context=config.to_context())
    options = ListOptions(
        sync=True,
        template=build_template(template, regex),
        search_limit=limit if limit is not None else config.search_limit,
    )

    try:
        if dirs:
            result = directory.find_directories(options)
        else:
            result = directory.find_files(options)
    except OSError as e:
        print_error(f"Search in {directory.full_path} failed: {e}")
        raise typer.Exit(code=1) from e

    exit_on_status(result.status, directory.full_path)
    found = sorted(result.data, key=lambda e: e.full_path)
    _print_entities(found, f"Found under {directory.full_path}", output_format)

    if output_format == OutputFormat.TABLE:
        console.print(
            f"\n[dim]{len(found)} match(es), search limit {options.search_limit}[/dim]"
        )


def mkdir(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Directory to create.")],
) -> None:
    """Create a directory (its parent must exist)."""
    config = get_config(ctx)
    directory = Directory(path, context=config.to_context())

    try:
        status = directory.create()
    except OSError as e:
        print_error(f"Cannot create {directory.full_path}: {e}")
        raise typer.Exit(code=1) from e

    exit_on_status(status, directory.full_path)
    print_success(f"Created {directory.full_path}")


def rmdir(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Empty directory to remove.")],
) -> None:
    """Remove an empty directory."""
    config = get_config(ctx)
    directory = Directory(path, context=config.to_context())

    try:
        status = directory.remove(RemoveOptions(sync=True))
    except OSError as e:
        print_error(f"Cannot remove {directory.full_path}: {e}")
        raise typer.Exit(code=1) from e

    exit_on_status(status, directory.full_path)
    print_success(f"Removed {directory.full_path}")


# === Private helper functions ===


def _print_entities(entities: list[Entity], title: str, output_format: OutputFormat) -> None:
    """Display entities as a table or as JSON."""
    if output_format == OutputFormat.JSON:
        _print_json(entities)
        return

    if not entities:
        print_info("Nothing found.")
        return

    table = create_entity_table(title)
    for entity in entities:
        table.add_row(*format_entity_row(entity))
    console.print(table)


def _print_json(entities: list[Entity]) -> None:
    """Display entities as JSON."""
    data = [
        {
            "kind": e.kind.value,
            "name": e.full_name,
            "path": e.full_path,
        }
        for e in entities
    ]
    console.print_json(json.dumps(data))
