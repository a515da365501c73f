"""Key-value store commands.

Provides commands to read, write, delete and rename values in the
persistent store configured for dirkit.
"""

import json
from typing import Annotated, Any

import typer

from dirkit.cli.types import exit_on_status, get_config
from dirkit.core.store import KeyValueStore, StoreError
from dirkit.fs.models import Status
from dirkit.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Read and write the persistent key-value store.",
    no_args_is_help=True,
)

CompressOption = Annotated[
    bool,
    typer.Option("--compress", "-z", help="Value is stored compressed."),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Value is JSON."),
]


def _open_store(ctx: typer.Context) -> KeyValueStore:
    return KeyValueStore(get_config(ctx).effective_store_path)


@app.command("list")
def list_keys(ctx: typer.Context) -> None:
    """List stored keys."""
    store = _open_store(ctx)
    try:
        keys = store.keys()
    except StoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not keys:
        print_info("Store is empty.")
        return
    for key in keys:
        typer.echo(key)


@app.command()
def get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to read.")],
    compress: CompressOption = False,
    as_json: JsonOption = False,
) -> None:
    """Print the value stored under KEY."""
    store = _open_store(ctx)
    try:
        result = store.load(key, decompress=compress, parse=as_json)
    except StoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    exit_on_status(result.status, key)
    if as_json:
        console.print_json(json.dumps(result.data))
    else:
        typer.echo(result.data)


@app.command("set")
def set_value(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to write.")],
    value: Annotated[str, typer.Argument(help="Value to store.")],
    compress: CompressOption = False,
    as_json: JsonOption = False,
    no_overwrite: Annotated[
        bool,
        typer.Option("--no-overwrite", help="Fail if the key already exists."),
    ] = False,
) -> None:
    """Store VALUE under KEY."""
    data: Any = value
    if as_json:
        try:
            data = json.loads(value)
        except json.JSONDecodeError as e:
            print_error(f"Value is not valid JSON: {e}")
            raise typer.Exit(code=1) from e

    store = _open_store(ctx)
    try:
        status = store.save(
            key,
            data,
            stringify=as_json,
            compress=compress,
            overwrite=not no_overwrite,
        )
    except StoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    exit_on_status(status, key)
    print_success(f"Stored {key}")


@app.command("rm")
def remove(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to delete.")],
) -> None:
    """Delete the value stored under KEY."""
    store = _open_store(ctx)
    try:
        status = store.remove(key)
    except StoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    exit_on_status(status, key)
    print_success(f"Removed {key}")


@app.command("mv")
def rename(
    ctx: typer.Context,
    old: Annotated[str, typer.Argument(help="Current key.")],
    new: Annotated[str, typer.Argument(help="New key.")],
    force: Annotated[
        bool,
        typer.Option("--force", help="Replace an existing value under NEW."),
    ] = False,
) -> None:
    """Move the value stored under OLD to NEW."""
    store = _open_store(ctx)
    try:
        status = store.rename(old, new, overwrite=force)
    except StoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    exit_on_status(status, old if status == Status.PATH_NOT_FOUND else new)
    print_success(f"Renamed {old} to {new}")
