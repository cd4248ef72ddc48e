"""
Script command for sievedir.

Stores, activates, renames and removes filter scripts.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from pathlib import Path
from typing import Optional

import typer

from sievedir.compiler import CompileError, decode_bytecode
from sievedir.store import (
    BYTECODE_SUFFIX,
    SCRIPT_SUFFIX,
    ScriptNameError,
    ScriptStore,
    Status,
    validate_name,
)

app = typer.Typer(help="Store and activate filter scripts")

# Exit codes by status
EXIT_CODES = {
    Status.OK: 0,
    Status.NOTFOUND: 1,
    Status.INVALID: 2,
    Status.IOERROR: 3,
    Status.FAIL: 3,
}


def _get_store(ctx: typer.Context) -> ScriptStore:
    """Build a store for the directory chosen by the main callback."""
    return ScriptStore(ctx.obj["sieve_dir"])


def _check_names(*names: str) -> None:
    """Exit with the specific reason if any name is invalid."""
    for name in names:
        try:
            validate_name(name)
        except ScriptNameError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(EXIT_CODES[Status.INVALID])


def _finish(status: Status, name: str, done: str) -> None:
    """Report a status and exit with the matching code."""
    if status is Status.OK:
        typer.echo(done)
        return

    messages = {
        Status.NOTFOUND: f"Script not found: {name}",
        Status.INVALID: f"Invalid script name: {name!r}",
        Status.IOERROR: f"I/O error while updating {name} (see log)",
        Status.FAIL: f"Failed to compile {name}",
    }
    typer.echo(f"Error: {messages[status]}", err=True)
    raise typer.Exit(EXIT_CODES[status])


@app.command("list")
def list_command(ctx: typer.Context):
    """List stored scripts; the active one is marked with '*'.

    Examples:
        sievedir script list
    """
    scripts = _get_store(ctx).list_scripts()

    if not scripts:
        typer.echo(f"No scripts found in {ctx.obj['sieve_dir']}")
        return

    for info in scripts:
        marker = "*" if info.active else " "
        badge = "" if info.has_bytecode else " [NO BYTECODE]"
        typer.echo(f"{marker} {info.name} ({info.size} bytes){badge}")


@app.command("show")
def show_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Script name"),
    bytecode: bool = typer.Option(
        False, "--bytecode", "-b", help="Decode and print the compiled statements"
    ),
):
    """Print the stored source (or decoded bytecode) of a script.

    Examples:
        sievedir script show vacation
        sievedir script show vacation --bytecode
    """
    _check_names(name)
    suffix = BYTECODE_SUFFIX if bytecode else SCRIPT_SUFFIX
    content = _get_store(ctx).read_script(f"{name}{suffix}")
    if content is None:
        typer.echo(f"Error: Script not found: {name}", err=True)
        raise typer.Exit(1)

    if bytecode:
        try:
            statements = decode_bytecode(content)
        except CompileError as e:
            typer.echo(f"Error: cannot decode {name}{suffix}: {e}", err=True)
            raise typer.Exit(EXIT_CODES[Status.FAIL])
        for statement in statements:
            typer.echo(statement)
        return

    typer.echo(content.decode("utf-8", errors="replace"), nl=False)


@app.command("put")
def put_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Script name"),
    source: Path = typer.Argument(..., help="File containing the script text"),
    activate: bool = typer.Option(False, "--activate", "-a", help="Activate after storing"),
):
    """Compile and store a script, replacing any existing one.

    Examples:
        sievedir script put vacation ./vacation.sieve
        sievedir script put vacation ./vacation.sieve --activate
    """
    _check_names(name)
    try:
        content = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error: cannot read {source}: {e}", err=True)
        raise typer.Exit(1)

    store = _get_store(ctx)
    result = store.put(name, content)

    if result.status is Status.INVALID:
        typer.echo(f"Error: script {name!r} rejected:", err=True)
        for error in result.errors:
            typer.echo(f"  {error}", err=True)
        raise typer.Exit(EXIT_CODES[Status.INVALID])

    if activate and result.ok:
        _finish(store.activate(name), name, f"Stored and activated {name}")
        return

    _finish(result.status, name, f"Stored {name}")


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Script name"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete even if active"),
):
    """Delete a script.

    The active script is only deleted with --force; the active link is
    then cleared as well.

    Examples:
        sievedir script delete vacation
    """
    _check_names(name)
    store = _get_store(ctx)

    if store.is_active(name):
        if not force:
            typer.echo(f"Error: {name} is active; deactivate it or use --force", err=True)
            raise typer.Exit(1)
        status = store.deactivate()
        if status is not Status.OK:
            _finish(status, name, "")

    _finish(store.delete(name), name, f"Deleted {name}")


@app.command("rename")
def rename_command(
    ctx: typer.Context,
    old_name: str = typer.Argument(..., help="Current script name"),
    new_name: str = typer.Argument(..., help="New script name"),
):
    """Rename a script (the active link follows it).

    Examples:
        sievedir script rename vacation vacation-2025
    """
    _check_names(old_name, new_name)
    status = _get_store(ctx).rename(old_name, new_name)
    _finish(status, old_name, f"Renamed {old_name} to {new_name}")


@app.command("activate")
def activate_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Script name"),
):
    """Make a script the active one.

    Examples:
        sievedir script activate vacation
    """
    _check_names(name)
    store = _get_store(ctx)
    if not store.exists(name):
        typer.echo(f"Error: Script not found: {name}", err=True)
        raise typer.Exit(EXIT_CODES[Status.NOTFOUND])

    _finish(store.activate(name), name, f"Activated {name}")


@app.command("deactivate")
def deactivate_command(ctx: typer.Context):
    """Deactivate the active script, if any."""
    _finish(_get_store(ctx).deactivate(), "defaultbc", "No script is active")


@app.command("active")
def active_command(ctx: typer.Context):
    """Print the name of the active script."""
    name = _get_store(ctx).get_active()
    if name is None:
        typer.echo("No script is active")
        raise typer.Exit(1)
    typer.echo(name)


@app.command("count")
def count_command(
    ctx: typer.Context,
    exclude: Optional[str] = typer.Option(
        None, "--exclude", "-x", help="Script name to leave out of the count"
    ),
):
    """Count stored scripts (for enforcing script limits).

    Examples:
        sievedir script count
        sievedir script count --exclude vacation
    """
    typer.echo(str(_get_store(ctx).count_others(exclude)))
