# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Main CLI entry point for sievedir.

Dumb trigger: resolves config and the sieve directory, then hands off to
the script and config command groups.
"""

import logging
from typing import Optional

import typer

from sievedir import __version__
from sievedir.config import ConfigError, load_config, resolve_sieve_dir


app = typer.Typer(
    name="sievedir",
    help="Manage filter scripts in a sieve directory",
    no_args_is_help=True,
)


def _setup_logging(verbose: bool, config: dict) -> None:
    """Configure root logging from --verbose or config log_level."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, str(config.get("log_level", "WARNING")).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.callback()
def main_callback(
    ctx: typer.Context,
    sieve_dir: Optional[str] = typer.Option(None, "--dir", "-d", help="Sieve directory"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Manage filter scripts in a sieve directory."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _setup_logging(verbose, config)

    ctx.obj = {
        "config": config,
        "config_path": config_path,
        "sieve_dir": resolve_sieve_dir(config, sieve_dir),
        "verbose": verbose,
    }


@app.command()
def version():
    """Show version information."""
    typer.echo(f"sievedir version {__version__}")


# Static commands (config, script)
from sievedir.commands import config, script

app.add_typer(config.app, name="config")
app.add_typer(script.app, name="script")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
