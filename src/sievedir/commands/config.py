# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Config command for sievedir.

Provides basic configuration validation.
"""

import typer

app = typer.Typer(help="Manage and validate configuration")


@app.command()
def validate(ctx: typer.Context):
    """
    Validate configuration.

    Shows the resolved sieve directory and whether it exists.
    """
    config = ctx.obj["config"]
    sieve_dir = ctx.obj["sieve_dir"]

    typer.echo("Validating configuration...")
    typer.echo()
    typer.echo("Configuration structure is valid")
    if "log_level" in config:
        typer.echo(f"Log level: {config['log_level']}")
    typer.echo(f"Sieve directory: {sieve_dir}")

    if not sieve_dir.is_dir():
        typer.echo(f"Error: sieve directory does not exist: {sieve_dir}", err=True)
        raise typer.Exit(1)

    typer.echo()
    typer.echo("Configuration validation complete!")
