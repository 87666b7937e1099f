from __future__ import annotations

from typing import Annotated

import typer

from homelink.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands import devices as devices_cmd

app = typer.Typer(help="homelink - smart-home device bridge", no_args_is_help=True)

app.add_typer(config_cmd.app, name="config")
app.add_typer(devices_cmd.app, name="devices")


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """homelink CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"homelink version {get_version('homelink')}")
        raise typer.Exit()
