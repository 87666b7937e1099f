from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import typer

from homelink.bridge import Bridge, open_bridge
from homelink.config import Settings, get_settings, resolve_config_path
from homelink.exceptions import HomelinkError

T = TypeVar("T")


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def run_with_bridge(settings: Settings, action: Callable[[Bridge], Awaitable[T]]) -> T:
    """Run ``action`` against a freshly opened bridge, exiting 1 on bridge errors."""

    async def _run() -> T:
        async with open_bridge(settings) as bridge:
            return await action(bridge)

    try:
        return asyncio.run(_run())
    except (HomelinkError, LookupError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
