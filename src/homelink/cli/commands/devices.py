from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from homelink.bridge import Bridge
from homelink.cli.common import load_settings_or_exit, run_with_bridge
from homelink.core.projection import sync_response
from homelink.models import Device, DeviceKind, HardwareKind

app = typer.Typer(no_args_is_help=True, help="Resolve and manage devices.")


class PowerState(str, Enum):
    ON = "on"
    OFF = "off"


def _status_text(status: Any) -> str:
    if isinstance(status, bool):
        return "on" if status else "off"
    return json.dumps(status, sort_keys=True)


def _device_table(devices: list[Device]) -> Table:
    table = Table()
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Kind")
    table.add_column("Address")
    table.add_column("State")

    for device in devices:
        table.add_row(
            device.id,
            device.friendly_name,
            device.kind.value,
            device.network_address,
            _status_text(device.live_status),
        )
    return table


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


@app.command("list")
def list_devices(
    owner: Annotated[str, typer.Argument(help="Owner (user) id")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Print device records as JSON")
    ] = False,
) -> None:
    """List a user's devices, zones of sprinkler hosts included."""
    settings = load_settings_or_exit()

    async def _list(bridge: Bridge) -> list[Device]:
        return await bridge.aggregator.list_for_user(owner)

    devices = run_with_bridge(settings, _list)

    if as_json:
        _echo_json([device.to_record() for device in devices])
        return

    console = Console()
    if not devices:
        console.print(f"No devices for user '{owner}'.")
        return
    console.print(_device_table(devices))


@app.command("get")
def get_device(
    device_id: Annotated[str, typer.Argument(help="Device or zone id")],
) -> None:
    """Resolve a single device id and print its record."""
    settings = load_settings_or_exit()

    async def _get(bridge: Bridge) -> Device:
        return await bridge.resolver.resolve(device_id)

    device = run_with_bridge(settings, _get)
    if device.is_sentinel:
        typer.echo(f"Device '{device_id}' not found", err=True)
        raise typer.Exit(1)
    _echo_json(device.to_record())


@app.command("sync")
def sync_devices(
    owner: Annotated[str, typer.Argument(help="Owner (user) id")],
) -> None:
    """Print the voice-assistant SYNC payload for a user."""
    settings = load_settings_or_exit()

    async def _list(bridge: Bridge) -> list[Device]:
        return await bridge.aggregator.list_for_user(owner)

    devices = run_with_bridge(settings, _list)
    _echo_json(sync_response(owner, devices))


@app.command("add")
def add_device(
    owner: Annotated[str, typer.Argument(help="Owner (user) id")],
    device_id: Annotated[str, typer.Argument(help="New device id")],
    kind: Annotated[
        DeviceKind, typer.Option("--kind", "-k", help="Device kind")
    ] = DeviceKind.SWITCH,
    hardware: Annotated[
        HardwareKind, typer.Option("--hardware", help="Controller hardware")
    ] = HardwareKind.OTHER,
    ip: Annotated[str, typer.Option("--ip", help="Network address")] = "",
    name: Annotated[str, typer.Option("--name", "-n", help="Display name")] = "",
    aliases: Annotated[
        list[str] | None, typer.Option("--alias", help="Nickname, repeatable")
    ] = None,
) -> None:
    """Add a device to a user's account."""
    settings = load_settings_or_exit()
    device = Device(
        id=device_id,
        network_address=ip,
        kind=kind,
        hardware_kind=hardware,
        display_name=name,
        aliases=aliases or [name],
    )

    async def _add(bridge: Bridge) -> Device:
        return await bridge.directory.add_device(owner, device)

    added = run_with_bridge(settings, _add)

    console = Console()
    console.print(f"[green]✓[/green] Added '{added.friendly_name}' for '{owner}'")


@app.command("remove")
def remove_device(
    owner: Annotated[str, typer.Argument(help="Owner (user) id")],
    device_id: Annotated[str, typer.Argument(help="Device id")],
) -> None:
    """Remove a device from a user's account."""
    settings = load_settings_or_exit()

    async def _remove(bridge: Bridge) -> bool:
        return await bridge.directory.remove_device(owner, device_id)

    console = Console()
    if run_with_bridge(settings, _remove):
        console.print(f"[green]✓[/green] Removed device '{device_id}'")
    else:
        console.print(f"[yellow]![/yellow] Device '{device_id}' not found")
        raise typer.Exit(1)


@app.command("set")
def set_state(
    device_id: Annotated[str, typer.Argument(help="Device or zone id")],
    state: Annotated[PowerState, typer.Argument(help="on or off")],
) -> None:
    """Switch a device or sprinkler zone on or off."""
    settings = load_settings_or_exit()
    on = state is PowerState.ON

    async def _set(bridge: Bridge) -> Device:
        return await bridge.commander.set_power(device_id, on)

    device = run_with_bridge(settings, _set)

    console = Console()
    console.print(f"[green]✓[/green] {device.friendly_name} is now {state.value}")
