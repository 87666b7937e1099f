from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from homelink.models import Device, DeviceKind, HardwareKind, Zone, default_device

from .control import ControlPlane
from .refresh import Refresh

logger = logging.getLogger(__name__)

HostResolver = Callable[[str], Awaitable[Refresh]]


def zone_device(host: Device, zone: Zone) -> Device:
    """Synthesize the virtual device for one zone of ``host``."""
    return Device(
        id=f"{host.id}-{zone.zone_index}",
        network_address=host.network_address,
        kind=DeviceKind.SPRINKLER,
        hardware_kind=HardwareKind.PI,
        live_status={
            "on": zone.is_on,
            "zone_index": zone.zone_index,
            "position": zone.position,
        },
        firmware_version=str(zone.zone_index),
        owner_id=host.owner_id,
        display_name=zone.name,
        aliases=[zone.name, f"Zone {zone.zone_index + 1}"],
    )


class ZoneExpander:
    """Derives zone devices from a sprinkler host's live zone list.

    Zones are never cached or stored; every call asks the host again.
    """

    def __init__(self, control: ControlPlane, resolve_host: HostResolver) -> None:
        self._control = control
        self._resolve_host = resolve_host

    async def expand_host(self, host: Device) -> list[Device]:
        if host.kind is not DeviceKind.SPRINKLER_HOST:
            raise ValueError(f"Device {host.id} is not a sprinkler host")
        zones = await self._control.zones(host.network_address)
        logger.debug("Host %s reports %d zone(s)", host.id, len(zones))
        return [zone_device(host, zone) for zone in zones]

    async def lookup_zone(self, host_id: str, zone_index: int) -> Device:
        resolved = await self._resolve_host(host_id)
        host = resolved.device
        if host.is_sentinel or host.kind is not DeviceKind.SPRINKLER_HOST:
            logger.debug("No sprinkler host %s for zone %d", host_id, zone_index)
            return default_device()
        if not resolved.reachable:
            logger.debug("Host %s offline, zone %d unavailable", host_id, zone_index)
            return default_device()

        for zone in await self._control.zones(host.network_address):
            if zone.zone_index == zone_index:
                return zone_device(host, zone)

        logger.debug("Host %s has no zone %d", host_id, zone_index)
        return default_device()
