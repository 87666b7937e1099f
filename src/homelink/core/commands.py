from __future__ import annotations

import logging

from homelink.models import Device, DeviceKind, HardwareKind
from homelink.storage import DeviceDirectory

from .control import ControlPlane
from .identifiers import ZoneId, classify
from .zones import zone_device

logger = logging.getLogger(__name__)


class Commander:
    """Switches devices on and off."""

    def __init__(self, directory: DeviceDirectory, control: ControlPlane) -> None:
        self._directory = directory
        self._control = control

    async def set_power(self, device_id: str, on: bool) -> Device:
        """Turn a device on or off and return its new state.

        Zones and sprinkler hosts are switched on the controller itself and
        Arduino devices through their relay endpoint; for other hardware only
        the stored state changes. Raises ``LookupError`` for unknown ids.
        """
        identifier = classify(device_id)
        if isinstance(identifier, ZoneId):
            return await self._set_zone(identifier, on)

        device = await self._directory.get_device(device_id)
        if device.is_sentinel:
            raise LookupError(f"Unknown device: {device_id}")

        if device.kind is DeviceKind.SPRINKLER_HOST:
            await self._control.set_system_state(device.network_address, on)
        elif device.hardware_kind is HardwareKind.ARDUINO:
            # relays are addressed by the device id
            await self._control.set_relay(
                device.network_address, device.id, "true" if on else "false"
            )

        device = device.with_status(on)
        if not await self._directory.save_device(device):
            logger.warning("State of %s changed but could not be saved", device_id)
        return device

    async def _set_zone(self, identifier: ZoneId, on: bool) -> Device:
        host = await self._directory.get_device(identifier.host_id)
        if host.is_sentinel or host.kind is not DeviceKind.SPRINKLER_HOST:
            raise LookupError(f"Unknown sprinkler host: {identifier.host_id}")

        zones = await self._control.zones(host.network_address)
        for zone in zones:
            if zone.zone_index == identifier.zone_index:
                await self._control.set_zone(host.network_address, zone.zone_index, on)
                return zone_device(host, zone.model_copy(update={"is_on": on}))

        raise LookupError(f"Unknown zone: {identifier.device_id}")
