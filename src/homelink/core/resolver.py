from __future__ import annotations

import logging

from homelink.models import Device
from homelink.storage import DeviceDirectory

from .control import ControlPlane
from .identifiers import ZoneId, classify
from .refresh import Refresh, refresh
from .zones import ZoneExpander

logger = logging.getLogger(__name__)


class Resolver:
    """Turns one device id into a fresh device.

    Zone ids are synthesized from their host's live zone list. Plain ids are
    read from the directory, refreshed from their control plane and written
    back when the refresh produced new state. Absent records come back as
    the sentinel from ``default_device()``.
    """

    def __init__(self, directory: DeviceDirectory, control: ControlPlane) -> None:
        self._directory = directory
        self._control = control
        self._zones = ZoneExpander(control, self._resolve_record)

    @property
    def control(self) -> ControlPlane:
        return self._control

    @property
    def zones(self) -> ZoneExpander:
        return self._zones

    async def resolve(self, device_id: str) -> Device:
        return (await self.resolve_detailed(device_id)).device

    async def resolve_detailed(self, device_id: str) -> Refresh:
        identifier = classify(device_id)
        if isinstance(identifier, ZoneId):
            device = await self._zones.lookup_zone(
                identifier.host_id, identifier.zone_index
            )
            return Refresh(device)
        return await self._resolve_record(identifier.device_id)

    async def _resolve_record(self, device_id: str) -> Refresh:
        device = await self._directory.get_device(device_id)
        if device.is_sentinel:
            logger.debug("Returning default device for %s", device_id)
            return Refresh(device)

        result = await refresh(device, self._control)
        if result.persist and not await self._directory.save_device(result.device):
            logger.warning("Write-back of %s failed, returning unsaved state", device_id)
        return result
