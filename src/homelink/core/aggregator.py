from __future__ import annotations

import asyncio
import logging

from homelink.models import Device, DeviceKind
from homelink.storage import DeviceDirectory

from .refresh import Refresh, refresh
from .resolver import Resolver

logger = logging.getLogger(__name__)


class Aggregator:
    """Builds the externally visible device list of one user.

    Ids are resolved concurrently; the output keeps the order of the user's
    id list. A reachable sprinkler host contributes its zones followed by
    itself, an unreachable one only itself, switched off.
    """

    def __init__(self, directory: DeviceDirectory, resolver: Resolver) -> None:
        self._directory = directory
        self._resolver = resolver

    async def list_for_user(self, owner_id: str) -> list[Device]:
        device_ids = await self._directory.device_ids(owner_id)
        logger.debug("Resolving %d device(s) of %s", len(device_ids), owner_id)

        tasks = [
            asyncio.ensure_future(self._resolver.resolve_detailed(device_id))
            for device_id in device_ids
        ]
        try:
            resolved = await asyncio.gather(*tasks)
        except BaseException:
            # a failed listing must not leave write-backs running behind it
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        devices: list[Device] = []
        for result in resolved:
            devices.extend(await self._expand(result))
        return devices

    async def _expand(self, result: Refresh) -> list[Device]:
        device = result.device

        if device.kind is DeviceKind.TV:
            # second poll, not written back
            again = await refresh(device, self._resolver.control)
            return [again.device]

        if device.kind is DeviceKind.SPRINKLER_HOST:
            if not result.reachable:
                return [device.with_status(False)]
            zones = await self._resolver.zones.expand_host(device)
            return [*zones, device]

        return [device]
