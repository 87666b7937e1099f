"""Per-kind live-state refresh.

Each strategy polls the device's own control plane and returns the new
record without touching the store; the caller decides about write-back via
``Refresh.persist``.

Failure policy per kind:

=================  ======================  ==============
kind               unreachable/transport   bad payload
=================  ======================  ==============
BATTERY            raises                  raises
TV                 unchanged               raises
SqlSprinklerHost   ``False`` / unchanged   raises
everything else    not polled              not polled
=================  ======================  ==============
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from homelink.exceptions import ControlPlaneError, PayloadError
from homelink.models import Device, DeviceKind

from .control import ControlPlane

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Refresh:
    device: Device
    persist: bool = False
    reachable: bool = True


Strategy = Callable[[Device, ControlPlane], Awaitable[Refresh]]


async def _refresh_battery(device: Device, control: ControlPlane) -> Refresh:
    status = await control.ups_status(device.network_address)
    return Refresh(device.with_status(status), persist=True)


async def _refresh_tv(device: Device, control: ControlPlane) -> Refresh:
    try:
        fields = await control.tv_status(device.network_address)
    except PayloadError:
        raise
    except ControlPlaneError as exc:
        logger.warning("TV %s not refreshed: %s", device.id, exc)
        return Refresh(device)

    current = device.live_status
    merged = {**current, **fields} if isinstance(current, dict) else dict(fields)
    return Refresh(device.with_status(merged), persist=True)


async def _refresh_sprinkler_host(device: Device, control: ControlPlane) -> Refresh:
    if not await control.probe(device.network_address):
        logger.info("Sprinkler host %s is offline", device.id)
        return Refresh(device.with_status(False), reachable=False)

    try:
        enabled = await control.system_state(device.network_address)
    except PayloadError:
        raise
    except ControlPlaneError as exc:
        logger.warning("Sprinkler host %s not refreshed: %s", device.id, exc)
        return Refresh(device)

    return Refresh(device.with_status(enabled), persist=True)


_STRATEGIES: dict[DeviceKind, Strategy] = {
    DeviceKind.BATTERY: _refresh_battery,
    DeviceKind.TV: _refresh_tv,
    DeviceKind.SPRINKLER_HOST: _refresh_sprinkler_host,
}


async def refresh(device: Device, control: ControlPlane) -> Refresh:
    strategy = _STRATEGIES.get(device.kind)
    if strategy is None:
        return Refresh(device)
    logger.debug("Refreshing %s device %s", device.kind.value, device.id)
    return await strategy(device, control)
