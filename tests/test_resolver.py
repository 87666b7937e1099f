from __future__ import annotations

import asyncio
from typing import Any

import pytest
from conftest import HOST_ID, HOST_IP, put_device, sprinkler_host, zone_payload

from homelink.core import Resolver
from homelink.exceptions import StoreError
from homelink.models import Device, DeviceKind, default_device
from homelink.storage import DeviceDirectory, MemoryStore


class ReadOnlyStore(MemoryStore):
    async def set(self, path: str, value: Any) -> bool:
        return False


class UnavailableStore(MemoryStore):
    async def get(self, path: str) -> Any:
        raise StoreError("store offline")


def test_absent_id_resolves_to_sentinel(resolver):
    device = asyncio.run(resolver.resolve("nope"))

    assert device == default_device()
    assert device.kind is DeviceKind.SWITCH
    assert device.live_status is False
    assert device.display_name == ""


def test_plain_switch_is_returned_as_stored(store, resolver, network):
    switch = Device(id="switch-A", live_status=True)
    put_device(store, switch)
    before = dict(store.data["devices"]["switch-A"])

    assert asyncio.run(resolver.resolve("switch-A")) == switch
    assert store.data["devices"]["switch-A"] == before
    assert network.requests == []


def test_offline_host_resolves_off_without_write_back(store, resolver):
    put_device(store, sprinkler_host().with_status(True))

    device = asyncio.run(resolver.resolve(HOST_ID))

    assert device.live_status is False
    assert store.data["devices"][HOST_ID]["last_state"] is True


def test_online_host_is_refreshed_and_persisted(store, resolver, network):
    put_device(store, sprinkler_host())
    network.sprinkler(HOST_IP, [zone_payload(0, "Front")], enabled=True)

    device = asyncio.run(resolver.resolve(HOST_ID))

    assert device.live_status is True
    assert store.data["devices"][HOST_ID]["last_state"] is True


def test_failed_write_back_still_returns_fresh_state(network, control):
    store = ReadOnlyStore()
    put_device(store, sprinkler_host())
    network.sprinkler(HOST_IP, [], enabled=True)
    resolver = Resolver(DeviceDirectory(store), control)

    device = asyncio.run(resolver.resolve(HOST_ID))

    assert device.live_status is True
    assert store.data["devices"][HOST_ID]["last_state"] is False


def test_store_read_failure_is_reported(control):
    resolver = Resolver(DeviceDirectory(UnavailableStore()), control)

    with pytest.raises(StoreError):
        asyncio.run(resolver.resolve("switch-A"))


def test_zone_id_is_synthesized_from_its_host(store, resolver, network):
    put_device(store, sprinkler_host())
    network.sprinkler(
        HOST_IP,
        [zone_payload(0, "Front"), zone_payload(2, "Back", on=True)],
    )

    zone = asyncio.run(resolver.resolve(f"{HOST_ID}-2"))

    assert zone.id == f"{HOST_ID}-2"
    assert zone.kind is DeviceKind.SPRINKLER
    assert zone.network_address == HOST_IP
    assert zone.display_name == "Back"
    assert zone.live_status == {"on": True, "zone_index": 2, "position": 2}
    assert f"{HOST_ID}-2" not in store.data["devices"]


def test_zone_id_with_unknown_index_is_sentinel(store, resolver, network):
    put_device(store, sprinkler_host())
    network.sprinkler(HOST_IP, [zone_payload(0, "Front")])

    assert asyncio.run(resolver.resolve(f"{HOST_ID}-5")).is_sentinel


def test_zone_id_of_unknown_host_is_sentinel(resolver, network):
    assert asyncio.run(resolver.resolve(f"{HOST_ID}-0")).is_sentinel
    assert network.requests == []
