from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from homelink.config import ControlConfig, get_settings
from homelink.core import Aggregator, Commander, ControlPlane, Resolver
from homelink.models import Device, DeviceKind, HardwareKind
from homelink.storage import DeviceDirectory, MemoryStore

HOST_ID = "11111111-2222-3333-4444-555555555555"
HOST_IP = "10.0.0.20"

Route = Callable[[httpx.Request], httpx.Response]


def zone_payload(index: int, name: str, on: bool = False, order: int | None = None):
    return {
        "id": index,
        "name": name,
        "gpio": 4 + index,
        "time": 10,
        "enabled": True,
        "auto_off": True,
        "system_order": index if order is None else order,
        "state": on,
    }


class FakeNetwork:
    """Routes control-plane requests to canned answers.

    Unknown URLs behave like a refused connection; ``reachable`` holds the
    addresses whose liveness probe succeeds.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.reachable: set[str] = set()
        self.requests: list[httpx.Request] = []
        self.probes: list[str] = []

    def json(self, method: str, url: str, payload: Any, status: int = 200) -> None:
        self.routes[(method, url)] = lambda _request: httpx.Response(
            status, json=payload
        )

    def text(self, method: str, url: str, body: str, status: int = 200) -> None:
        self.routes[(method, url)] = lambda _request: httpx.Response(
            status, text=body
        )

    def fail(self, method: str, url: str, error: type[httpx.TransportError]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise error("simulated failure", request=request)

        self.routes[(method, url)] = _raise

    def sprinkler(
        self, address: str, zones: list[dict[str, Any]], enabled: bool = True
    ) -> None:
        self.reachable.add(address)
        base = f"http://{address}:3030"
        self.json("GET", f"{base}/system/state", {"system_enabled": enabled})
        self.json("GET", f"{base}/zone/info", zones)
        self.json("PUT", f"{base}/system/state", {})
        self.json("PUT", f"{base}/zone", {})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            raise httpx.ConnectError("connection refused", request=request)
        return route(request)

    async def probe(self, address: str) -> bool:
        self.probes.append(address)
        return address in self.reachable

    def urls(self, method: str | None = None) -> list[str]:
        return [
            str(request.url)
            for request in self.requests
            if method is None or request.method == method
        ]


def put_device(store: MemoryStore, device: Device, owner: str | None = None) -> None:
    store.data.setdefault("devices", {})[device.id] = device.to_record()
    if owner is not None:
        users = store.data.setdefault("users", {})
        users.setdefault(owner, {}).setdefault("devices", []).append(device.id)


def sprinkler_host(device_id: str = HOST_ID, ip: str = HOST_IP) -> Device:
    return Device(
        id=device_id,
        network_address=ip,
        kind=DeviceKind.SPRINKLER_HOST,
        hardware_kind=HardwareKind.PI,
        display_name="Sprinklers",
        owner_id="U2",
        aliases=["Sprinklers"],
    )


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("HOMELINK_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def control(network: FakeNetwork, monkeypatch: pytest.MonkeyPatch) -> ControlPlane:
    client = httpx.AsyncClient(transport=httpx.MockTransport(network.handler))
    plane = ControlPlane(ControlConfig(), client)
    monkeypatch.setattr(plane, "probe", network.probe)
    return plane


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def directory(store: MemoryStore) -> DeviceDirectory:
    return DeviceDirectory(store)


@pytest.fixture
def resolver(directory: DeviceDirectory, control: ControlPlane) -> Resolver:
    return Resolver(directory, control)


@pytest.fixture
def aggregator(directory: DeviceDirectory, resolver: Resolver) -> Aggregator:
    return Aggregator(directory, resolver)


@pytest.fixture
def commander(directory: DeviceDirectory, control: ControlPlane) -> Commander:
    return Commander(directory, control)
