from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from homelink.config import ControlConfig
from homelink.exceptions import ControlPlaneError, PayloadError
from homelink.models import SystemState, Zone

logger = logging.getLogger(__name__)

_ZONE_LIST = TypeAdapter(list[Zone])


class ControlPlane:
    """HTTP access to the embedded web servers that devices expose.

    Every request is bounded by ``config.timeout``. Transport failures and
    non-2xx answers raise ``ControlPlaneError``; answers that cannot be
    decoded into the expected shape raise ``PayloadError``.
    """

    def __init__(self, config: ControlConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> ControlConfig:
        return self._config

    def _sprinkler_url(self, address: str, endpoint: str) -> str:
        return f"http://{address}:{self._config.sprinkler_port}/{endpoint}"

    async def probe(self, address: str) -> bool:
        """Single-attempt reachability check of a sprinkler controller."""
        if not address:
            return False
        port = self._config.sprinkler_port
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(address, port),
                timeout=self._config.probe_timeout,
            )
        except (asyncio.TimeoutError, TimeoutError):
            logger.debug("No response from %s:%d (timeout)", address, port)
            return False
        except OSError as exc:
            logger.debug("Failed to connect to %s:%d: %s", address, port, exc)
            return False

        writer.close()
        with contextlib.suppress(OSError):
            await writer.wait_closed()
        return True

    async def _request(
        self, method: str, url: str, address: str, **kwargs: Any
    ) -> httpx.Response:
        if not address:
            raise ControlPlaneError(url, "device has no network address")
        try:
            response = await self._client.request(
                method, url, timeout=self._config.timeout, **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ControlPlaneError(url, str(exc)) from exc
        return response

    async def _get_json(self, url: str, address: str) -> Any:
        response = await self._request("GET", url, address)
        try:
            return response.json()
        except ValueError as exc:
            raise PayloadError(url, f"invalid JSON: {exc}") from exc

    async def ups_status(self, address: str) -> Any:
        url = f"http://{address}{self._config.ups_status_path}"
        return await self._get_json(url, address)

    async def tv_status(self, address: str) -> dict[str, Any]:
        url = f"http://{address}{self._config.tv_status_path}"
        data = await self._get_json(url, address)
        if not isinstance(data, dict):
            raise PayloadError(url, f"expected an object, got {type(data).__name__}")
        return data

    async def system_state(self, address: str) -> bool:
        url = self._sprinkler_url(address, "system/state")
        response = await self._request("GET", url, address)
        # an idle controller answers with an empty body
        if not response.content.strip():
            return False
        try:
            return SystemState.model_validate_json(response.content).system_enabled
        except ValidationError as exc:
            raise PayloadError(url, str(exc)) from exc

    async def set_system_state(self, address: str, enabled: bool) -> None:
        url = self._sprinkler_url(address, "system/state")
        body = SystemState(system_enabled=enabled).model_dump()
        await self._request("PUT", url, address, json=body)

    async def zones(self, address: str) -> list[Zone]:
        url = self._sprinkler_url(address, "zone/info")
        data = await self._get_json(url, address)
        try:
            return _ZONE_LIST.validate_python(data)
        except ValidationError as exc:
            raise PayloadError(url, str(exc)) from exc

    async def set_zone(self, address: str, zone_index: int, on: bool) -> None:
        url = self._sprinkler_url(address, "zone")
        await self._request("PUT", url, address, json={"id": zone_index, "state": on})

    async def set_relay(self, address: str, endpoint: str, param: str) -> None:
        """Switch a relay on an Arduino controller: ``GET /<endpoint>?param=``."""
        url = f"http://{address}/{endpoint}"
        await self._request("GET", url, address, params={"param": param})
