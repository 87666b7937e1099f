from __future__ import annotations

import logging
from typing import Any

import httpx

from homelink.exceptions import StoreError

from .base import split_path

logger = logging.getLogger(__name__)


class RestDocumentStore:
    """Realtime-database style REST store (``GET/PUT/DELETE <url>/<path>.json``)."""

    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient,
        auth_token: str | None = None,
        owns_client: bool = False,
    ) -> None:
        self._url = url.rstrip("/")
        self._client = client
        self._params = {"auth": auth_token} if auth_token else {}
        self._owns_client = owns_client

    def _endpoint(self, path: str) -> str:
        return f"{self._url}/{'/'.join(split_path(path))}.json"

    async def get(self, path: str) -> Any:
        url = self._endpoint(path)
        try:
            response = await self._client.get(url, params=self._params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise StoreError(f"GET {url} failed: {exc}") from exc
        except ValueError as exc:
            raise StoreError(f"GET {url} returned invalid JSON: {exc}") from exc

    async def set(self, path: str, value: Any) -> bool:
        url = self._endpoint(path)
        try:
            response = await self._client.put(url, params=self._params, json=value)
        except httpx.HTTPError as exc:
            logger.warning("PUT %s failed: %s", url, exc)
            return False
        if not response.is_success:
            logger.warning("PUT %s returned %s", url, response.status_code)
        return response.is_success

    async def remove(self, path: str) -> bool:
        url = self._endpoint(path)
        try:
            response = await self._client.delete(url, params=self._params)
        except httpx.HTTPError as exc:
            logger.warning("DELETE %s failed: %s", url, exc)
            return False
        return response.is_success

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
