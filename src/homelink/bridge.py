"""Wiring of store, control planes and the resolution engine."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from homelink.config import Settings, store_path_from_settings
from homelink.core import Aggregator, Commander, ControlPlane, Resolver
from homelink.storage import (
    DeviceDirectory,
    DocumentStore,
    JsonFileStore,
    RestDocumentStore,
)


@dataclass
class Bridge:
    directory: DeviceDirectory
    control: ControlPlane
    resolver: Resolver
    aggregator: Aggregator
    commander: Commander


def build_store(settings: Settings) -> DocumentStore:
    config = settings.store
    if config.backend == "rest":
        assert config.url is not None
        client = httpx.AsyncClient(timeout=config.timeout)
        return RestDocumentStore(
            config.url, client, auth_token=config.auth_token, owns_client=True
        )
    return JsonFileStore(store_path_from_settings(settings))


def build_bridge(
    settings: Settings, store: DocumentStore, client: httpx.AsyncClient
) -> Bridge:
    directory = DeviceDirectory(
        store,
        devices_root=settings.store.devices_root,
        users_root=settings.store.users_root,
    )
    control = ControlPlane(settings.control, client)
    resolver = Resolver(directory, control)
    return Bridge(
        directory=directory,
        control=control,
        resolver=resolver,
        aggregator=Aggregator(directory, resolver),
        commander=Commander(directory, control),
    )


@asynccontextmanager
async def open_bridge(
    settings: Settings, store: DocumentStore | None = None
) -> AsyncIterator[Bridge]:
    store = store or build_store(settings)
    async with httpx.AsyncClient(timeout=settings.control.timeout) as client:
        try:
            yield build_bridge(settings, store, client)
        finally:
            await store.close()
