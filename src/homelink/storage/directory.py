from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from homelink.core.identifiers import is_zone_id
from homelink.exceptions import StoreError
from homelink.models import Device, default_device

from .base import DocumentStore

logger = logging.getLogger(__name__)

_ID_LIST = TypeAdapter(list[str])


def _is_valid_key(value: str) -> bool:
    return bool(value) and "/" not in value


def _check_key(value: str, what: str) -> str:
    # one path segment, so a record can never land on a parent node
    if not _is_valid_key(value):
        raise ValueError(f"Invalid {what}: {value!r}")
    return value


class DeviceDirectory:
    """Device records and per-user device lists on top of a document store.

    Layout::

        <devices_root>/<device id>      -> device record
        <users_root>/<owner id>/devices -> [device id, ...]
    """

    def __init__(
        self,
        store: DocumentStore,
        devices_root: str = "devices",
        users_root: str = "users",
    ) -> None:
        self._store = store
        self._devices_root = devices_root
        self._users_root = users_root

    @property
    def store(self) -> DocumentStore:
        return self._store

    def _device_path(self, device_id: str) -> str:
        return f"{self._devices_root}/{_check_key(device_id, 'device id')}"

    def _list_path(self, owner_id: str) -> str:
        return f"{self._users_root}/{_check_key(owner_id, 'owner id')}/devices"

    async def get_device(self, device_id: str) -> Device:
        """Read one record; the sentinel stands in for absent or invalid records.

        Raises ``StoreError`` when the store cannot be read at all.
        """
        if not _is_valid_key(device_id):
            return default_device()

        data = await self._store.get(self._device_path(device_id))
        if data is None:
            logger.debug("Device %s not in store", device_id)
            return default_device()

        try:
            return Device.model_validate(data)
        except ValidationError as exc:
            logger.debug("Device %s failed validation: %s", device_id, exc)
            return default_device()

    async def save_device(self, device: Device) -> bool:
        try:
            saved = await self._store.set(
                self._device_path(device.id), device.to_record()
            )
        except StoreError as exc:
            logger.warning("Failed to save device %s: %s", device.id, exc)
            return False
        logger.debug("Saved device %s: %s", device.id, saved)
        return saved

    async def delete_device(self, device_id: str) -> bool:
        return await self._store.remove(self._device_path(device_id))

    async def device_ids(self, owner_id: str) -> list[str]:
        data = await self._store.get(self._list_path(owner_id))
        if data is None:
            return []
        try:
            return _ID_LIST.validate_python(data)
        except ValidationError:
            logger.debug("Device list of %s is not a list of ids", owner_id)
            return []

    async def set_device_ids(self, owner_id: str, device_ids: list[str]) -> bool:
        return await self._store.set(self._list_path(owner_id), list(device_ids))

    async def add_device(self, owner_id: str, device: Device) -> Device:
        """Store ``device`` for ``owner_id`` and append it to the owner's list.

        Raises ``ValueError`` for ids that are empty, contain ``/`` or are
        shaped like a zone id, since such records could never be resolved.
        """
        _check_key(owner_id, "owner id")
        _check_key(device.id, "device id")
        if is_zone_id(device.id):
            raise ValueError(f"Device id {device.id!r} is reserved for zones")

        device = device.model_copy(update={"owner_id": owner_id})
        ids = await self.device_ids(owner_id)
        if device.id not in ids:
            ids.append(device.id)
            await self.set_device_ids(owner_id, ids)
        await self.save_device(device)
        return device

    async def remove_device(self, owner_id: str, device_id: str) -> bool:
        """Remove a device from an owner's list and delete its record.

        Nothing happens unless the record exists and is listed for the owner.
        """
        device = await self.get_device(device_id)
        if device.is_sentinel or device.id != device_id:
            return False

        ids = await self.device_ids(owner_id)
        if device_id not in ids:
            return False

        ids.remove(device_id)
        await self.set_device_ids(owner_id, ids)
        return await self.delete_device(device_id)
