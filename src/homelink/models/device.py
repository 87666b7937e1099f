from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class DeviceKind(str, Enum):
    BATTERY = "BATTERY"
    LIGHT = "LIGHT"
    SWITCH = "SWITCH"
    GARAGE = "GARAGE"
    SPRINKLER = "SPRINKLER"
    ROUTER = "ROUTER"
    SPRINKLER_HOST = "SqlSprinklerHost"
    TV = "TV"


class HardwareKind(str, Enum):
    ARDUINO = "ARDUINO"
    PI = "PI"
    OTHER = "OTHER"
    LG = "LG"


class Device(BaseModel):
    """A controllable device as stored in the document store.

    Python-side names are used in code; the store keeps the historical field
    names (``guid``, ``ip``, ``last_state`` ...), which are accepted on input
    and written back by :meth:`to_record`.
    """

    model_config = {"populate_by_name": True}

    id: str = Field(default="", alias="guid")
    network_address: str = Field(default="", alias="ip")
    kind: DeviceKind = DeviceKind.SWITCH
    hardware_kind: HardwareKind = Field(default=HardwareKind.OTHER, alias="hardware")
    live_status: Any = Field(default=False, alias="last_state")
    firmware_version: str = Field(default="0", alias="sw_version")
    owner_id: str = Field(default="", alias="useruuid")
    display_name: str = Field(default="", alias="name")
    aliases: list[str] = Field(default_factory=lambda: [""], alias="nicknames")

    @property
    def friendly_name(self) -> str:
        return self.display_name or self.id

    @property
    def is_sentinel(self) -> bool:
        """True when this is the "not found" record."""
        return self == default_device()

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def with_status(self, live_status: Any) -> Device:
        return self.model_copy(update={"live_status": live_status})


def default_device() -> Device:
    """Sentinel returned whenever a device cannot be found."""
    return Device()


class Zone(BaseModel):
    """One zone as reported by a multi-zone sprinkler controller."""

    model_config = {"populate_by_name": True}

    zone_index: int = Field(alias="id")
    name: str
    gpio: int
    duration: int = Field(alias="time")
    enabled: bool
    auto_off: bool
    position: int = Field(alias="system_order")
    is_on: bool = Field(alias="state")


class SystemState(BaseModel):
    system_enabled: bool
