"""Data models for homelink."""

from homelink.models.device import (
    Device,
    DeviceKind,
    HardwareKind,
    SystemState,
    Zone,
    default_device,
)

__all__ = [
    "Device",
    "DeviceKind",
    "HardwareKind",
    "SystemState",
    "Zone",
    "default_device",
]
