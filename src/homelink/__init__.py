"""homelink - smart-home bridge: resolve, refresh and expand device catalogs."""

from __future__ import annotations

from importlib.metadata import version

from .config import ControlConfig, Settings, StoreConfig, get_settings
from .core import Aggregator, ControlPlane, Resolver, classify
from .models import Device, DeviceKind, HardwareKind, Zone, default_device
from .storage import DeviceDirectory, MemoryStore

__all__ = [
    "Aggregator",
    "ControlConfig",
    "ControlPlane",
    "Device",
    "DeviceDirectory",
    "DeviceKind",
    "HardwareKind",
    "MemoryStore",
    "Resolver",
    "Settings",
    "StoreConfig",
    "Zone",
    "__version__",
    "classify",
    "default_device",
    "get_settings",
]

__version__ = version("homelink")
