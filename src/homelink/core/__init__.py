from __future__ import annotations

from .aggregator import Aggregator
from .commands import Commander
from .control import ControlPlane
from .identifiers import PlainId, ZoneId, classify, is_zone_id
from .refresh import Refresh, refresh
from .resolver import Resolver
from .zones import ZoneExpander, zone_device

__all__ = [
    "Aggregator",
    "Commander",
    "ControlPlane",
    "PlainId",
    "Refresh",
    "Resolver",
    "ZoneExpander",
    "ZoneId",
    "classify",
    "is_zone_id",
    "refresh",
    "zone_device",
]
