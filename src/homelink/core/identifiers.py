"""Composite zone identifiers.

A zone of a multi-zone host has no record of its own; it is addressed as
``<host id>-<zone index>`` where the host id is a UUID (hyphens between the
groups optional). Anything else is a plain device id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_ZONE_ID = re.compile(
    r"(?P<host>[0-9a-f]{8}-?(?:[0-9a-f]{4}-?){3}[0-9a-f]{12})-(?P<index>[0-9]+)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PlainId:
    device_id: str


@dataclass(frozen=True)
class ZoneId:
    host_id: str
    zone_index: int

    @property
    def device_id(self) -> str:
        return f"{self.host_id}-{self.zone_index}"


def classify(device_id: str) -> PlainId | ZoneId:
    match = _ZONE_ID.fullmatch(device_id)
    if match is None:
        return PlainId(device_id)
    return ZoneId(match.group("host"), int(match.group("index")))


def is_zone_id(device_id: str) -> bool:
    return isinstance(classify(device_id), ZoneId)
