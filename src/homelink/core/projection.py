"""Projection of devices onto the voice-assistant smart-home schema.

Everything here is a pure function of a resolved :class:`Device`.
"""

from __future__ import annotations

from typing import Any

from homelink.models import Device, DeviceKind, HardwareKind

TYPE_PREFIX = "action.devices.types."
TRAIT_PREFIX = "action.devices.traits."
MANUFACTURER = "GTECH"
HW_VERSION = "1.0"

DEVICE_TYPES: dict[DeviceKind, str] = {
    DeviceKind.LIGHT: "LIGHT",
    DeviceKind.SWITCH: "SWITCH",
    DeviceKind.SPRINKLER_HOST: "SWITCH",
    DeviceKind.GARAGE: "GARAGE",
    DeviceKind.SPRINKLER: "SPRINKLER",
    DeviceKind.ROUTER: "ROUTER",
    DeviceKind.TV: "TV",
    DeviceKind.BATTERY: "SENSOR",
}

DEVICE_TRAITS: dict[DeviceKind, tuple[str, ...]] = {
    DeviceKind.GARAGE: ("OpenClose",),
    DeviceKind.ROUTER: ("Reboot",),
    DeviceKind.TV: ("OnOff", "Volume"),
    DeviceKind.BATTERY: ("EnergyStorage",),
}
DEFAULT_TRAITS = ("OnOff",)

HARDWARE_MODELS: dict[HardwareKind, str] = {
    HardwareKind.ARDUINO: "Arduino",
    HardwareKind.PI: "Raspberry Pi",
    HardwareKind.OTHER: "Other",
    HardwareKind.LG: "LG",
}

GARAGE_ATTRIBUTES: dict[str, Any] = {
    "discreteOnlyOpenClose": True,
    "openDirection": ["UP", "DOWN"],
}
ON_OFF_ATTRIBUTES: dict[str, Any] = {
    "commandOnlyOnOff": False,
    "queryOnlyOnOff": False,
}
BATTERY_ATTRIBUTES: dict[str, Any] = {
    "queryOnlyEnergyStorage": True,
    "isRechargeable": True,
}
TV_ATTRIBUTES: dict[str, Any] = {
    **ON_OFF_ATTRIBUTES,
    "volumeMaxLevel": 100,
    "volumeCanMuteAndUnmute": True,
    "levelStepSize": 1,
    "commandOnlyVolume": False,
    "volumeDefaultPercentage": 10,
}

# UPS status fields passed through as EnergyStorage state
BATTERY_STATE_KEYS = (
    "descriptiveCapacityRemaining",
    "capacityRemaining",
    "capacityUntilFull",
    "isCharging",
    "isPluggedIn",
)


def device_type(device: Device) -> str:
    return TYPE_PREFIX + DEVICE_TYPES[device.kind]


def device_traits(device: Device) -> list[str]:
    traits = DEVICE_TRAITS.get(device.kind, DEFAULT_TRAITS)
    return [TRAIT_PREFIX + trait for trait in traits]


def device_attributes(device: Device) -> dict[str, Any]:
    if device.kind is DeviceKind.GARAGE:
        attributes = GARAGE_ATTRIBUTES
    elif device.kind is DeviceKind.TV:
        attributes = TV_ATTRIBUTES
    elif device.kind is DeviceKind.BATTERY:
        attributes = BATTERY_ATTRIBUTES
    else:
        attributes = ON_OFF_ATTRIBUTES
    return dict(attributes)


def hardware_model(device: Device) -> str:
    return HARDWARE_MODELS[device.hardware_kind]


def is_on(device: Device) -> bool:
    """Interpret ``live_status`` as on/off.

    Plain devices store a bare boolean; zones and TVs store an object with an
    ``on`` key.
    """
    status = device.live_status
    if isinstance(status, dict):
        return bool(status.get("on", False))
    return bool(status)


def sync_payload(device: Device) -> dict[str, Any]:
    """Device entry of a SYNC response."""
    name = device.friendly_name
    return {
        "id": device.id,
        "type": device_type(device),
        "traits": device_traits(device),
        "name": {
            "defaultNames": [name],
            "name": name,
            "nicknames": list(device.aliases),
        },
        "attributes": device_attributes(device),
        "deviceInfo": {
            "manufacturer": MANUFACTURER,
            "model": hardware_model(device),
            "hwVersion": HW_VERSION,
            "swVersion": device.firmware_version,
        },
        "willReportState": True,
    }


def sync_response(owner_id: str, devices: list[Device]) -> dict[str, Any]:
    return {
        "agentUserId": owner_id,
        "devices": [sync_payload(device) for device in devices],
    }


def state_payload(device: Device) -> dict[str, Any]:
    """Device entry of a QUERY response."""
    state: dict[str, Any] = {"online": not device.is_sentinel}
    status = device.live_status

    if device.kind is DeviceKind.GARAGE:
        state["openPercent"] = 100 if is_on(device) else 0
    elif device.kind is DeviceKind.ROUTER:
        pass
    elif device.kind is DeviceKind.BATTERY:
        if isinstance(status, dict):
            state.update({k: status[k] for k in BATTERY_STATE_KEYS if k in status})
    elif device.kind is DeviceKind.TV:
        state["on"] = is_on(device)
        if isinstance(status, dict):
            if "volume" in status:
                state["currentVolume"] = status["volume"]
            if "muted" in status:
                state["isMuted"] = bool(status["muted"])
    else:
        state["on"] = is_on(device)

    return state
