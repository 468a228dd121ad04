"""
Devices controlled by the hub.

This package contains:
- models: the three device variants and their type tags
- factory: construction from a property mapping
- proxy: allow-list access control around a device
"""

from home_hub.devices.models import (
    DEFAULT_TEMPERATURE,
    KNOWN_COMMANDS,
    Device,
    DeviceType,
    DoorLock,
    Light,
    Thermostat,
)
from home_hub.devices.factory import create_device, parse_device_id
from home_hub.devices.proxy import DeviceProxy

__all__ = [
    "DEFAULT_TEMPERATURE",
    "KNOWN_COMMANDS",
    "Device",
    "DeviceType",
    "DoorLock",
    "Light",
    "Thermostat",
    "create_device",
    "parse_device_id",
    "DeviceProxy",
]
