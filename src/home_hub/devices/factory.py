"""
Device factory.

Builds a device from an abstract property mapping, e.g.
``{"id": "2", "type": "thermostat", "temperature": "68"}``.
"""

import logging
from typing import Any, Mapping

from home_hub.core.errors import InvalidArgument, InvalidConfig

from .models import (
    DEFAULT_TEMPERATURE,
    Device,
    DeviceType,
    DoorLock,
    Light,
    Thermostat,
    parse_temperature,
)

logger = logging.getLogger(__name__)


def parse_device_id(value: Any) -> int:
    """
    Parse a device id.

    Accepts ints and integer strings (surrounding whitespace allowed).

    Raises:
        InvalidConfig: If the value is not an integer
    """
    if isinstance(value, bool):
        raise InvalidConfig(f"Invalid device id: {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidConfig(f"Invalid device id: {value!r}") from None


def create_device(
    properties: Mapping[str, Any],
    default_temperature: float = DEFAULT_TEMPERATURE,
) -> Device:
    """
    Create a device from a property mapping.

    Recognized keys:
        id: Required, integer
        type: Required, one of light/thermostat/door
        temperature: Optional, thermostat only

    Args:
        properties: Property mapping
        default_temperature: Set-point used when a thermostat has no temperature

    Returns:
        The new device

    Raises:
        InvalidConfig: If a required key is missing, the type is unknown,
            or a numeric property cannot be parsed
    """
    if properties.get("id") is None:
        raise InvalidConfig("Device property 'id' is required")
    if properties.get("type") is None:
        raise InvalidConfig("Device property 'type' is required")

    device_id = parse_device_id(properties["id"])
    device_type = DeviceType.parse(properties["type"])

    if device_type is DeviceType.LIGHT:
        device: Device = Light(device_id)
    elif device_type is DeviceType.THERMOSTAT:
        raw = properties.get("temperature")
        if raw is None:
            temperature = default_temperature
        else:
            try:
                temperature = parse_temperature(raw)
            except InvalidArgument as e:
                raise InvalidConfig(str(e)) from e
        device = Thermostat(device_id, temperature)
    else:
        device = DoorLock(device_id)

    logger.debug(f"Created device: {device.status_report()}")
    return device
