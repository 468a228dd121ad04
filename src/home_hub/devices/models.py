"""
Device models.

The hub knows exactly three device variants. Each one owns its own state and
is only ever mutated through its ``handle`` method.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, Optional

from home_hub.core.errors import InvalidArgument, InvalidConfig, UnsupportedCommand

logger = logging.getLogger(__name__)


DEFAULT_TEMPERATURE = 70.0


# =============================================================================
# Enums
# =============================================================================


class DeviceType(Enum):
    """Type tag of a device."""

    LIGHT = "light"
    THERMOSTAT = "thermostat"
    DOOR = "door"

    @classmethod
    def parse(cls, text: str) -> "DeviceType":
        """Parse a type tag (case-insensitive, accepts door lock aliases)."""
        key = str(text).strip().lower()
        key = _TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidConfig(f"Unknown device type: {text}") from None


_TYPE_ALIASES = {
    "doorlock": "door",
    "lock": "door",
}


# =============================================================================
# Devices
# =============================================================================


@dataclass
class Light:
    """A switchable light."""

    id: int
    is_on: bool = False

    commands: ClassVar[FrozenSet[str]] = frozenset({"turnon", "turnoff"})

    @property
    def device_type(self) -> DeviceType:
        return DeviceType.LIGHT

    def handle(self, command: str, *args: str) -> None:
        cmd = command.lower()
        if cmd == "turnon":
            self.is_on = True
        elif cmd == "turnoff":
            self.is_on = False
        else:
            raise UnsupportedCommand(command, "Light")

    def status_report(self) -> str:
        return f"Light {self.id} is {'On' if self.is_on else 'Off'}"

    def numeric_attribute(self, name: str) -> Optional[float]:
        return None


@dataclass
class Thermostat:
    """A thermostat holding a temperature set-point."""

    id: int
    temperature: float = DEFAULT_TEMPERATURE

    commands: ClassVar[FrozenSet[str]] = frozenset({"settemp"})

    @property
    def device_type(self) -> DeviceType:
        return DeviceType.THERMOSTAT

    def handle(self, command: str, *args: str) -> None:
        if command.lower() != "settemp":
            raise UnsupportedCommand(command, "Thermostat")
        if not args:
            raise InvalidArgument("setTemp requires a temperature argument")
        self.temperature = parse_temperature(args[0])
        logger.debug(f"Thermostat {self.id} set to {self.temperature}")

    def status_report(self) -> str:
        return f"Thermostat {self.id} is set to {self.temperature:.1f} degrees"

    def numeric_attribute(self, name: str) -> Optional[float]:
        if name.lower() == "temperature":
            return self.temperature
        return None


@dataclass
class DoorLock:
    """A door lock. Starts locked."""

    id: int
    locked: bool = True

    commands: ClassVar[FrozenSet[str]] = frozenset({"lock", "unlock"})

    @property
    def device_type(self) -> DeviceType:
        return DeviceType.DOOR

    def handle(self, command: str, *args: str) -> None:
        cmd = command.lower()
        if cmd == "lock":
            self.locked = True
        elif cmd == "unlock":
            self.locked = False
        else:
            raise UnsupportedCommand(command, "DoorLock")

    def status_report(self) -> str:
        return f"Door {self.id} is {'Locked' if self.locked else 'Unlocked'}"

    def numeric_attribute(self, name: str) -> Optional[float]:
        return None


Device = Light | Thermostat | DoorLock

KNOWN_COMMANDS: FrozenSet[str] = Light.commands | Thermostat.commands | DoorLock.commands


def parse_temperature(value: object) -> float:
    """Parse a temperature argument into a finite float."""
    try:
        temperature = float(str(value).strip())
    except ValueError:
        raise InvalidArgument(f"Invalid temperature: {value!r}") from None
    if not math.isfinite(temperature):
        raise InvalidArgument(f"Invalid temperature: {value!r}")
    return temperature
