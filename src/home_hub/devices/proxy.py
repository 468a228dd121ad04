"""
Access-controlled proxy around a device.

Every command goes through the proxy's allow-list before it reaches the
device, and every attempt that passes the check is logged.
"""

import logging
from typing import FrozenSet, Iterable, Optional

from home_hub.core.errors import AccessDenied

from .models import KNOWN_COMMANDS, Device, DeviceType

logger = logging.getLogger(__name__)


class DeviceProxy:
    """
    Wraps exactly one device with an allow-list of command names.

    Command names are compared case-insensitively. The default allow-list
    permits every known command.
    """

    def __init__(
        self,
        device: Device,
        allowed_actions: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Initialize the proxy.

        Args:
            device: The wrapped device
            allowed_actions: Permitted command names (None = all known commands)
        """
        self._device = device
        self._allowed: FrozenSet[str] = KNOWN_COMMANDS
        if allowed_actions is not None:
            self.set_allowed_actions(allowed_actions)

    @property
    def id(self) -> int:
        return self._device.id

    @property
    def device_type(self) -> DeviceType:
        return self._device.device_type

    @property
    def allowed_actions(self) -> FrozenSet[str]:
        return self._allowed

    def set_allowed_actions(self, actions: Iterable[str]) -> None:
        """
        Replace the allow-list.

        The new set is built first and swapped in with a single assignment,
        so no partially updated list is ever visible.
        """
        self._allowed = frozenset(a.strip().lower() for a in actions)
        logger.debug(f"Device {self.id} allowed actions: {sorted(self._allowed)}")

    def is_allowed(self, command: str) -> bool:
        return command.lower() in self._allowed

    def execute(self, command: str, *args: str) -> None:
        """
        Execute a command on the wrapped device.

        Raises:
            AccessDenied: If the command is not in the allow-list
            UnsupportedCommand: Propagated from the device
            InvalidArgument: Propagated from the device
        """
        if not self.is_allowed(command):
            raise AccessDenied(command.lower(), self.id)

        logger.info(f"Executing {command} on device {self.id} ({self.device_type.value})")
        self._device.handle(command, *args)

    def status_report(self) -> str:
        return self._device.status_report()

    def numeric_attribute(self, name: str) -> Optional[float]:
        """Capability query forwarded to the device."""
        return self._device.numeric_attribute(name)

    def __repr__(self) -> str:
        return f"DeviceProxy({self._device!r})"
