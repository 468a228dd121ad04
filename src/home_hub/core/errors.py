"""
Exception taxonomy for the hub.

Device and proxy errors abort the single command that raised them. Batch
loops (trigger evaluation, schedule runs) catch them per item and log.
"""

from typing import Any, Optional


class HubError(Exception):
    """Base class for every error raised by home-hub."""


class InvalidConfig(HubError, ValueError):
    """Bad device construction input or hub configuration."""


class DeviceNotFound(HubError, KeyError):
    """No device is registered under the requested id."""

    def __init__(self, device_id: Any) -> None:
        super().__init__(f"Device not found: {device_id}")
        self.device_id = device_id

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class AccessDenied(HubError):
    """The proxy's allow-list does not permit the command."""

    def __init__(self, command: str, device_id: Optional[int] = None) -> None:
        super().__init__(f"Action not allowed: {command}")
        self.command = command
        self.device_id = device_id


class UnsupportedCommand(HubError):
    """The device variant does not know the command."""

    def __init__(self, command: str, device_type: str) -> None:
        super().__init__(f"Unsupported command for {device_type}: {command}")
        self.command = command
        self.device_type = device_type


class InvalidArgument(HubError, ValueError):
    """A command argument is missing or cannot be interpreted."""


class MalformedAction(HubError, ValueError):
    """An action expression could not be parsed."""

    def __init__(self, action: str, reason: str) -> None:
        super().__init__(f"Invalid action format ({reason}): {action!r}")
        self.action = action
        self.reason = reason


class TriggerDepthExceeded(HubError, RecursionError):
    """Trigger-fired actions nested deeper than the configured bound."""

    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"Trigger nesting depth {depth} exceeds limit {limit}")
        self.depth = depth
        self.limit = limit
