"""
Hub configuration.

Configuration is plain data: a dataclass with dict (de)serialization, so the
host can keep it in whatever format it likes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet

from home_hub.core.errors import InvalidConfig
from home_hub.devices.models import DEFAULT_TEMPERATURE, KNOWN_COMMANDS

CURRENT_CONFIG_VERSION = 1


@dataclass
class HubConfig:
    """
    Runtime settings for a Hub.

    Attributes:
        max_trigger_depth: Deepest allowed nesting of trigger-fired commands
        history_size: Number of trigger executions kept in history
        default_temperature: Set-point for thermostats created without one
        default_allowed_actions: Allow-list given to proxies built by the hub
    """

    version: int = CURRENT_CONFIG_VERSION
    max_trigger_depth: int = 32
    history_size: int = 100
    default_temperature: float = DEFAULT_TEMPERATURE
    default_allowed_actions: FrozenSet[str] = field(default_factory=lambda: KNOWN_COMMANDS)

    def __post_init__(self) -> None:
        if self.max_trigger_depth < 0:
            raise InvalidConfig(f"max_trigger_depth must be >= 0: {self.max_trigger_depth}")
        if self.history_size < 1:
            raise InvalidConfig(f"history_size must be >= 1: {self.history_size}")
        self.default_allowed_actions = frozenset(
            a.lower() for a in self.default_allowed_actions
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "version": self.version,
            "max_trigger_depth": self.max_trigger_depth,
            "history_size": self.history_size,
            "default_temperature": self.default_temperature,
            "default_allowed_actions": sorted(self.default_allowed_actions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HubConfig":
        """Deserialize from dict, filling in defaults for missing keys."""
        defaults = default_config()
        merged = {**defaults, **data}
        try:
            return cls(
                version=int(merged["version"]),
                max_trigger_depth=int(merged["max_trigger_depth"]),
                history_size=int(merged["history_size"]),
                default_temperature=float(merged["default_temperature"]),
                default_allowed_actions=frozenset(merged["default_allowed_actions"]),
            )
        except InvalidConfig:
            raise
        except (TypeError, ValueError) as e:
            raise InvalidConfig(f"Invalid hub config: {e}") from e


def default_config() -> Dict[str, Any]:
    """
    Get default hub configuration.

    Returns:
        Default configuration dict
    """
    return HubConfig().to_dict()


# Devices seeded by a fresh console session
DEFAULT_SETUP: Dict[str, Any] = {
    "devices": [
        {"id": "1", "type": "light"},
        {"id": "2", "type": "thermostat", "temperature": "70"},
        {"id": "3", "type": "door"},
    ],
    "schedules": [],
    "triggers": [],
}
