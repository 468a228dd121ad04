"""
Core components of the home-hub.

This package contains:
- errors: exception taxonomy
- bus: Event Bus implementation
- config: HubConfig and defaults
- registry: DeviceRegistry for device bookkeeping
- hub: the Hub orchestrator
"""

from home_hub.core.errors import (
    HubError,
    InvalidConfig,
    DeviceNotFound,
    AccessDenied,
    UnsupportedCommand,
    InvalidArgument,
    MalformedAction,
    TriggerDepthExceeded,
)
from home_hub.core.bus import Event, EventBus, EventFilter, EventType
from home_hub.core.config import HubConfig, DEFAULT_SETUP, default_config
from home_hub.core.registry import DeviceRegistry
from home_hub.core.hub import Hub

__all__ = [
    "HubError",
    "InvalidConfig",
    "DeviceNotFound",
    "AccessDenied",
    "UnsupportedCommand",
    "InvalidArgument",
    "MalformedAction",
    "TriggerDepthExceeded",
    "Event",
    "EventBus",
    "EventFilter",
    "EventType",
    "HubConfig",
    "DEFAULT_SETUP",
    "default_config",
    "DeviceRegistry",
    "Hub",
]
