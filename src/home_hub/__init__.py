"""
home-hub: a small, deterministic home-automation hub.

This library provides:
- A registry of devices behind access-checked proxies
- Time-based schedules fired by an explicit clock call
- Condition-based triggers re-evaluated after every command
- A synchronous Event Bus for hub notifications
"""

from home_hub.core.bus import Event, EventBus, EventFilter, EventType
from home_hub.core.config import HubConfig
from home_hub.core.hub import Hub
from home_hub.devices import DeviceProxy, create_device
from home_hub.automation import ScheduleEntry, TriggerCondition, TriggerEntry

__version__ = "0.1.0"

__all__ = [
    "Event",
    "EventBus",
    "EventFilter",
    "EventType",
    "HubConfig",
    "Hub",
    "DeviceProxy",
    "create_device",
    "ScheduleEntry",
    "TriggerCondition",
    "TriggerEntry",
]
