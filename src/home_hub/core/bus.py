"""
Event Bus implementation for hub notifications.

The Event Bus is a simple, synchronous dispatcher for hub events.
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import Enum
from typing import Optional, Dict, Any, Callable, List
import logging

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    """Get current UTC time (for default factory)."""
    return datetime.now(UTC)


class EventType(Enum):
    """Types of events published by the hub."""

    DEVICE_REGISTERED = "DEVICE_REGISTERED"
    DEVICE_UNREGISTERED = "DEVICE_UNREGISTERED"
    STATE_CHANGE = "STATE_CHANGE"
    TRIGGER_FIRED = "TRIGGER_FIRED"
    SCHEDULE_ADDED = "SCHEDULE_ADDED"
    TRIGGER_ADDED = "TRIGGER_ADDED"
    SCHEDULES_EXECUTED = "SCHEDULES_EXECUTED"


@dataclass
class Event:
    """
    A notification published by the hub.

    Attributes:
        type: Event type tag
        payload: Event-specific data (e.g., {"deviceId": 1, "command": "turnOn"})
        source: Event source
        timestamp: When the event occurred
    """

    type: EventType
    payload: Dict[str, Any] = field(default_factory=dict)
    source: str = "hub"
    timestamp: datetime = field(default_factory=_utc_now)


class EventFilter:
    """
    Filter for event subscriptions.

    Allows subscribers to receive a single event type only.
    """

    def __init__(self, event_type: Optional[EventType] = None):
        """
        Initialize an event filter.

        Args:
            event_type: Filter by event type (None = all types)
        """
        self.event_type = event_type

    def matches(self, event: Event) -> bool:
        """
        Check if an event matches this filter.

        Args:
            event: The event to check

        Returns:
            True if the event matches the filter
        """
        if self.event_type and event.type != self.event_type:
            return False
        return True

    def __repr__(self) -> str:
        return f"EventFilter(event_type={self.event_type})"


EventHandler = Callable[[Event], None]


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", repr(handler))


class EventBus:
    """
    Simple, synchronous event bus for hub events.

    Handlers run in subscription order and are wrapped in try/except so one
    failing observer cannot stop delivery or reach the publisher.
    """

    def __init__(self) -> None:
        """Initialize the event bus."""
        self._handlers: List[tuple[EventFilter, EventHandler]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(
        self,
        handler: EventHandler,
        event_filter: Optional[EventFilter] = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Callable that receives Event objects
            event_filter: Optional filter for events (None = receive all events)
        """
        if event_filter is None:
            event_filter = EventFilter()

        self._handlers.append((event_filter, handler))
        logger.debug(f"Subscribed handler {_handler_name(handler)} with filter {event_filter}")

    def publish(self, event: Event) -> None:
        """
        Publish an event to all matching subscribers.

        Handlers are called synchronously and wrapped in try/except.

        Args:
            event: The event to publish
        """
        logger.debug(f"Publishing event: {event.type.value} {event.payload}")

        # Snapshot so handlers may (un)subscribe while being notified
        for event_filter, handler in list(self._handlers):
            if event_filter.matches(event):
                try:
                    handler(event)
                except Exception as e:
                    logger.warning(
                        f"Observer error in {_handler_name(handler)} "
                        f"for event {event.type.value}: {e}",
                        exc_info=True,
                    )

    def unsubscribe(self, handler: EventHandler) -> None:
        """
        Unsubscribe a handler from all events.

        Args:
            handler: The handler to unsubscribe
        """
        self._handlers = [(f, h) for f, h in self._handlers if h != handler]
        logger.debug(f"Unsubscribed handler {_handler_name(handler)}")
