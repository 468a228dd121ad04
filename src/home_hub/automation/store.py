"""
Append-only stores for schedules and triggers.
"""

import logging
from typing import List, Tuple

from .models import ScheduleEntry, TriggerEntry

logger = logging.getLogger(__name__)


class ScheduleStore:
    """Schedules in the order they were added."""

    def __init__(self) -> None:
        self._entries: List[ScheduleEntry] = []

    def add(self, entry: ScheduleEntry) -> None:
        self._entries.append(entry)
        logger.debug(f"Added schedule: {entry}")

    def all(self) -> Tuple[ScheduleEntry, ...]:
        return tuple(self._entries)

    def due_at(self, time_hhmm: str) -> List[ScheduleEntry]:
        """Get schedules whose time equals the given string exactly."""
        return [entry for entry in self._entries if entry.time == time_hhmm]

    def __len__(self) -> int:
        return len(self._entries)


class TriggerStore:
    """Triggers in registration order."""

    def __init__(self) -> None:
        self._entries: List[TriggerEntry] = []

    def add(self, entry: TriggerEntry) -> None:
        self._entries.append(entry)
        logger.debug(f"Added trigger: {entry}")

    def all(self) -> Tuple[TriggerEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
