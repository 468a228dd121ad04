"""
Schedules and triggers for the hub.

Features:
- Time-tagged schedules fired by an explicit "advance clock to HH:MM" call
- Condition -> action triggers re-evaluated after every command
- A small parser for action expressions such as "setTemp(2, 68)"
"""

from .models import (
    Comparison,
    TriggerCondition,
    TriggerEntry,
    ScheduleEntry,
    TriggerExecution,
)
from .actions import ParsedAction, parse_action
from .evaluators import ConditionEvaluator
from .store import ScheduleStore, TriggerStore

__all__ = [
    "Comparison",
    "TriggerCondition",
    "TriggerEntry",
    "ScheduleEntry",
    "TriggerExecution",
    "ParsedAction",
    "parse_action",
    "ConditionEvaluator",
    "ScheduleStore",
    "TriggerStore",
]
