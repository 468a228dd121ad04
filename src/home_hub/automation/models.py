"""
Data models for schedules and triggers.

Defines schedule entries, trigger conditions, trigger entries, and the
execution records kept in the hub's history.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from home_hub.core.errors import InvalidConfig
from home_hub.devices.factory import parse_device_id


# =============================================================================
# Enums
# =============================================================================


class Comparison(Enum):
    """Comparison operators supported by trigger conditions."""

    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "=="

    @classmethod
    def parse(cls, text: str) -> "Comparison":
        try:
            return cls(text.strip())
        except ValueError:
            raise InvalidConfig(f"Unsupported comparison operator: {text!r}") from None

    def compare(self, left: float, right: float) -> bool:
        if self is Comparison.GT:
            return left > right
        elif self is Comparison.LT:
            return left < right
        elif self is Comparison.GE:
            return left >= right
        elif self is Comparison.LE:
            return left <= right
        return left == right


# =============================================================================
# Trigger Configs
# =============================================================================


@dataclass(frozen=True)
class TriggerCondition:
    """Compare one numeric device attribute against a threshold."""

    attribute: str  # e.g., "temperature"
    operator: Comparison
    threshold: float

    @classmethod
    def parse(cls, text: str) -> "TriggerCondition":
        """
        Parse a condition like ``"temperature > 75"``.

        Raises:
            InvalidConfig: If the text is not ``<attribute> <op> <number>``
        """
        tokens = text.split()
        if len(tokens) != 3:
            raise InvalidConfig(f"Invalid trigger condition: {text!r}")
        attribute, op, raw_threshold = tokens
        try:
            threshold = float(raw_threshold)
        except ValueError:
            raise InvalidConfig(f"Invalid trigger threshold: {raw_threshold!r}") from None
        return cls(attribute=attribute, operator=Comparison.parse(op), threshold=threshold)

    def describe(self) -> str:
        return f"{self.attribute} {self.operator.value} {self.threshold}"


@dataclass(frozen=True)
class TriggerEntry:
    """
    A condition -> actions rule.

    Actions are action expressions (e.g., "turnOff(1)"); they are parsed when
    the trigger fires, not when it is created.
    """

    condition: TriggerCondition
    actions: Tuple[str, ...]
    name: Optional[str] = None

    @classmethod
    def create(
        cls,
        condition: "TriggerCondition | str",
        actions: "Sequence[str] | str",
        name: Optional[str] = None,
    ) -> "TriggerEntry":
        """Build an entry from a condition (or its text) and one or more actions."""
        if isinstance(condition, str):
            condition = TriggerCondition.parse(condition)
        if isinstance(actions, str):
            actions = (actions,)
        return cls(condition=condition, actions=tuple(actions), name=name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        result: Dict[str, Any] = {
            "attribute": self.condition.attribute,
            "operator": self.condition.operator.value,
            "threshold": self.condition.threshold,
            "actions": list(self.actions),
        }
        if self.name:
            result["name"] = self.name
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TriggerEntry":
        """
        Deserialize from dict.

        Accepts either a "condition" string or the attribute/operator/threshold
        keys.
        """
        try:
            if "condition" in data:
                condition = TriggerCondition.parse(data["condition"])
            else:
                condition = TriggerCondition(
                    attribute=data["attribute"],
                    operator=Comparison.parse(data["operator"]),
                    threshold=float(data["threshold"]),
                )
            actions = data["actions"]
        except InvalidConfig:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfig(f"Invalid trigger config: {data!r}") from e
        return cls.create(condition, actions, name=data.get("name"))

    def __str__(self) -> str:
        return f"{{condition:{self.condition.describe()}, actions:{list(self.actions)}}}"


# =============================================================================
# Schedule Configs
# =============================================================================


_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass(frozen=True)
class ScheduleEntry:
    """
    An action to run when the clock reaches a given time.

    The time must be a zero-padded 24h "HH:MM" string ("08:00", not "8:00");
    anything else raises InvalidConfig here. The hub matches it against the
    clock by exact string equality. The action is not validated until the
    schedule runs.
    """

    device_id: int
    time: str  # "HH:MM"
    action: str  # e.g., "turnOn(1)"

    def __post_init__(self) -> None:
        if not isinstance(self.time, str) or not _TIME_PATTERN.match(self.time):
            raise InvalidConfig(f"Invalid schedule time (expected HH:MM): {self.time!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {"device_id": self.device_id, "time": self.time, "action": self.action}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleEntry":
        """Deserialize from dict."""
        try:
            return cls(
                device_id=parse_device_id(data["device_id"]),
                time=str(data["time"]).strip(),
                action=data["action"],
            )
        except KeyError as e:
            raise InvalidConfig(f"Schedule config missing key: {e}") from e

    def __str__(self) -> str:
        return f"{{device:{self.device_id}, time:{self.time}, action:{self.action}}}"


# =============================================================================
# Execution Records
# =============================================================================


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class TriggerExecution:
    """Record of a trigger firing (for history/debugging)."""

    trigger: TriggerEntry
    depth: int
    actions_succeeded: int
    actions_failed: int
    timestamp: datetime = field(default_factory=_utc_now)

    @property
    def success(self) -> bool:
        return self.actions_failed == 0
