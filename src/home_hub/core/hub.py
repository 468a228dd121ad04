"""
Hub - the orchestrator.

The Hub owns the device registry, the schedule and trigger stores, and the
event bus, and runs every command as one transaction:

    lookup -> proxy -> STATE_CHANGE -> trigger evaluation -> TRIGGER_FIRED

Trigger actions re-enter the same transaction, so one rule can set off
another.
"""

import logging
import threading
from collections import deque
from contextlib import contextmanager
from typing import Any, Deque, Iterable, Iterator, List, Mapping, Optional, Sequence, Set

from home_hub.automation.actions import parse_action
from home_hub.automation.evaluators import ConditionEvaluator
from home_hub.automation.models import ScheduleEntry, TriggerEntry, TriggerExecution
from home_hub.automation.store import ScheduleStore, TriggerStore
from home_hub.core.bus import Event, EventBus, EventFilter, EventHandler, EventType
from home_hub.core.config import HubConfig
from home_hub.core.errors import (
    DeviceNotFound,
    HubError,
    InvalidConfig,
    MalformedAction,
    TriggerDepthExceeded,
)
from home_hub.core.registry import DeviceRegistry
from home_hub.devices.factory import create_device
from home_hub.devices.proxy import DeviceProxy

logger = logging.getLogger(__name__)


class Hub:
    """
    Home automation hub.

    Responsibilities:
    - Register and look up devices (through their access proxies)
    - Execute commands and publish state changes
    - Re-evaluate triggers after every successful command
    - Run schedules when the clock is advanced to a matching time
    - Notify observers of hub events

    Execution is single-threaded by design, but every public operation holds
    one re-entrant lock for the whole transaction (nested trigger actions
    included), so a host that shares the hub between threads still gets
    one command at a time.
    """

    def __init__(
        self,
        config: Optional[HubConfig] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        """
        Initialize the hub.

        Args:
            config: Runtime settings (None = defaults)
            bus: Event bus to publish on (None = a private bus)
        """
        self._config = config or HubConfig()
        self._bus = bus or EventBus()
        self._registry = DeviceRegistry()
        self._schedules = ScheduleStore()
        self._triggers = TriggerStore()
        self._evaluator = ConditionEvaluator(self._registry)

        self._history: Deque[TriggerExecution] = deque(maxlen=self._config.history_size)

        # Positions (in the trigger store) of triggers already fired by the
        # current top-level command; None outside a transaction
        self._fired_triggers: Optional[Set[int]] = None

        self._lock = threading.RLock()

    @property
    def config(self) -> HubConfig:
        return self._config

    @property
    def bus(self) -> EventBus:
        return self._bus

    # =========================================================================
    # Observers
    # =========================================================================

    def add_observer(
        self,
        handler: EventHandler,
        event_filter: Optional[EventFilter] = None,
    ) -> None:
        """
        Subscribe an observer to hub events.

        Args:
            handler: Callable receiving Event objects
            event_filter: Optional filter (None = all events)
        """
        self._bus.subscribe(handler, event_filter)

    def remove_observer(self, handler: EventHandler) -> None:
        """Unsubscribe an observer."""
        self._bus.unsubscribe(handler)

    def _publish(self, event_type: EventType, **payload: Any) -> None:
        self._bus.publish(Event(type=event_type, payload=payload))

    # =========================================================================
    # Devices
    # =========================================================================

    def register_device(self, proxy: DeviceProxy) -> None:
        """
        Register a device proxy.

        A proxy with an id that is already registered replaces the old one.
        """
        with self._lock:
            self._registry.register(proxy)
            self._publish(EventType.DEVICE_REGISTERED, deviceId=proxy.id)

    def add_device(
        self,
        properties: Mapping[str, Any],
        allowed_actions: Optional[Iterable[str]] = None,
    ) -> DeviceProxy:
        """
        Create a device from properties, wrap it in a proxy, and register it.

        Args:
            properties: Device properties (id, type, optional temperature)
            allowed_actions: Proxy allow-list (None = config default)

        Returns:
            The registered proxy

        Raises:
            InvalidConfig: If the properties are invalid
        """
        device = create_device(properties, default_temperature=self._config.default_temperature)
        if allowed_actions is None:
            allowed_actions = self._config.default_allowed_actions
        proxy = DeviceProxy(device, allowed_actions)
        self.register_device(proxy)
        return proxy

    def unregister_device(self, device_id: int) -> Optional[DeviceProxy]:
        """
        Remove a device.

        Returns:
            The removed proxy, or None if no such device (no event is
            published in that case)
        """
        with self._lock:
            proxy = self._registry.unregister(device_id)
            if proxy is not None:
                self._publish(EventType.DEVICE_UNREGISTERED, deviceId=device_id)
            return proxy

    def get_device(self, device_id: int) -> Optional[DeviceProxy]:
        """Get a device proxy by id, or None."""
        return self._registry.get(device_id)

    def list_devices(self) -> List[DeviceProxy]:
        """Get all registered device proxies."""
        return self._registry.all_devices()

    def status_report(self) -> List[str]:
        """Get the status text of every registered device."""
        return [proxy.status_report() for proxy in self._registry.all_devices()]

    # =========================================================================
    # Schedules & Triggers
    # =========================================================================

    def add_schedule(self, entry: ScheduleEntry) -> None:
        """Add a schedule. The action is only parsed when the schedule runs."""
        with self._lock:
            self._schedules.add(entry)
            self._publish(EventType.SCHEDULE_ADDED, schedule=entry)

    def list_schedules(self) -> Sequence[ScheduleEntry]:
        """Get all schedules in the order they were added."""
        return self._schedules.all()

    def add_trigger(self, entry: TriggerEntry) -> None:
        """Add a trigger. It is evaluated after every successful command."""
        with self._lock:
            self._triggers.add(entry)
            self._publish(EventType.TRIGGER_ADDED, trigger=entry)

    def list_triggers(self) -> Sequence[TriggerEntry]:
        """Get all triggers in registration order."""
        return self._triggers.all()

    # =========================================================================
    # Command Execution
    # =========================================================================

    def execute_command(self, device_id: int, command: str, *args: str) -> None:
        """
        Execute a command on a device, then evaluate triggers.

        Args:
            device_id: Target device id
            command: Command name (case-insensitive, e.g. "turnOn")
            *args: Command arguments (e.g. "68" for setTemp)

        Raises:
            DeviceNotFound: If no device has this id
            AccessDenied: If the device's proxy does not allow the command
            UnsupportedCommand: If the device does not know the command
            InvalidArgument: If an argument is invalid
        """
        with self._transaction():
            self._execute(device_id, command, tuple(args), depth=0)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """
        Hold the hub lock for one top-level call.

        Nested calls (trigger actions, observers calling back into the hub)
        join the outermost transaction and share its fired-trigger set.
        """
        with self._lock:
            outermost = self._fired_triggers is None
            if outermost:
                self._fired_triggers = set()
            try:
                yield
            finally:
                if outermost:
                    self._fired_triggers = None

    def _execute(self, device_id: int, command: str, args: Sequence[str], depth: int) -> None:
        """One command transaction. Errors abort it before any event is published."""
        limit = self._config.max_trigger_depth
        if depth > limit:
            raise TriggerDepthExceeded(depth, limit)

        proxy = self._registry.get(device_id)
        if proxy is None:
            raise DeviceNotFound(device_id)

        proxy.execute(command, *args)

        self._publish(EventType.STATE_CHANGE, deviceId=device_id, command=command)

        self._evaluate_triggers(depth)

    def _evaluate_triggers(self, depth: int) -> None:
        """Evaluate every trigger in registration order, firing those that match."""
        for index, trigger in enumerate(self._triggers.all()):
            if index in self._fired_triggers:
                # Each trigger fires at most once per top-level command
                logger.debug(f"Trigger {trigger} already fired, skipping")
                continue

            try:
                matched = self._evaluator.evaluate(trigger.condition)
            except Exception as e:
                logger.error(f"Trigger evaluation error for {trigger}: {e}", exc_info=True)
                continue

            if matched:
                self._fire_trigger(index, trigger, depth)

    def _fire_trigger(self, index: int, trigger: TriggerEntry, depth: int) -> None:
        """Run a trigger's actions, record the execution, and publish TRIGGER_FIRED."""
        logger.info(f"Trigger fired: {trigger}")
        succeeded = 0
        failed = 0

        self._fired_triggers.add(index)
        for action in trigger.actions:
            if self._run_action(action, depth + 1):
                succeeded += 1
            else:
                failed += 1

        self._history.append(
            TriggerExecution(
                trigger=trigger,
                depth=depth,
                actions_succeeded=succeeded,
                actions_failed=failed,
            )
        )
        self._publish(EventType.TRIGGER_FIRED, trigger=trigger)

    def _run_action(self, action: str, depth: int) -> bool:
        """
        Parse and execute one action expression.

        The command name is passed on as written (e.g. "turnOn"), so
        STATE_CHANGE payloads carry the action's own spelling; the allow-list
        and device dispatch compare case-insensitively.

        Failures are logged and reported through the return value; they never
        propagate to the caller's loop.

        Returns:
            True if the command succeeded
        """
        try:
            parsed = parse_action(action)
        except MalformedAction as e:
            logger.warning(f"Skipping action: {e}")
            return False

        try:
            self._execute(parsed.device_id, parsed.command, parsed.args, depth)
        except TriggerDepthExceeded as e:
            logger.error(f"Stopped trigger chain at {action!r}: {e}")
            return False
        except HubError as e:
            logger.warning(f"Action execution failed for {action!r}: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error executing action {action!r}: {e}", exc_info=True)
            return False
        return True

    # =========================================================================
    # Scheduling
    # =========================================================================

    def run_schedules_at(self, time_hhmm: str) -> int:
        """
        Run every schedule whose time equals the given string.

        Matching is exact string equality (no trimming or normalization, so
        "8:00" never matches a schedule at "08:00"); earlier, missed times
        are not caught up. Matching schedules run in the order they were
        added, each action as its own transaction. SCHEDULES_EXECUTED is
        published once when at least one schedule matched.

        Args:
            time_hhmm: The time the clock has been advanced to

        Returns:
            Number of schedules that matched
        """
        with self._lock:
            due = self._schedules.due_at(time_hhmm)
            if not due:
                logger.info(f"No scheduled tasks at {time_hhmm}")
                return 0

            for entry in due:
                logger.info(
                    f"Running schedule: device={entry.device_id} "
                    f"time={entry.time} action={entry.action}"
                )
                with self._transaction():
                    self._run_action(entry.action, depth=0)

            self._publish(EventType.SCHEDULES_EXECUTED, time=time_hhmm, count=len(due))
            return len(due)

    # =========================================================================
    # History
    # =========================================================================

    def get_history(self, limit: int = 20) -> List[TriggerExecution]:
        """
        Get trigger execution history.

        Args:
            limit: Maximum entries to return

        Returns:
            List of TriggerExecution records (newest first)
        """
        return list(reversed(self._history))[:limit]

    # =========================================================================
    # Configuration
    # =========================================================================

    def load_config(self, data: Mapping[str, Any]) -> None:
        """
        Apply a declarative setup.

        Example:
            {
                "devices": [{"id": "1", "type": "light", "allowed_actions": ["turnOn"]}],
                "schedules": [{"device_id": 1, "time": "08:00", "action": "turnOn(1)"}],
                "triggers": [{"condition": "temperature > 75", "actions": ["turnOff(1)"]}],
            }

        Raises:
            InvalidConfig: If any entry is invalid. Entries before the bad one
                have already been applied.
        """
        for props in data.get("devices", []):
            if not isinstance(props, Mapping):
                raise InvalidConfig(f"Device config must be a mapping: {props!r}")
            self.add_device(props, props.get("allowed_actions"))
        for schedule in data.get("schedules", []):
            self.add_schedule(ScheduleEntry.from_dict(schedule))
        for trigger in data.get("triggers", []):
            self.add_trigger(TriggerEntry.from_dict(trigger))
