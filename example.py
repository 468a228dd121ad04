#!/usr/bin/env python3
"""
Quick example demonstrating home-hub basic usage.

Run with: PYTHONPATH=src python3 example.py
"""

import logging

from home_hub import Event, Hub, ScheduleEntry, TriggerEntry
from home_hub.core.config import DEFAULT_SETUP
from home_hub.core.errors import HubError

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

print("=" * 60)
print("home-hub Example")
print("=" * 60)

# 1. Hub and observer
print("\n1. Creating the hub...")
hub = Hub()


def print_event(event: Event) -> None:
    print(f"   [Observer] {event.type.value} {event.payload}")


hub.add_observer(print_event)
print("   ✓ Hub created, observer attached")

# 2. Devices
print("\n2. Seeding devices...")
hub.load_config(DEFAULT_SETUP)
for line in hub.status_report():
    print(f"   ✓ {line}")

# 3. Commands
print("\n3. Executing commands...")
hub.execute_command(1, "turnOn")
hub.execute_command(3, "unlock")
try:
    hub.execute_command(3, "turnOn")
except HubError as e:
    print(f"   ✗ {e}")

# 4. Triggers
print("\n4. Adding a trigger: temperature > 75 -> turnOff(1)")
hub.add_trigger(TriggerEntry.create("temperature > 75", "turnOff(1)"))
hub.execute_command(2, "setTemp", "80")

# 5. Schedules
print("\n5. Scheduling and advancing the clock...")
hub.add_schedule(ScheduleEntry(1, "08:00", "turnOn(1)"))
hub.add_schedule(ScheduleEntry(3, "08:00", "lock(3)"))
hub.add_schedule(ScheduleEntry(2, "09:00", "setTemp(2, 68)"))
hub.run_schedules_at("08:00")
hub.run_schedules_at("08:30")

print("\nFinal state:")
for line in hub.status_report():
    print(f"   {line}")
