"""
Basic smoke tests for home-hub core components.
"""

from home_hub import (
    Event,
    EventBus,
    EventType,
    Hub,
    DeviceProxy,
    ScheduleEntry,
    TriggerEntry,
    create_device,
)


def test_device_creation():
    """Test basic device creation through the factory."""
    device = create_device({"id": "1", "type": "light"})
    assert device.id == 1
    assert device.status_report() == "Light 1 is Off"


def test_register_and_get_device():
    """Test that a registered device can be looked up by id."""
    hub = Hub()
    hub.register_device(DeviceProxy(create_device({"id": "7", "type": "door"})))

    proxy = hub.get_device(7)
    assert proxy is not None
    assert proxy.id == 7
    assert hub.get_device(8) is None


def test_execute_command():
    """Test a command round trip through the hub."""
    hub = Hub()
    hub.add_device({"id": "1", "type": "light"})

    hub.execute_command(1, "turnOn")
    assert hub.get_device(1).status_report() == "Light 1 is On"

    hub.execute_command(1, "turnOff")
    assert hub.get_device(1).status_report() == "Light 1 is Off"


def test_event_bus_publish_subscribe():
    """Test basic event publishing and subscription."""
    bus = EventBus()
    received = []

    def handler(event: Event):
        received.append(event)

    bus.subscribe(handler)
    bus.publish(Event(type=EventType.STATE_CHANGE, payload={"deviceId": 1}))

    assert len(received) == 1
    assert received[0].type == EventType.STATE_CHANGE
    assert received[0].payload["deviceId"] == 1


def test_trigger_and_schedule():
    """Test a trigger and a schedule working together."""
    hub = Hub()
    hub.add_device({"id": "1", "type": "light"})
    hub.add_device({"id": "2", "type": "thermostat", "temperature": "70"})
    hub.add_trigger(TriggerEntry.create("temperature > 75", "turnOff(1)"))
    hub.add_schedule(ScheduleEntry(1, "07:00", "turnOn(1)"))
    hub.add_schedule(ScheduleEntry(2, "12:00", "setTemp(2, 80)"))

    hub.run_schedules_at("07:00")
    assert hub.get_device(1).status_report() == "Light 1 is On"

    hub.run_schedules_at("12:00")
    assert hub.get_device(2).status_report() == "Thermostat 2 is set to 80.0 degrees"
    assert hub.get_device(1).status_report() == "Light 1 is Off"
