"""Tests for the device registry."""

from home_hub.core.registry import DeviceRegistry
from home_hub.devices import DeviceProxy, DoorLock, Light, Thermostat


def test_register_and_lookup():
    registry = DeviceRegistry()
    proxy = DeviceProxy(Light(1))

    assert registry.register(proxy) is None
    assert registry.get(1) is proxy
    assert 1 in registry
    assert len(registry) == 1


def test_duplicate_id_overwrites():
    registry = DeviceRegistry()
    first = DeviceProxy(Light(1))
    second = DeviceProxy(DoorLock(1))

    registry.register(first)
    assert registry.register(second) is first
    assert registry.get(1) is second
    assert len(registry) == 1


def test_unregister():
    registry = DeviceRegistry()
    proxy = DeviceProxy(Light(1))
    registry.register(proxy)

    assert registry.unregister(1) is proxy
    assert registry.unregister(1) is None
    assert registry.get(1) is None


def test_find_numeric_attribute():
    registry = DeviceRegistry()
    registry.register(DeviceProxy(Light(1)))
    thermostat = DeviceProxy(Thermostat(2, 71.0))
    registry.register(thermostat)

    assert registry.find_numeric_attribute("temperature") == (thermostat, 71.0)
    assert registry.find_numeric_attribute("humidity") is None
