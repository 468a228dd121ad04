"""
DeviceRegistry for device bookkeeping.

The registry owns the id -> proxy mapping, not the behavior.
"""

from typing import Dict, Iterator, List, Optional, Tuple
import logging

from home_hub.devices.proxy import DeviceProxy

logger = logging.getLogger(__name__)


class DeviceRegistry:
    """
    Maps device ids to their access proxies.

    Responsibilities:
    - Store one proxy per device id
    - Answer lookups and listings
    - Locate devices by numeric capability

    Does NOT execute commands or evaluate triggers.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._devices: Dict[int, DeviceProxy] = {}

    def register(self, proxy: DeviceProxy) -> Optional[DeviceProxy]:
        """
        Register a device proxy under its id.

        Registering an id that already exists replaces the previous proxy.

        Args:
            proxy: The proxy to register

        Returns:
            The replaced proxy, or None if the id was new
        """
        previous = self._devices.get(proxy.id)
        self._devices[proxy.id] = proxy
        if previous is not None:
            logger.info(f"Replaced device {proxy.id} ({proxy.device_type.value})")
        else:
            logger.info(f"Registered device {proxy.id} ({proxy.device_type.value})")
        return previous

    def unregister(self, device_id: int) -> Optional[DeviceProxy]:
        """
        Remove a device.

        Args:
            device_id: The device id

        Returns:
            The removed proxy, or None if no such device
        """
        proxy = self._devices.pop(device_id, None)
        if proxy is not None:
            logger.info(f"Unregistered device {device_id}")
        return proxy

    def get(self, device_id: int) -> Optional[DeviceProxy]:
        """
        Get a device proxy by id.

        Returns:
            The proxy or None if not found
        """
        return self._devices.get(device_id)

    def all_devices(self) -> List[DeviceProxy]:
        """Get all registered proxies."""
        return list(self._devices.values())

    def find_numeric_attribute(self, name: str) -> Optional[Tuple[DeviceProxy, float]]:
        """
        Find the first device that reports a numeric attribute.

        Args:
            name: Attribute name (e.g., "temperature")

        Returns:
            (proxy, value) for the first device exposing the attribute, or None
        """
        for proxy in self._devices.values():
            value = proxy.numeric_attribute(name)
            if value is not None:
                return proxy, value
        return None

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[DeviceProxy]:
        return iter(list(self._devices.values()))
