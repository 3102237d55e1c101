"""In-memory device storage.

This module provides the volatile reference implementation of IDeviceStore.
Nothing survives a restart.
"""

from __future__ import annotations

import threading
from typing import Dict

from signing_service.domain.device import Device
from signing_service.exceptions import DeviceNotFoundError
from signing_service.interfaces.storage import IDeviceStore


class InMemoryDeviceStore(IDeviceStore):
    """In-memory implementation of device storage.

    Devices are immutable, so records can be handed out without copying.
    The internal lock only protects the dictionary itself; it does not
    serialize read-modify-write sequences. Wrap the store in
    AtomicDeviceStore for that.

    Attributes:
        _devices: Maps device id to the stored device.
        _lock: Guards _devices.
    """

    def __init__(self) -> None:
        self._devices: Dict[str, Device] = {}
        self._lock = threading.Lock()

    def save(self, device_id: str, device: Device) -> None:
        with self._lock:
            self._devices[device_id] = device

    def load(self, device_id: str) -> Device:
        """Load a device by id.

        Raises:
            DeviceNotFoundError: If no device exists with that id.
        """
        with self._lock:
            device = self._devices.get(device_id)

        if device is None:
            raise DeviceNotFoundError(f"Device with id {device_id} not found")

        return device

    def list(self) -> list[Device]:
        with self._lock:
            return list(self._devices.values())
