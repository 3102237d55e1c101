"""Storage interfaces for the signing service.

This module defines the protocol every device store implements. The store is
implementation-agnostic: the reference one is volatile, but a durable backend
only has to honor the same three operations.
"""

from __future__ import annotations

from typing import Protocol

from signing_service.domain.device import Device


class IDeviceStore(Protocol):
    """Interface for device persistence."""

    def save(self, device_id: str, device: Device) -> None:
        """Store a device under its id, replacing any previous record.

        Args:
            device_id: The id to store the device under.
            device: The device to store.

        Raises:
            PersistenceError: If the store rejects the write.
        """
        ...

    def load(self, device_id: str) -> Device:
        """Load a device by id.

        Args:
            device_id: The id of the device to load.

        Returns:
            The stored device.

        Raises:
            DeviceNotFoundError: If no device exists with that id.
        """
        ...

    def list(self) -> list[Device]:
        """List every stored device, in no particular order.

        Returns:
            The stored devices.
        """
        ...
