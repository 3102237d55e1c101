"""Per-device locking storage wrapper.

AtomicDeviceStore decorates any IDeviceStore with one mutex per device id.
Read-modify-write sequences on the same device are serialized, while
sequences on different devices run in parallel.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from signing_service.domain.device import Device
from signing_service.interfaces.storage import IDeviceStore


class AtomicDeviceStore(IDeviceStore):
    """Device store wrapper with per-id mutual exclusion.

    Lock entries are created lazily on first use and never evicted, so the
    table grows with every id ever locked. That includes ids that were never
    stored, such as those of sign calls that failed with DeviceNotFoundError.
    load/save/list pass straight through to the wrapped store.

    Attributes:
        _base: The wrapped store.
        _locks: Maps device id to its mutex.
        _locks_guard: Makes creation of a lock entry atomic.
    """

    def __init__(self, base: IDeviceStore) -> None:
        """Initialize the wrapper.

        Args:
            base: The store to wrap.
        """
        self._base = base
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, device_id: str) -> threading.Lock:
        # Two threads racing on a new id must end up with the same lock.
        with self._locks_guard:
            return self._locks.setdefault(device_id, threading.Lock())

    def lock(self, device_id: str) -> None:
        """Block until the calling thread holds the lock for device_id.

        Args:
            device_id: The device id to lock.
        """
        self._lock_for(device_id).acquire()

    def unlock(self, device_id: str) -> None:
        """Release the lock for device_id.

        Unlocking an id that is not locked does nothing.

        Args:
            device_id: The device id to unlock.
        """
        with self._locks_guard:
            mutex = self._locks.get(device_id)

        if mutex is None:
            return

        try:
            mutex.release()
        except RuntimeError:
            # Already released.
            pass

    @contextmanager
    def locked(self, device_id: str) -> Iterator[None]:
        """Hold the lock for device_id for the duration of a with block.

        Args:
            device_id: The device id to lock.
        """
        self.lock(device_id)
        try:
            yield
        finally:
            self.unlock(device_id)

    def save(self, device_id: str, device: Device) -> None:
        self._base.save(device_id, device)

    def load(self, device_id: str) -> Device:
        return self._base.load(device_id)

    def list(self) -> list[Device]:
        return self._base.list()
