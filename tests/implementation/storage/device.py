"""Device store doubles for signing service tests."""

from __future__ import annotations

import threading
from typing import Any, List, Tuple

from signing_service.domain.device import Device
from signing_service.exceptions import PersistenceError
from signing_service.persistence.memory import InMemoryDeviceStore


class FailingDeviceStore(InMemoryDeviceStore):
    """In-memory store whose writes can be switched to fail.

    Attributes:
        fail_saves: When set, save() raises instead of storing.
        error: The exception raised by a failing save().
    """

    def __init__(self, error: Exception | None = None) -> None:
        super().__init__()
        self.fail_saves = False
        self.error = error if error is not None else PersistenceError("disk full")

    def save(self, device_id: str, device: Device) -> None:
        if self.fail_saves:
            raise self.error

        super().save(device_id, device)


class RecordingDeviceStore(InMemoryDeviceStore):
    """In-memory store that records every call made to it.

    Attributes:
        calls: (method, args) tuples in call order.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def save(self, device_id: str, device: Device) -> None:
        self.calls.append(("save", (device_id, device)))
        super().save(device_id, device)

    def load(self, device_id: str) -> Device:
        self.calls.append(("load", (device_id,)))
        return super().load(device_id)

    def list(self) -> list[Device]:
        self.calls.append(("list", ()))
        return super().list()


class BarrierDeviceStore(InMemoryDeviceStore):
    """In-memory store whose load() waits at a barrier once armed.

    Two signing calls that must run side by side can only both get past
    load() if neither is blocked by the other. If they are serialized, the
    barrier times out and load() raises threading.BrokenBarrierError.
    """

    def __init__(self, parties: int, timeout: float = 5.0) -> None:
        super().__init__()
        self.barrier = threading.Barrier(parties, timeout=timeout)
        self.armed = False

    def load(self, device_id: str) -> Device:
        device = super().load(device_id)
        if self.armed:
            self.barrier.wait()
        return device
