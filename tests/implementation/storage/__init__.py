"""Storage implementations for signing service testing.

This module provides device store doubles that fail, record or rendezvous on
demand, built on the in-memory reference store.
"""

from .device import BarrierDeviceStore, FailingDeviceStore, RecordingDeviceStore

__all__ = [
    "BarrierDeviceStore",
    "FailingDeviceStore",
    "RecordingDeviceStore",
]
