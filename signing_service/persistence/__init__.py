"""Signing service persistence package.

This package provides the volatile reference device store and the per-id
locking wrapper that guards signature chain updates.
"""

from .atomic import AtomicDeviceStore
from .memory import InMemoryDeviceStore

__all__ = [
    "AtomicDeviceStore",
    "InMemoryDeviceStore",
]
