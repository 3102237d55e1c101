"""Signing service interfaces package.

This package provides protocol definitions for cryptographic algorithms, key
pairs and device storage.
"""

from .crypto import IAlgorithm, IKeyPair, Key
from .storage import IDeviceStore

__all__ = [
    # crypto
    "IAlgorithm",
    "IKeyPair",
    "Key",
    # storage
    "IDeviceStore",
]
