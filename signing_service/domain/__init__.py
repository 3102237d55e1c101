"""Signing service domain package."""

from .device import CHAIN_SEPARATOR, Device, seed_signature

__all__ = [
    "CHAIN_SEPARATOR",
    "Device",
    "seed_signature",
]
