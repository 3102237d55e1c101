"""Crypto implementations for signing service testing.

This package provides algorithm doubles that fail in controlled ways.
"""

from .broken import BrokenSigningAlgorithm

__all__ = [
    "BrokenSigningAlgorithm",
]
