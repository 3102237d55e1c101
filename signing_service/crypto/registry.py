"""Algorithm registry.

Maps algorithm names to algorithm instances. Names match exactly: "RSA" and
"rsa" are different entries, and no case folding is applied on lookup.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from signing_service.interfaces.crypto import IAlgorithm

from .ecc import ECCAlgorithm
from .rsa import RSAAlgorithm

RSA_ALGORITHM_NAME = "rsa"
ECC_ALGORITHM_NAME = "ecc"


class AlgorithmRegistry:
    """Thread-safe mapping from algorithm name to algorithm.

    Attributes:
        _algorithms: Registered algorithms by name.
        _lock: Guards every read and write of _algorithms.
    """

    def __init__(self) -> None:
        self._algorithms: Dict[str, IAlgorithm] = {}
        self._lock = threading.Lock()

    @classmethod
    def default(cls) -> AlgorithmRegistry:
        """Create a registry holding the shipped schemes.

        Returns:
            A registry with RSA under "rsa" and ECC under "ecc".
        """
        registry = cls()
        registry.register(RSA_ALGORITHM_NAME, RSAAlgorithm())
        registry.register(ECC_ALGORITHM_NAME, ECCAlgorithm())
        return registry

    def register(self, name: str, algorithm: IAlgorithm) -> None:
        """Bind an algorithm to a name, replacing any previous binding.

        Args:
            name: The name to register under.
            algorithm: The algorithm instance.
        """
        with self._lock:
            self._algorithms[name] = algorithm

    def resolve(self, name: str) -> Optional[IAlgorithm]:
        """Look up an algorithm by exact name.

        Args:
            name: The registered name.

        Returns:
            The algorithm, or None if nothing is registered under name.
        """
        with self._lock:
            return self._algorithms.get(name)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._algorithms)
