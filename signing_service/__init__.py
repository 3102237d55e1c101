"""Signing service Python implementation.

This package issues and verifies chained signatures on behalf of registered
signature devices. Each device holds one key pair under one algorithm, and
every signature it produces covers the previous one, forming an append-only,
tamper-evident chain per device.

Main Components:
    - SignatureService: Device registration, chained signing, verification
    - AlgorithmRegistry: Name to algorithm mapping (RSA, ECC)
    - AtomicDeviceStore: Per-device locking around any device store
    - InMemoryDeviceStore: Volatile reference device store

Example:
    >>> from signing_service import (
    ...     AlgorithmRegistry, AtomicDeviceStore, CryptoConfig,
    ...     InMemoryDeviceStore, SignatureService, SignatureServiceConfig,
    ...     StoreConfig,
    ... )
    >>> service = SignatureService(
    ...     SignatureServiceConfig(
    ...         crypto=CryptoConfig(registry=AlgorithmRegistry.default()),
    ...         store=StoreConfig(device=AtomicDeviceStore(InMemoryDeviceStore())),
    ...     )
    ... )
    >>> _ = service.create_device("d1", "ecc")
    >>> service.sign("d1", "hello").signature_counter
    1
"""

from signing_service.api import (
    CryptoConfig,
    SignatureResult,
    SignatureService,
    SignatureServiceConfig,
    StoreConfig,
    VerificationResult,
)
from signing_service.crypto import AlgorithmRegistry, ECCAlgorithm, RSAAlgorithm
from signing_service.domain import Device
from signing_service.exceptions import (
    AlgorithmUnavailableError,
    CryptoError,
    DeviceExistsError,
    DeviceNotFoundError,
    InvalidKeyEncodingError,
    InvalidRequestError,
    KeyTypeError,
    MalformedKeyEncodingError,
    MalformedSignatureError,
    PersistenceError,
    SigningServiceError,
    VerificationError,
)
from signing_service.persistence import AtomicDeviceStore, InMemoryDeviceStore

__version__ = "0.1.0"

__all__ = [
    # API
    "SignatureService",
    "SignatureResult",
    "VerificationResult",
    "SignatureServiceConfig",
    "CryptoConfig",
    "StoreConfig",
    # Crypto
    "AlgorithmRegistry",
    "ECCAlgorithm",
    "RSAAlgorithm",
    # Domain
    "Device",
    # Persistence
    "AtomicDeviceStore",
    "InMemoryDeviceStore",
    # Exceptions
    "SigningServiceError",
    "InvalidRequestError",
    "DeviceNotFoundError",
    "DeviceExistsError",
    "AlgorithmUnavailableError",
    "CryptoError",
    "KeyTypeError",
    "InvalidKeyEncodingError",
    "MalformedKeyEncodingError",
    "VerificationError",
    "MalformedSignatureError",
    "PersistenceError",
]
