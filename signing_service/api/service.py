"""Signature service for chained signing devices.

This module provides the SignatureService class, which registers signature
devices, advances each device's signature chain and verifies signatures, as
well as the configuration dataclasses it is constructed from.

Every signature covers "<counter>_<data>_<previous signature>", so each one
depends on its predecessor and the chain as a whole is tamper-evident.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional, Union

from signing_service.crypto.registry import AlgorithmRegistry
from signing_service.domain.device import Device
from signing_service.exceptions import (
    AlgorithmUnavailableError,
    CryptoError,
    DeviceExistsError,
    DeviceNotFoundError,
    InvalidRequestError,
    MalformedSignatureError,
    PersistenceError,
    SigningServiceError,
    VerificationError,
)
from signing_service.interfaces.crypto import IAlgorithm, IKeyPair
from signing_service.persistence.atomic import AtomicDeviceStore

logger = logging.getLogger(__name__)

Data = Union[bytes, str]


@dataclass
class CryptoConfig:
    """Configuration for cryptographic operations.

    Attributes:
        registry: Resolves device algorithm names to algorithms.
    """

    registry: AlgorithmRegistry


@dataclass
class StoreConfig:
    """Configuration for storage.

    Attributes:
        device: Device store guarded by per-id locks. Every service sharing
            a base store must share this wrapper too, or the locks are moot.
    """

    device: AtomicDeviceStore


@dataclass
class SignatureServiceConfig:
    """Main configuration for SignatureService.

    Attributes:
        crypto: Cryptographic configuration.
        store: Storage configuration.
    """

    crypto: CryptoConfig
    store: StoreConfig


@dataclass(frozen=True)
class SignatureResult:
    """Outcome of a successful signing operation.

    Attributes:
        signature: Standard base64 of the raw signature bytes.
        signed_data: The signed payload as text. Exact for UTF-8 data; other
            bytes appear as backslash escapes.
        signed_payload: The exact payload bytes that were signed.
        signature_counter: The device's counter after this signature.
    """

    signature: str
    signed_data: str
    signature_counter: int
    signed_payload: bytes


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a verification.

    Attributes:
        verified: Whether the signature matched.
        reason: Why verification failed, None when it succeeded.
    """

    verified: bool
    reason: Optional[str] = None


def _as_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, bytes):
        return data
    raise InvalidRequestError(f"data must be bytes or str, not {type(data).__name__}")


class SignatureService:
    """Signature device service.

    Handles device registration, chained signing and verification. All chain
    mutations happen under the device's lock in the configured
    AtomicDeviceStore; verification reads a snapshot without locking.
    """

    def __init__(self, config: SignatureServiceConfig) -> None:
        """Initialize the service.

        Args:
            config: Service configuration.
        """
        self._registry = config.crypto.registry
        self._store = config.store.device

    def create_device(
        self,
        device_id: str,
        algorithm: str,
        label: Optional[str] = None,
    ) -> Device:
        """Register a new signature device.

        Generates a key pair with the named algorithm and stores the device
        with an empty chain.

        Args:
            device_id: Unique id for the device.
            algorithm: Registered name of the algorithm to use.
            label: Optional display name.

        Returns:
            The stored device.

        Raises:
            InvalidRequestError: If device_id or algorithm is empty.
            DeviceExistsError: If a device with device_id already exists.
            AlgorithmUnavailableError: If algorithm is not registered.
            CryptoError: If key generation or serialization fails.
            PersistenceError: If the device cannot be saved.
        """
        if not device_id:
            raise InvalidRequestError("Device ID is required")
        if not algorithm:
            raise InvalidRequestError("Algorithm is required")

        with self._store.locked(device_id):
            try:
                self._load(device_id)
            except DeviceNotFoundError:
                pass
            else:
                logger.info("rejected duplicate device %s", device_id)
                raise DeviceExistsError(f"Device with ID {device_id} already exists")

            scheme = self._registry.resolve(algorithm)
            if scheme is None:
                logger.info("rejected device %s: unknown algorithm %r", device_id, algorithm)
                raise AlgorithmUnavailableError(f"Algorithm {algorithm} not available")

            try:
                key_pair = scheme.generate_key_pair()
                _, private_key = key_pair.serialize()
            except CryptoError:
                logger.exception("key generation failed for device %s", device_id)
                raise
            except Exception as e:
                logger.exception("key generation failed for device %s", device_id)
                raise CryptoError(f"key generation failed: {e}") from e

            device = Device.create(device_id, algorithm, private_key, label)
            self._save(device)

        logger.info("created device %s with algorithm %s", device_id, algorithm)
        return device

    def list_devices(self) -> list[Device]:
        """List every registered device, in no particular order."""
        return self._store.list()

    def public_key(self, device_id: str) -> bytes:
        """Fetch a device's public key in its text container form.

        Args:
            device_id: The device id.

        Returns:
            The encoded public key.

        Raises:
            DeviceNotFoundError: If the device does not exist.
            AlgorithmUnavailableError: If the device's algorithm is unregistered.
            CryptoError: If the key pair cannot be reconstructed.
        """
        device = self._load(device_id)
        key_pair = self._key_pair(self._algorithm(device), device)

        try:
            public_key, _ = key_pair.serialize()
        except Exception as e:
            raise CryptoError(f"cannot encode public key: {e}") from e

        return public_key

    def sign(self, device_id: str, data: Data) -> SignatureResult:
        """Produce the next signature in a device's chain.

        The device's counter and last signature advance together, and only
        once the updated device has been saved. Any failure leaves the stored
        chain exactly as it was.

        Args:
            device_id: The device to sign with.
            data: The data to sign; str is UTF-8 encoded.

        Returns:
            The base64 signature and the payload that was signed.

        Raises:
            DeviceNotFoundError: If the device does not exist.
            AlgorithmUnavailableError: If the device's algorithm is unregistered.
            CryptoError: If key reconstruction or signing fails.
            PersistenceError: If the advanced device cannot be saved.
        """
        raw_data = _as_bytes(data)

        with self._store.locked(device_id):
            device = self._load(device_id)
            algorithm = self._algorithm(device)
            key_pair = self._key_pair(algorithm, device)

            payload = device.chain_payload(raw_data)
            try:
                raw_signature = algorithm.sign(key_pair.private_key(), payload)
            except CryptoError:
                logger.exception("signing failed for device %s", device_id)
                raise
            except Exception as e:
                logger.exception("signing failed for device %s", device_id)
                raise CryptoError(f"signing failed: {e}") from e

            signature = base64.b64encode(raw_signature).decode("ascii")
            advanced = device.advance(signature)
            self._save(advanced)

        logger.debug(
            "device %s advanced to signature %d", device_id, advanced.signature_counter
        )
        return SignatureResult(
            signature=signature,
            signed_data=payload.decode("utf-8", errors="backslashreplace"),
            signature_counter=advanced.signature_counter,
            signed_payload=payload,
        )

    def verify(self, device_id: str, data: Data, signature: str) -> VerificationResult:
        """Verify a signature against a device's public key.

        A mismatch is an ordinary outcome and is reported in the result, not
        raised. No lock is taken: the check runs against the device as it
        was when loaded.

        Args:
            device_id: The device whose key to verify with.
            data: The signed payload; str is UTF-8 encoded.
            signature: Standard base64 of the signature bytes.

        Returns:
            The verification result.

        Raises:
            DeviceNotFoundError: If the device does not exist.
            AlgorithmUnavailableError: If the device's algorithm is unregistered.
            CryptoError: If the key pair cannot be reconstructed.
            MalformedSignatureError: If signature is not valid base64
                or not a string.
        """
        raw_data = _as_bytes(data)
        if not isinstance(signature, (str, bytes)):
            raise MalformedSignatureError(
                f"signature must be a base64 string, got {type(signature).__name__}"
            )

        device = self._load(device_id)
        algorithm = self._algorithm(device)
        key_pair = self._key_pair(algorithm, device)

        try:
            raw_signature = base64.b64decode(signature, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedSignatureError(f"signature is not valid base64: {e}") from e

        try:
            algorithm.verify(key_pair.public_key(), raw_data, raw_signature)
        except VerificationError as e:
            return VerificationResult(verified=False, reason=str(e))
        except CryptoError:
            raise
        except Exception as e:
            raise CryptoError(f"verification could not run: {e}") from e

        return VerificationResult(verified=True)

    def _load(self, device_id: str) -> Device:
        try:
            return self._store.load(device_id)
        except SigningServiceError:
            raise
        except Exception as e:
            logger.exception("loading device %s failed", device_id)
            raise PersistenceError(f"cannot load device {device_id}: {e}") from e

    def _save(self, device: Device) -> None:
        try:
            self._store.save(device.id, device)
        except PersistenceError:
            logger.exception("saving device %s failed", device.id)
            raise
        except Exception as e:
            logger.exception("saving device %s failed", device.id)
            raise PersistenceError(f"cannot save device {device.id}: {e}") from e

    def _algorithm(self, device: Device) -> IAlgorithm:
        algorithm = self._registry.resolve(device.algorithm)
        if algorithm is None:
            # The device was created with this scheme, so the registry and the
            # store disagree.
            logger.error(
                "data integrity fault: device %s references unregistered algorithm %r",
                device.id,
                device.algorithm,
            )
            raise AlgorithmUnavailableError(
                f"Algorithm {device.algorithm} of device {device.id} not available"
            )

        return algorithm

    def _key_pair(self, algorithm: IAlgorithm, device: Device) -> IKeyPair:
        try:
            return algorithm.construct_key_pair(device.private_key)
        except CryptoError:
            logger.exception("cannot reconstruct key pair of device %s", device.id)
            raise
        except Exception as e:
            logger.exception("cannot reconstruct key pair of device %s", device.id)
            raise CryptoError(f"cannot reconstruct key pair: {e}") from e
