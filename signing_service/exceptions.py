"""Exception classes for the signing service.

This module defines the exception types raised by the algorithms, the device
stores and the signature service. Everything derives from SigningServiceError
so transport layers can map the whole family in one place.
"""


class SigningServiceError(Exception):
    """Base exception class for all signing service errors."""

    pass


class InvalidRequestError(SigningServiceError):
    """Exception raised when a caller supplies missing or malformed arguments."""

    pass


class DeviceNotFoundError(SigningServiceError):
    """Exception raised when no device exists with the requested id."""

    pass


class DeviceExistsError(SigningServiceError):
    """Exception raised when registering a device id that is already taken."""

    pass


class AlgorithmUnavailableError(SigningServiceError):
    """Exception raised when an algorithm name does not resolve in the registry.

    For an already registered device this is an internal-consistency fault:
    the device references a scheme that is no longer available.
    """

    pass


class CryptoError(SigningServiceError):
    """Exception raised for key generation, reconstruction or signing failures."""

    pass


class KeyTypeError(CryptoError):
    """Exception raised when a key of the wrong concrete kind is supplied."""

    pass


class InvalidKeyEncodingError(CryptoError):
    """Exception raised when data is not an encoded key container at all."""

    pass


class MalformedKeyEncodingError(CryptoError):
    """Exception raised when a key container is valid but its content is not."""

    pass


class VerificationError(SigningServiceError):
    """Exception raised by an algorithm when a signature does not match."""

    pass


class MalformedSignatureError(SigningServiceError):
    """Exception raised when a candidate signature cannot be decoded."""

    pass


class PersistenceError(SigningServiceError):
    """Exception raised when the device store rejects a write."""

    pass
