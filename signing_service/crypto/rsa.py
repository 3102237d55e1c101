"""RSA signature scheme.

This module provides the RSA key pair and algorithm implementations. Signing
uses PKCS#1 v1.5 padding over a SHA-256 digest of the payload, and keys are
stored as PKCS#1 DER inside RSA_PRIVATE_KEY / RSA_PUBLIC_KEY containers.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from signing_service.exceptions import (
    CryptoError,
    InvalidKeyEncodingError,
    KeyTypeError,
    MalformedKeyEncodingError,
    VerificationError,
)
from signing_service.interfaces.crypto import IAlgorithm, IKeyPair, Key

from . import pem

RSA_PRIVATE_KEY_LABEL = "RSA_PRIVATE_KEY"
RSA_PUBLIC_KEY_LABEL = "RSA_PUBLIC_KEY"

# Demonstration-sized modulus; the cryptography library refuses anything
# smaller than 1024 bits.
DEFAULT_KEY_SIZE = 1024
PUBLIC_EXPONENT = 65537


class RSAKeyPair(IKeyPair):
    """RSA key pair.

    Holds an RSA private key and the public key derived from it.
    """

    def __init__(self, private: rsa.RSAPrivateKey) -> None:
        """Initialize the key pair.

        Args:
            private: The RSA private key.
        """
        self._private = private
        self._public = private.public_key()

    def public_key(self) -> rsa.RSAPublicKey:
        """Return the RSA public key."""
        return self._public

    def private_key(self) -> rsa.RSAPrivateKey:
        """Return the RSA private key."""
        return self._private

    def serialize(self) -> tuple[bytes, bytes]:
        """Encode both keys as PKCS#1 DER in labeled text containers.

        Returns:
            A tuple of (public_key_pem, private_key_pem).
        """
        private_der = self._private.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public_der = self._public.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.PKCS1,
        )

        return (
            pem.encode(RSA_PUBLIC_KEY_LABEL, public_der),
            pem.encode(RSA_PRIVATE_KEY_LABEL, private_der),
        )

    @classmethod
    def deserialize(cls, private_key: bytes) -> RSAKeyPair:
        """Rebuild a key pair from an encoded private key.

        Args:
            private_key: The private key container produced by serialize().

        Returns:
            The reconstructed key pair.

        Raises:
            InvalidKeyEncodingError: If the input holds no key container.
            MalformedKeyEncodingError: If the container is not a PKCS#1 RSA key.
        """
        block = pem.decode(private_key)
        if block is None:
            raise InvalidKeyEncodingError("Given private key is not a valid PEM encoded key")

        _, der = block
        try:
            key = serialization.load_der_private_key(der, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise MalformedKeyEncodingError(f"unparsable RSA private key: {e}") from e

        if not isinstance(key, rsa.RSAPrivateKey):
            raise MalformedKeyEncodingError("encoded key is not a RSA private key")

        return cls(key)


class RSAAlgorithm(IAlgorithm):
    """RSA PKCS#1 v1.5 / SHA-256 signature algorithm."""

    def __init__(self, key_size: int = DEFAULT_KEY_SIZE) -> None:
        """Initialize the algorithm.

        Args:
            key_size: Modulus size in bits for generated keys.
        """
        self.key_size = key_size

    def generate_key_pair(self) -> RSAKeyPair:
        """Generate a new RSA key pair.

        Raises:
            CryptoError: If key generation fails.
        """
        try:
            private = rsa.generate_private_key(
                public_exponent=PUBLIC_EXPONENT,
                key_size=self.key_size,
                backend=default_backend(),
            )
        except ValueError as e:
            raise CryptoError(f"RSA key generation failed: {e}") from e

        return RSAKeyPair(private)

    def construct_key_pair(self, private_key: bytes) -> RSAKeyPair:
        return RSAKeyPair.deserialize(private_key)

    def sign(self, private_key: Key, data: bytes) -> bytes:
        """Sign data with PKCS#1 v1.5 padding over its SHA-256 digest.

        Args:
            private_key: An RSA private key.
            data: The payload to sign.

        Returns:
            The raw signature bytes.

        Raises:
            KeyTypeError: If private_key is not an RSA private key.
            CryptoError: If signing fails.
        """
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise KeyTypeError("Given private key is not a RSA private key")

        try:
            return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
        except ValueError as e:
            raise CryptoError(f"RSA signing failed: {e}") from e

    def verify(self, public_key: Key, data: bytes, signature: bytes) -> None:
        """Verify a PKCS#1 v1.5 / SHA-256 signature.

        Args:
            public_key: An RSA public key.
            data: The payload that was signed.
            signature: The raw signature bytes.

        Raises:
            KeyTypeError: If public_key is not an RSA public key.
            VerificationError: When the signature does not match.
        """
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise KeyTypeError("Given public key is not a RSA public key")

        try:
            public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature as e:
            raise VerificationError("Verification failed") from e
