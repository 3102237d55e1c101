"""ECDSA P-384 signature scheme.

This module provides the elliptic curve key pair and algorithm
implementations. Signatures are ASN.1 DER encoded ECDSA over a SHA-256
digest. Private keys are stored as SEC1 DER under the PRIVATE KEY label and
public keys as PKIX DER under the PUBLIC KEY label.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from signing_service.exceptions import (
    CryptoError,
    InvalidKeyEncodingError,
    KeyTypeError,
    MalformedKeyEncodingError,
    VerificationError,
)
from signing_service.interfaces.crypto import IAlgorithm, IKeyPair, Key

from . import pem

ECC_PRIVATE_KEY_LABEL = "PRIVATE KEY"
ECC_PUBLIC_KEY_LABEL = "PUBLIC KEY"

CURVE = ec.SECP384R1


class ECCKeyPair(IKeyPair):
    """ECDSA P-384 key pair."""

    def __init__(self, private: ec.EllipticCurvePrivateKey) -> None:
        self._private = private
        self._public = private.public_key()

    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._public

    def private_key(self) -> ec.EllipticCurvePrivateKey:
        return self._private

    def serialize(self) -> tuple[bytes, bytes]:
        """Encode the keys as SEC1 (private) and PKIX (public) containers.

        Returns:
            A tuple of (public_key_pem, private_key_pem).
        """
        # TraditionalOpenSSL is SEC1 for EC keys.
        private_der = self._private.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public_der = self._public.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

        return (
            pem.encode(ECC_PUBLIC_KEY_LABEL, public_der),
            pem.encode(ECC_PRIVATE_KEY_LABEL, private_der),
        )

    @classmethod
    def deserialize(cls, private_key: bytes) -> ECCKeyPair:
        """Rebuild a key pair from an encoded private key.

        Args:
            private_key: The private key container produced by serialize().

        Returns:
            The reconstructed key pair.

        Raises:
            InvalidKeyEncodingError: If the input holds no key container.
            MalformedKeyEncodingError: If the container is not a SEC1 EC key.
        """
        block = pem.decode(private_key)
        if block is None:
            raise InvalidKeyEncodingError("Given private key is not a valid PEM encoded key")

        _, der = block
        try:
            key = serialization.load_der_private_key(der, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise MalformedKeyEncodingError(f"unparsable ECC private key: {e}") from e

        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise MalformedKeyEncodingError("encoded key is not an ECC private key")

        return cls(key)


class ECCAlgorithm(IAlgorithm):
    """ECDSA P-384 / SHA-256 signature algorithm."""

    def generate_key_pair(self) -> ECCKeyPair:
        """Generate a new P-384 key pair.

        Raises:
            CryptoError: If key generation fails.
        """
        try:
            private = ec.generate_private_key(CURVE(), default_backend())
        except (ValueError, UnsupportedAlgorithm) as e:
            raise CryptoError(f"ECC key generation failed: {e}") from e

        return ECCKeyPair(private)

    def construct_key_pair(self, private_key: bytes) -> ECCKeyPair:
        return ECCKeyPair.deserialize(private_key)

    def sign(self, private_key: Key, data: bytes) -> bytes:
        """Sign data with ECDSA over its SHA-256 digest.

        The nonce is random, so two signatures over the same data differ.

        Args:
            private_key: An EC private key.
            data: The payload to sign.

        Returns:
            The ASN.1 DER encoded signature.

        Raises:
            KeyTypeError: If private_key is not an EC private key.
            CryptoError: If signing fails.
        """
        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise KeyTypeError("Given private key is not an ECC private key")

        try:
            return private_key.sign(data, ec.ECDSA(hashes.SHA256()))
        except (ValueError, UnsupportedAlgorithm) as e:
            raise CryptoError(f"ECC signing failed: {e}") from e

    def verify(self, public_key: Key, data: bytes, signature: bytes) -> None:
        """Verify an ASN.1 DER ECDSA signature.

        Args:
            public_key: An EC public key.
            data: The payload that was signed.
            signature: The DER encoded signature.

        Raises:
            KeyTypeError: If public_key is not an EC public key.
            VerificationError: When the signature does not match.
        """
        if not isinstance(public_key, ec.EllipticCurvePublicKey):
            raise KeyTypeError("Given public key is not a ECC public key")

        try:
            public_key.verify(signature, data, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature as e:
            raise VerificationError("Verification failed") from e
