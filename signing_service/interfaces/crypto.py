"""Cryptographic interfaces for the signing service.

This module defines protocols for asymmetric key pairs and for the algorithms
that generate, reconstruct, sign with and verify against them.
"""

from __future__ import annotations

from typing import Any, Protocol

# Keys of different schemes share no common type; algorithms check the
# concrete kind themselves.
Key = Any


class IKeyPair(Protocol):
    """Interface for an asymmetric key pair."""

    def public_key(self) -> Key:
        """Fetch the public half of the pair.

        Returns:
            The scheme-specific public key object.
        """
        ...

    def private_key(self) -> Key:
        """Fetch the private half of the pair.

        Returns:
            The scheme-specific private key object.
        """
        ...

    def serialize(self) -> tuple[bytes, bytes]:
        """Encode both keys in their durable text container form.

        Returns:
            A tuple of (public_key_pem, private_key_pem).
        """
        ...

    @classmethod
    def deserialize(cls, private_key: bytes) -> IKeyPair:
        """Rebuild a key pair from the private key produced by serialize().

        Args:
            private_key: The private key in its text container form.

        Returns:
            The reconstructed key pair.

        Raises:
            InvalidKeyEncodingError: If the input is not an encoded key.
            MalformedKeyEncodingError: If the container content is unparsable.
        """
        ...


class IAlgorithm(Protocol):
    """Interface for a pluggable asymmetric signature scheme."""

    def generate_key_pair(self) -> IKeyPair:
        """Generate a fresh, random key pair.

        Returns:
            The new key pair.

        Raises:
            CryptoError: If key generation fails.
        """
        ...

    def construct_key_pair(self, private_key: bytes) -> IKeyPair:
        """Rebuild a key pair from its encoded private key.

        Implementations delegate to their key pair's deserialize().

        Args:
            private_key: The private key in its text container form.

        Returns:
            The reconstructed key pair.

        Raises:
            InvalidKeyEncodingError: If the input is not an encoded key.
            MalformedKeyEncodingError: If the container content is unparsable.
        """
        ...

    def sign(self, private_key: Key, data: bytes) -> bytes:
        """Sign a payload.

        Args:
            private_key: The private key to sign with.
            data: The payload to sign.

        Returns:
            The raw signature bytes.

        Raises:
            KeyTypeError: If the key does not belong to this scheme.
            CryptoError: If signing fails.
        """
        ...

    def verify(self, public_key: Key, data: bytes, signature: bytes) -> None:
        """Verify a signature over a payload.

        Args:
            public_key: The public key to verify with.
            data: The payload that was signed.
            signature: The raw signature bytes.

        Raises:
            KeyTypeError: If the key does not belong to this scheme.
            VerificationError: When the signature does not match.
        """
        ...
