"""Signature device model.

A device is one signing identity: one key pair under one algorithm and one
append-only chain of signatures. The chain state is the pair
(signature_counter, last_signature); both only ever move together, through
Device.advance().
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

CHAIN_SEPARATOR = b"_"


def seed_signature(device_id: str) -> str:
    """Return the predecessor value for a device's first signature.

    Args:
        device_id: The device id.

    Returns:
        The standard base64 encoding of the UTF-8 device id.
    """
    return base64.b64encode(device_id.encode("utf-8")).decode("ascii")


@dataclass(frozen=True)
class Device:
    """A registered signature device.

    Attributes:
        id: Unique, immutable device identifier.
        algorithm: Registry name of the device's algorithm.
        private_key: The private key in its text container form.
        label: Optional display name with no effect on signing.
        signature_counter: Number of signatures produced so far.
        last_signature: Base64 of the latest signature, or the seed value.
    """

    id: str
    algorithm: str
    private_key: bytes
    label: str = ""
    signature_counter: int = 0
    last_signature: str = ""

    @classmethod
    def create(
        cls,
        device_id: str,
        algorithm: str,
        private_key: bytes,
        label: Optional[str] = None,
    ) -> Device:
        """Create a device that has not signed anything yet."""
        return cls(
            id=device_id,
            algorithm=algorithm,
            private_key=private_key,
            label=label or "",
            signature_counter=0,
            last_signature=seed_signature(device_id),
        )

    def chain_payload(self, data: bytes) -> bytes:
        """Build the payload for the next signature in the chain.

        The payload binds the chain position, the new data and the preceding
        signature: "<counter>_<data>_<last_signature>".

        Args:
            data: The raw data to sign.

        Returns:
            The payload bytes.
        """
        return CHAIN_SEPARATOR.join(
            [
                str(self.signature_counter).encode("ascii"),
                data,
                self.last_signature.encode("ascii"),
            ]
        )

    def advance(self, signature: str) -> Device:
        """Return a copy of this device moved one step along its chain.

        The original is left untouched, so a failed save leaves no trace.

        Args:
            signature: Base64 of the signature just produced.

        Returns:
            The advanced device.
        """
        return replace(
            self,
            signature_counter=self.signature_counter + 1,
            last_signature=signature,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the public dictionary representation.

        Private key material is never included.

        Returns:
            Dictionary representation of the device.
        """
        return {
            "id": self.id,
            "algorithm": self.algorithm,
            "label": self.label,
            "signature_counter": self.signature_counter,
            "last_signature": self.last_signature,
        }
