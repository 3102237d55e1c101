"""Signing service API package.

This package provides the signature service and its configuration types.
"""

from signing_service.api.service import (
    CryptoConfig,
    SignatureResult,
    SignatureService,
    SignatureServiceConfig,
    StoreConfig,
    VerificationResult,
)

__all__ = [
    # Service
    "SignatureService",
    # Results
    "SignatureResult",
    "VerificationResult",
    # Configuration types
    "SignatureServiceConfig",
    "CryptoConfig",
    "StoreConfig",
]
