"""Signing service crypto package.

This package provides the shipped signature schemes, the text container used
to persist their keys, and the registry that maps names to schemes.
"""

from .ecc import ECC_PRIVATE_KEY_LABEL, ECC_PUBLIC_KEY_LABEL, ECCAlgorithm, ECCKeyPair
from .registry import ECC_ALGORITHM_NAME, RSA_ALGORITHM_NAME, AlgorithmRegistry
from .rsa import RSA_PRIVATE_KEY_LABEL, RSA_PUBLIC_KEY_LABEL, RSAAlgorithm, RSAKeyPair

__all__ = [
    "AlgorithmRegistry",
    "ECCAlgorithm",
    "ECCKeyPair",
    "RSAAlgorithm",
    "RSAKeyPair",
    "ECC_ALGORITHM_NAME",
    "RSA_ALGORITHM_NAME",
    "ECC_PRIVATE_KEY_LABEL",
    "ECC_PUBLIC_KEY_LABEL",
    "RSA_PRIVATE_KEY_LABEL",
    "RSA_PUBLIC_KEY_LABEL",
]
