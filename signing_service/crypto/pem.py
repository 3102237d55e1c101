"""PEM-style text containers for encoded keys.

Persisted device records carry their keys in labeled text blocks whose labels
are not all standard (RSA keys use ``RSA_PRIVATE_KEY``/``RSA_PUBLIC_KEY``, and
EC private keys hold SEC1 content under ``PRIVATE KEY``), so the container is
handled here rather than through the cryptography PEM loaders, which insist on
the OpenSSL label for each format.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

_LINE_LENGTH = 64

_BLOCK_RE = re.compile(
    rb"-----BEGIN ([^\r\n-]+)-----\r?\n(.*?)-----END \1-----",
    re.DOTALL,
)


def encode(label: str, der: bytes) -> bytes:
    """Wrap binary key material in a labeled text block.

    Args:
        label: The content type label, e.g. "RSA_PRIVATE_KEY".
        der: The binary key encoding.

    Returns:
        The text block, terminated by a newline.
    """
    body = base64.b64encode(der).decode("ascii")
    lines = [body[i : i + _LINE_LENGTH] for i in range(0, len(body), _LINE_LENGTH)]

    block = [f"-----BEGIN {label}-----", *lines, f"-----END {label}-----", ""]
    return "\n".join(block).encode("ascii")


def decode(data: bytes) -> Optional[tuple[str, bytes]]:
    """Extract the first labeled block from data.

    Args:
        data: Bytes that may contain a text block.

    Returns:
        A tuple of (label, binary content), or None if data holds no
        well-formed block.
    """
    match = _BLOCK_RE.search(data)
    if match is None:
        return None

    body = b"".join(match.group(2).split())
    try:
        der = base64.b64decode(body, validate=True)
    except binascii.Error:
        return None

    return (match.group(1).decode("ascii"), der)
