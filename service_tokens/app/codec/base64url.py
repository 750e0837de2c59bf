"""
Unpadded URL-safe base64 used for every token segment.
"""

import base64
import binascii
import re

from shared.errors import JWTInvalid

_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """Decode URL-safe base64, with or without padding.

    Raises:
        JWTInvalid: if the input holds characters outside the URL-safe
            alphabet, has an impossible length, or sets the unused bits of
            its last character.
    """
    if not _SEGMENT_RE.fullmatch(data):
        raise JWTInvalid("Segment is not URL-safe base64")

    stripped = data.rstrip("=")
    if len(stripped) % 4 == 1:
        raise JWTInvalid("Segment has an invalid base64 length")

    try:
        decoded = base64.urlsafe_b64decode(stripped + "=" * (-len(stripped) % 4))
    except (binascii.Error, ValueError) as e:
        raise JWTInvalid("Segment is not URL-safe base64", details={"error": str(e)}) from e

    # Each byte string has exactly one unpadded encoding.
    if b64url_encode(decoded) != stripped:
        raise JWTInvalid("Segment has non-canonical trailing bits")
    return decoded
