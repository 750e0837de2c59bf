"""
HMAC signing and signature verification.
"""

import hashlib
import hmac
from enum import Enum
from typing import Union

from shared.errors import KeyInvalid, UnsupportedAlgorithm
from shared.logging import get_logger

logger = get_logger("tokens.signer")

Key = Union[str, bytes]

DEFAULT_MIN_KEY_LENGTH = 8


class Algorithm(str, Enum):
    """Supported HMAC algorithm identifiers."""
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"


_DIGESTS = {
    Algorithm.HS256: hashlib.sha256,
    Algorithm.HS384: hashlib.sha384,
    Algorithm.HS512: hashlib.sha512,
}


def resolve_algorithm(algorithm: Union[Algorithm, str]) -> Algorithm:
    """Map an algorithm name onto `Algorithm`.

    Raises:
        UnsupportedAlgorithm: for any name without an implementation.
    """
    try:
        return Algorithm(algorithm)
    except ValueError:
        raise UnsupportedAlgorithm(
            f"Algorithm {algorithm!r} is not supported",
            details={"algorithm": str(algorithm), "supported": [a.value for a in Algorithm]}
        ) from None


def coerce_key(key: Key, min_key_length: int = DEFAULT_MIN_KEY_LENGTH) -> bytes:
    """Return the key as bytes, enforcing the minimum length."""
    if isinstance(key, str):
        key = key.encode("utf-8")
    elif not isinstance(key, (bytes, bytearray)):
        raise KeyInvalid(f"Key must be str or bytes, got {type(key).__name__}")

    key = bytes(key)
    if len(key) == 0 or len(key) < min_key_length:
        raise KeyInvalid(
            "Signing key is too short",
            details={"length": len(key), "min_length": max(min_key_length, 1)}
        )
    return key


def sign(algorithm: Union[Algorithm, str], key: Key, message: bytes,
         min_key_length: int = DEFAULT_MIN_KEY_LENGTH) -> bytes:
    """Compute the raw MAC of ``message`` under ``key``."""
    algorithm = resolve_algorithm(algorithm)
    key_bytes = coerce_key(key, min_key_length)
    return hmac.new(key_bytes, message, _DIGESTS[algorithm]).digest()


def check_key(key: Key, algorithm: Union[Algorithm, str],
              min_key_length: int = DEFAULT_MIN_KEY_LENGTH) -> bytes:
    """Validate a long-lived key once, warning if it is weaker than the digest.

    Raises:
        KeyInvalid: if the key is empty, too short or of the wrong type.
    """
    algorithm = resolve_algorithm(algorithm)
    key_bytes = coerce_key(key, min_key_length)
    digest_size = _DIGESTS[algorithm]().digest_size

    if len(key_bytes) < digest_size:
        logger.warning(
            "Signing key is shorter than the digest size",
            algorithm=algorithm.value,
            key_length=len(key_bytes),
            digest_size=digest_size
        )
    return key_bytes


def secure_compare(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time independent of where they differ."""
    if len(a) != len(b):
        return False

    result = 0
    for x, y in zip(a, b):
        result |= x ^ y

    return result == 0


def verify_signature(signing_input: str, key: Key, signature: bytes,
                     algorithm: Union[Algorithm, str] = Algorithm.HS256,
                     min_key_length: int = DEFAULT_MIN_KEY_LENGTH) -> bool:
    """Recompute the MAC over ``signing_input`` and compare it to ``signature``."""
    expected = sign(algorithm, key, signing_input.encode("utf-8"), min_key_length)
    return secure_compare(signature, expected)
