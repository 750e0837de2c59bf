"""
Token encoder.
"""

from collections.abc import Mapping
from typing import Union

from shared.logging import get_logger
from ..codec.base64url import b64url_encode
from ..codec.claims import ClaimSet
from ..signing.signer import Algorithm, DEFAULT_MIN_KEY_LENGTH, Key, resolve_algorithm, sign
from .models import Header

logger = get_logger("tokens.encoder")


def signing_input_for(header: Header, claims: ClaimSet) -> str:
    """Build ``b64url(header_json) + "." + b64url(claims_json)``."""
    return f"{b64url_encode(header.to_json())}.{b64url_encode(claims.to_json())}"


def encode(claims: Mapping, key: Key, algorithm: Union[Algorithm, str] = Algorithm.HS256,
           min_key_length: int = DEFAULT_MIN_KEY_LENGTH) -> str:
    """Encode and sign ``claims`` into a compact token string.

    Args:
        claims: Claim names mapped to JSON values. A plain mapping is
            copied into a `ClaimSet`; the caller keeps ownership of it.
        key: Shared HMAC secret, ``str`` (UTF-8 encoded) or ``bytes``.
        algorithm: One of HS256, HS384, HS512.
        min_key_length: Minimum accepted key length in bytes.

    Returns:
        ``signing_input + "." + b64url(signature)``

    Raises:
        UnsupportedAlgorithm: if ``algorithm`` has no implementation.
        KeyInvalid: if the key is empty or too short.
    """
    algorithm = resolve_algorithm(algorithm)
    claim_set = claims if isinstance(claims, ClaimSet) else ClaimSet(claims)

    header = Header(alg=algorithm.value, typ="JWT")
    signing_input = signing_input_for(header, claim_set)
    signature = sign(algorithm, key, signing_input.encode("utf-8"), min_key_length)

    logger.debug("Token encoded", algorithm=algorithm.value, claims=len(claim_set))
    return f"{signing_input}.{b64url_encode(signature)}"
