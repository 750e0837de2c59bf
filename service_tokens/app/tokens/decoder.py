"""
Token segment parser.
"""

from shared.errors import JWTInvalid
from shared.logging import get_logger
from ..codec.base64url import b64url_decode
from ..codec.claims import ClaimSet, parse_json_object
from .models import Header, ParsedToken, UnverifiedToken

logger = get_logger("tokens.decoder")


def parse(token: str, decode_signature: bool = True) -> ParsedToken:
    """Split a token into header, claims, signing input and signature.

    The signing input is rebuilt from the two original segments, never
    from re-serialized JSON. With ``decode_signature=False`` the third
    segment is left undecoded and ``signature`` is empty.

    Raises:
        JWTInvalid: on anything other than three non-empty segments, or
            segments that are not base64url-encoded JSON objects.
    """
    if not isinstance(token, str):
        raise JWTInvalid(f"Token must be a string, got {type(token).__name__}")

    segments = token.split(".")
    if len(segments) != 3 or not all(segments):
        raise JWTInvalid(
            "Token must have exactly three non-empty segments",
            details={"segments": len(segments)}
        )

    header_segment, claims_segment, signature_segment = segments

    header = Header.from_dict(parse_json_object(b64url_decode(header_segment), "header"))
    claims = ClaimSet.from_json(b64url_decode(claims_segment))
    signature = b64url_decode(signature_segment) if decode_signature else b""

    return ParsedToken(
        header=header,
        claims=claims,
        signing_input=f"{header_segment}.{claims_segment}",
        signature=signature
    )


def inspect_unverified(token: str) -> UnverifiedToken:
    """Read header and claims without verifying anything.

    For display and debugging only: the result is not trustworthy.
    """
    parsed = parse(token, decode_signature=False)
    logger.warning("Token read without verification", alg=parsed.header.alg)
    return UnverifiedToken(header=parsed.header, claims=parsed.claims)
