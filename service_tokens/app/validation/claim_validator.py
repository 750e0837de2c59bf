"""
Claim validation chain.

Each check receives the decoded claims, the caller's options and the
current time, and raises the error kind it owns. `validate_claims` runs the
checks in a fixed order and stops at the first failure.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from pydantic import BaseModel, ConfigDict, Field

from shared.errors import (
    AudienceInvalid, ClaimInvalid, ExpirationInvalid, IssuedAtInvalid, IssuerInvalid,
    NotBeforeInvalid, SignatureExpired, SubjectInvalid, TokenError, TokenIdInvalid,
    TokenNotYetValid,
)
from ..codec.claims import ClaimSet

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class ValidationOptions(BaseModel):
    """Which checks run, and the values they expect."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    verify_signature: bool = True
    check_expiration: bool = True
    check_not_before: bool = True
    check_issued_at: bool = False
    expected_issuer: Optional[str] = None
    expected_audience: Optional[str] = None
    expected_subject: Optional[str] = None
    expected_token_id: Optional[str] = None
    expected_claims: Dict[str, Any] = Field(default_factory=dict)
    require: List[str] = Field(default_factory=list, description="Claims that must be present")
    leeway: int = Field(default=0, ge=0, description="Clock skew tolerance in seconds")


def parse_timestamp(value: Any, name: str, error: Type[TokenError]) -> int:
    """Read an epoch-seconds claim carried as an int, integral float or numeric string."""
    if isinstance(value, bool):
        raise error(f"Claim {name!r} is not an integer timestamp", details={"claim": name})
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise error(f"Claim {name!r} is not an integer timestamp", details={"claim": name})


def _require(claims: ClaimSet, name: str, options: ValidationOptions, error: Type[TokenError]) -> None:
    if name in options.require and name not in claims:
        raise error(f"Missing required claim {name!r}", details={"claim": name})


def _expect(claims: ClaimSet, name: str, expected: Any, error: Type[TokenError]) -> None:
    if name not in claims:
        raise error(f"Missing claim {name!r}", details={"claim": name})
    if claims[name] != expected:
        raise error(f"Claim {name!r} does not match", details={"claim": name})


def check_issuer(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    _require(claims, "iss", options, IssuerInvalid)
    if options.expected_issuer is not None:
        _expect(claims, "iss", options.expected_issuer, IssuerInvalid)


def check_expiration(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    _require(claims, "exp", options, ExpirationInvalid)
    if not options.check_expiration or "exp" not in claims:
        return

    exp = parse_timestamp(claims["exp"], "exp", ExpirationInvalid)
    if exp <= now - options.leeway:
        raise SignatureExpired(details={"exp": exp})


def check_audience(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    _require(claims, "aud", options, AudienceInvalid)
    if options.expected_audience is None:
        return

    if "aud" not in claims:
        raise AudienceInvalid("Missing claim 'aud'", details={"claim": "aud"})

    aud = claims["aud"]
    audiences = aud if isinstance(aud, list) else [aud]
    if options.expected_audience not in audiences:
        raise AudienceInvalid("Claim 'aud' does not match", details={"claim": "aud"})


def check_not_before(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    _require(claims, "nbf", options, NotBeforeInvalid)
    if not options.check_not_before or "nbf" not in claims:
        return

    nbf = parse_timestamp(claims["nbf"], "nbf", NotBeforeInvalid)
    if nbf > now + options.leeway:
        raise TokenNotYetValid(details={"nbf": nbf})


def check_issued_at(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    _require(claims, "iat", options, IssuedAtInvalid)
    if not options.check_issued_at or "iat" not in claims:
        return

    iat = parse_timestamp(claims["iat"], "iat", IssuedAtInvalid)
    if iat > now + options.leeway:
        raise IssuedAtInvalid("Token was issued in the future", details={"iat": iat})


def check_subject(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    _require(claims, "sub", options, SubjectInvalid)
    if options.expected_subject is not None:
        _expect(claims, "sub", options.expected_subject, SubjectInvalid)


def check_token_id(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    _require(claims, "jti", options, TokenIdInvalid)
    if options.expected_token_id is not None:
        _expect(claims, "jti", options.expected_token_id, TokenIdInvalid)


REGISTERED_CLAIMS = ("iss", "exp", "aud", "nbf", "iat", "sub", "jti")


def check_generic(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    for name in options.require:
        if name not in REGISTERED_CLAIMS:
            _require(claims, name, options, ClaimInvalid)

    for name, expected in options.expected_claims.items():
        _expect(claims, name, expected, ClaimInvalid)


ClaimCheck = Callable[[ClaimSet, ValidationOptions, float], None]

CLAIM_CHECKS: Sequence[ClaimCheck] = (
    check_issuer,
    check_expiration,
    check_audience,
    check_not_before,
    check_issued_at,
    check_subject,
    check_token_id,
    check_generic,
)


def validate_claims(claims: ClaimSet, options: ValidationOptions, now: float) -> None:
    """Run every claim check in order; the first failure propagates."""
    for check in CLAIM_CHECKS:
        check(claims, options, now)
