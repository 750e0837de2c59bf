"""
Token validation service.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple, Union

from pydantic import BaseModel

from shared.config import TokenSettings, get_config
from shared.errors import ErrorResponse, JWTInvalid, SignatureInvalid, TokenError
from shared.logging import get_logger, set_subject
from ..codec.claims import ClaimSet
from ..signing import signer
from ..signing.signer import Algorithm, DEFAULT_MIN_KEY_LENGTH, Key, resolve_algorithm
from ..tokens.decoder import parse
from ..tokens.models import Header
from .claim_validator import ValidationOptions, validate_claims

logger = get_logger("tokens.validator")

Clock = Callable[[], float]


def decode(token: str, key: Key, verify_signature: bool = True, check_expiration: bool = True,
           expected_issuer: Optional[str] = None, expected_audience: Optional[str] = None, *,
           algorithm: Union[Algorithm, str] = Algorithm.HS256,
           options: Optional[ValidationOptions] = None,
           clock: Optional[Clock] = None,
           check_not_before: bool = False,
           min_key_length: int = DEFAULT_MIN_KEY_LENGTH) -> Tuple[Header, ClaimSet]:
    """Decode a token, verify its signature and validate its claims.

    ``options``, when given, replaces the keyword flags entirely. Without it
    only the checks named by the arguments run; ``nbf`` and ``iat`` are
    enforced only on request. Nothing is returned unless every enabled step
    passes.

    Raises:
        TokenError: the first failing step's error kind.
    """
    if options is None:
        options = ValidationOptions(
            verify_signature=verify_signature,
            check_expiration=check_expiration,
            check_not_before=check_not_before,
            expected_issuer=expected_issuer,
            expected_audience=expected_audience,
        )
    algorithm = resolve_algorithm(algorithm)

    try:
        parsed = parse(token, decode_signature=options.verify_signature)

        if not parsed.signing_input.strip():
            raise JWTInvalid("Token signing input is empty")

        if options.verify_signature:
            if parsed.header.alg != algorithm.value:
                raise SignatureInvalid(
                    "Token algorithm does not match the expected algorithm",
                    details={"alg": parsed.header.alg, "expected": algorithm.value}
                )
            if not signer.verify_signature(parsed.signing_input, key, parsed.signature,
                                           algorithm, min_key_length):
                raise SignatureInvalid()
        else:
            logger.warning("Token signature not verified", alg=parsed.header.alg)

        now = (clock or time.time)()
        validate_claims(parsed.claims, options, now)

    except TokenError as e:
        logger.warning("Token validation failed", code=e.code, error=e.message)
        raise

    logger.debug("Token validated", alg=parsed.header.alg, claims=len(parsed.claims))
    return parsed.header, parsed.claims


class TokenValidationResult(BaseModel):
    """Outcome of validating a token."""
    valid: bool
    header: Optional[Dict[str, Any]] = None
    claims: Optional[Dict[str, Any]] = None
    error: Optional[ErrorResponse] = None


class TokenValidator:
    """Validates tokens against a shared key and configured expectations."""

    def __init__(self, key: Key, config: Optional[TokenSettings] = None,
                 clock: Optional[Clock] = None, **overrides: Any):
        self.config = config or get_config()
        self.key = key
        self.clock = clock or time.time
        self.algorithm = resolve_algorithm(self.config.default_algorithm)
        signer.check_key(key, self.algorithm, self.config.min_key_length)
        defaults = dict(
            verify_signature=self.config.verify_signature,
            check_expiration=self.config.check_expiration,
            check_not_before=self.config.check_not_before,
            check_issued_at=self.config.check_issued_at,
            expected_issuer=self.config.expected_issuer,
            expected_audience=self.config.expected_audience,
            leeway=self.config.leeway_seconds,
        )
        self.options = ValidationOptions(**{**defaults, **overrides})

    def decode(self, token: str) -> Tuple[Header, ClaimSet]:
        """Validate a token, raising the first failing check's error."""
        if isinstance(token, str) and token.startswith("Bearer "):
            token = token[7:]

        return decode(
            token,
            self.key,
            algorithm=self.algorithm,
            options=self.options,
            clock=self.clock,
            min_key_length=self.config.min_key_length,
        )

    def validate(self, token: str) -> TokenValidationResult:
        """Validate a token and report the outcome as data."""
        try:
            header, claims = self.decode(token)
        except TokenError as e:
            set_subject(None)
            return TokenValidationResult(valid=False, error=e.to_response())

        # Cleared when the token carries no string subject.
        sub = claims.get("sub")
        set_subject(sub if isinstance(sub, str) else None)

        return TokenValidationResult(
            valid=True,
            header={"alg": header.alg, "typ": header.typ},
            claims=claims.to_dict()
        )
