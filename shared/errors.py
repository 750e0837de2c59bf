"""
Shared error handling for the token service.

Every failure the codec or the validation chain can report is a subclass of
`TokenError`. Each subclass carries a stable machine-readable ``code`` so
callers can branch on the kind of failure without matching messages.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class TokenError(Exception):
    """Base exception for token encoding, decoding and validation."""

    code = "TOKEN_ERROR"
    default_message = "Token error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class JWTInvalid(TokenError):
    """Malformed token: bad framing, base64, JSON or empty signing input."""

    code = "JWT_INVALID"
    default_message = "Token is malformed"


class SignatureInvalid(TokenError):
    """Signature does not match the recomputed MAC."""

    code = "SIGNATURE_INVALID"
    default_message = "Token signature is invalid"


class SignatureExpired(TokenError):
    """The ``exp`` claim is not in the future."""

    code = "SIGNATURE_EXPIRED"
    default_message = "Token has expired"


class ExpirationInvalid(TokenError):
    """The ``exp`` claim is missing when required or is not an integer timestamp."""

    code = "EXPIRATION_INVALID"
    default_message = "Token expiration claim is invalid"


class IssuerInvalid(TokenError):
    code = "ISSUER_INVALID"
    default_message = "Token issuer is invalid"


class AudienceInvalid(TokenError):
    code = "AUDIENCE_INVALID"
    default_message = "Token audience is invalid"


class NotBeforeInvalid(TokenError):
    """The ``nbf`` claim is missing when required or is not an integer timestamp."""

    code = "NOT_BEFORE_INVALID"
    default_message = "Token not-before claim is invalid"


class TokenNotYetValid(TokenError):
    """The ``nbf`` claim lies in the future."""

    code = "TOKEN_NOT_YET_VALID"
    default_message = "Token is not yet valid"


class IssuedAtInvalid(TokenError):
    code = "ISSUED_AT_INVALID"
    default_message = "Token issued-at claim is invalid"


class SubjectInvalid(TokenError):
    code = "SUBJECT_INVALID"
    default_message = "Token subject is invalid"


class TokenIdInvalid(TokenError):
    code = "TOKEN_ID_INVALID"
    default_message = "Token id is invalid"


class ClaimInvalid(TokenError):
    """A caller-named claim is missing or does not hold the expected value."""

    code = "CLAIM_INVALID"
    default_message = "Token claim is invalid"


class UnsupportedAlgorithm(TokenError):
    code = "UNSUPPORTED_ALGORITHM"
    default_message = "Signing algorithm is not supported"


class KeyInvalid(TokenError):
    """Signing key is empty or shorter than the configured minimum."""

    code = "KEY_INVALID"
    default_message = "Signing key is invalid"
