"""
Token service package.

Issues and verifies compact HMAC-signed tokens
(``b64url(header).b64url(claims).b64url(signature)``):

- app.codec: Base64url framing and the canonical, sorted claim set.
- app.signing: HS256/HS384/HS512 signing and constant-time comparison.
- app.tokens: Encoder, segment parser and the configured issuer.
- app.validation: The decode pipeline and ordered claim checks.

Design notes:
- Everything here is a pure function of its inputs plus an injectable
  clock; there is no shared mutable state and no IO.
- Reading a token without verification is a separate, explicitly named
  operation (`inspect_unverified`) returning a distinct type.
- Use the shared/ utilities for logging, config and errors.
"""

from .codec.claims import ClaimSet
from .signing.signer import Algorithm, secure_compare, sign
from .tokens.decoder import inspect_unverified, parse
from .tokens.encoder import encode
from .tokens.issuer import TokenIssuer
from .tokens.models import Header, ParsedToken, UnverifiedToken
from .validation.claim_validator import ValidationOptions
from .validation.token_validator import TokenValidationResult, TokenValidator, decode

__all__ = [
    "Algorithm",
    "ClaimSet",
    "Header",
    "ParsedToken",
    "TokenIssuer",
    "TokenValidationResult",
    "TokenValidator",
    "UnverifiedToken",
    "ValidationOptions",
    "decode",
    "encode",
    "inspect_unverified",
    "parse",
    "secure_compare",
    "sign",
]
