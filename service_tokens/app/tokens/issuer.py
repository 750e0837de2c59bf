"""
Token issuing service.
"""

import time
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Optional

from shared.config import TokenSettings, get_config
from shared.logging import get_logger
from ..codec.claims import ClaimSet
from ..signing.signer import Key, check_key, resolve_algorithm
from .encoder import encode


class TokenIssuer:
    """Stamps registered claims onto a claim set and signs it."""

    def __init__(self, key: Key, config: Optional[TokenSettings] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.config = config or get_config()
        self.algorithm = resolve_algorithm(self.config.default_algorithm)
        # Fail at construction rather than on first issue.
        check_key(key, self.algorithm, self.config.min_key_length)
        self.key = key
        self.clock = clock or time.time
        self.logger = get_logger("tokens.issuer")

    def issue(self, claims: Optional[Mapping] = None, expires_in: Optional[int] = None,
              not_before: Optional[int] = None, subject: Optional[str] = None,
              token_id: Optional[str] = None, **extra: Any) -> str:
        """Issue a signed token.

        Args:
            claims: Application claims.
            expires_in: Lifetime in seconds; sets ``exp``.
            not_before: Delay in seconds before the token is valid; sets ``nbf``.
            subject: Value for ``sub``.
            token_id: Value for ``jti``; ``"auto"`` generates a UUID4.
            **extra: Additional claims merged over ``claims``.

        Returns:
            The encoded token.
        """
        now = int(self.clock())
        stamped = {"iat": now}

        if self.config.expected_issuer:
            stamped["iss"] = self.config.expected_issuer
        if self.config.expected_audience:
            stamped["aud"] = self.config.expected_audience
        if expires_in is not None:
            stamped["exp"] = now + expires_in
        if not_before is not None:
            stamped["nbf"] = now + not_before
        if subject is not None:
            stamped["sub"] = subject
        if token_id == "auto":
            stamped["jti"] = str(uuid.uuid4())
        elif token_id is not None:
            stamped["jti"] = token_id

        claim_set = ClaimSet(claims or {}).with_claims(**{**stamped, **extra})
        token = encode(claim_set, self.key, self.algorithm, self.config.min_key_length)

        self.logger.info(
            "Token issued",
            algorithm=self.algorithm.value,
            sub=claim_set.get("sub"),
            jti=claim_set.get("jti"),
            exp=claim_set.get("exp")
        )
        return token
