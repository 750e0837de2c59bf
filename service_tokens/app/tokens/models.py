"""
Token data models.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from shared.errors import JWTInvalid
from ..codec.claims import ClaimSet, canonical_json


@dataclass(frozen=True)
class Header:
    """Token header.

    ``alg`` is kept as the raw string read from the wire so a header naming
    an unknown algorithm can still be inspected.
    """
    alg: str
    typ: Optional[str] = "JWT"

    def to_json(self) -> bytes:
        fields: Dict[str, Any] = {"alg": self.alg}
        if self.typ is not None:
            fields["typ"] = self.typ
        return canonical_json(fields)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Header":
        alg = data.get("alg")
        if not isinstance(alg, str) or not alg:
            raise JWTInvalid("Token header has no algorithm")

        typ = data.get("typ")
        if typ is not None and not isinstance(typ, str):
            raise JWTInvalid("Token header type is not a string")

        return cls(alg=alg, typ=typ)


@dataclass(frozen=True)
class ParsedToken:
    """The four pieces recovered from a token string."""
    header: Header
    claims: ClaimSet
    signing_input: str
    signature: bytes


@dataclass(frozen=True)
class UnverifiedToken:
    """Header and claims read WITHOUT signature or claim validation.

    Never use these values for an authorization decision.
    """
    header: Header
    claims: ClaimSet
    verified: bool = False
