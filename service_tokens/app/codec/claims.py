"""
Canonical claim set.

A ClaimSet is an immutable mapping of claim name to JSON value whose
iteration and serialization order is lexicographic, so encoding the same
claims always produces the same bytes.
"""

import json
import math
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from shared.errors import JWTInvalid

ClaimValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]


def canonical_json(value: Any) -> bytes:
    """Serialize a JSON value with sorted keys and compact separators."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), allow_nan=False).encode("utf-8")


def _normalize(value: Any, path: str) -> ClaimValue:
    """Return a detached copy of ``value``, rejecting anything JSON cannot carry."""
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Claim {path!r} holds a non-finite number")
        return value
    if isinstance(value, (list, tuple)):
        return [_normalize(item, f"{path}[{index}]") for index, item in enumerate(value)]
    if isinstance(value, Mapping):
        normalized = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Claim {path!r} has a non-string key {key!r}")
            normalized[key] = _normalize(item, f"{path}.{key}")
        return normalized
    raise TypeError(f"Claim {path!r} has unsupported type {type(value).__name__}")


def _reject_duplicates(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"Duplicate claim name {key!r}")
        obj[key] = value
    return obj


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")


def parse_json_object(raw: bytes, what: str) -> Dict[str, Any]:
    """Parse a decoded segment into a JSON object.

    Raises:
        JWTInvalid: on invalid UTF-8, invalid JSON, duplicate names or a
            top-level value that is not an object.
    """
    try:
        value = json.loads(
            raw.decode("utf-8"),
            object_pairs_hook=_reject_duplicates,
            parse_constant=_reject_constant,
        )
    except (UnicodeDecodeError, ValueError) as e:
        raise JWTInvalid(f"Token {what} is not valid JSON", details={"error": str(e)}) from e

    if not isinstance(value, dict):
        raise JWTInvalid(f"Token {what} is not a JSON object")
    return value


class ClaimSet(Mapping):
    """Immutable, lexicographically ordered claim mapping."""

    __slots__ = ("_claims",)

    def __init__(self, claims: Optional[Mapping] = None, /, **kwargs: Any):
        merged = dict(claims or {})
        merged.update(kwargs)

        normalized = {}
        for name in merged:
            if not isinstance(name, str):
                raise TypeError(f"Claim name must be a string, got {name!r}")
            normalized[name] = _normalize(merged[name], name)

        self._claims = {name: normalized[name] for name in sorted(normalized)}

    @classmethod
    def from_json(cls, raw: bytes) -> "ClaimSet":
        """Build a claim set from a decoded claims segment."""
        return cls(parse_json_object(raw, "claims"))

    def to_json(self) -> bytes:
        """Canonical JSON bytes of the claim set."""
        return canonical_json(self._claims)

    def to_dict(self) -> Dict[str, ClaimValue]:
        """Detached plain-dict copy of the claims."""
        return {name: _normalize(value, name) for name, value in self._claims.items()}

    def with_claims(self, **claims: Any) -> "ClaimSet":
        """Return a new claim set with ``claims`` added or replaced."""
        return ClaimSet(self._claims, **claims)

    def __getitem__(self, name: str) -> ClaimValue:
        return self._claims[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __repr__(self) -> str:
        return f"ClaimSet({self._claims!r})"
