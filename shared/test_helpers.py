"""
Test helper functions and factory methods for the token service.
"""

import base64
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import jwt

# Known vector: {"key11": "val1", "key22": "val2"} signed with "secret123".
KNOWN_SECRET = "secret123"
KNOWN_CLAIMS = {"key11": "val1", "key22": "val2"}
KNOWN_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJrZXkxMSI6InZhbDEiLCJrZXkyMiI6InZhbDIifQ"
    ".jrcoVcRsmQqDEzSW9qOhG1HIrzV_n3nMhykNPnGvp9c"
)


class FixedClock:
    """Callable clock frozen at ``now`` until advanced."""

    def __init__(self, now: Optional[float] = None):
        self.now = float(now if now is not None else int(time.time()))

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class TestSubject:
    """Test subject data."""
    __test__ = False

    subject: str
    tenant_id: str
    roles: List[str] = field(default_factory=list)


class TestDataFactory:
    """Factory for creating test data."""
    __test__ = False

    @staticmethod
    def create_test_subjects() -> List[TestSubject]:
        """Create test subjects."""
        return [
            TestSubject(subject="user1", tenant_id="tenant-1", roles=["user", "analyst"]),
            TestSubject(subject="user2", tenant_id="tenant-2", roles=["user", "admin"]),
            TestSubject(subject="admin", tenant_id="tenant-1", roles=["admin", "superuser"]),
        ]

    @staticmethod
    def create_claims(subject: TestSubject, now: int, expires_in: int = 3600,
                      issuer: str = "https://issuer.test", audience: str = "access-layer") -> Dict[str, Any]:
        """Create a realistic claim set for ``subject``."""
        return {
            "sub": subject.subject,
            "tenant_id": subject.tenant_id,
            "roles": list(subject.roles),
            "iss": issuer,
            "aud": audience,
            "iat": now,
            "nbf": now,
            "exp": now + expires_in,
        }

    @staticmethod
    def create_string_claims(count: int = 3) -> Dict[str, str]:
        """Create string-only claims: key1 -> val1, ..."""
        return {f"key{i}": f"val{i}" for i in range(1, count + 1)}


def create_reference_token(claims: Dict[str, Any], secret: str, algorithm: str = "HS256") -> str:
    """Mint a token with PyJWT for interoperability checks."""
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_reference_token(token: str, secret: str, algorithm: str = "HS256",
                           **options: Any) -> Dict[str, Any]:
    """Verify a token with PyJWT, skipping claim checks unless asked."""
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={"verify_exp": False, "verify_aud": False, "verify_iat": False,
                 "verify_nbf": False, **options}
    )


def flip_signature_bit(token: str, bit_index: int) -> str:
    """Return ``token`` with one bit of its decoded signature flipped."""
    signing_input, _, signature_segment = token.rpartition(".")
    signature = bytearray(base64.urlsafe_b64decode(signature_segment + "=" * (-len(signature_segment) % 4)))
    signature[bit_index // 8] ^= 1 << (bit_index % 8)
    encoded = base64.urlsafe_b64encode(bytes(signature)).rstrip(b"=").decode("ascii")
    return f"{signing_input}.{encoded}"
