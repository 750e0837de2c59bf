"""
Integration tests: tokens exchanged with PyJWT.
"""

import time

import jwt
import pytest

from service_tokens.app import Algorithm, TokenIssuer, TokenValidator, decode, encode
from shared.config import TokenSettings
from shared.errors import AudienceInvalid, SignatureExpired, SignatureInvalid
from shared.test_helpers import (
    KNOWN_CLAIMS, KNOWN_SECRET, KNOWN_TOKEN, TestDataFactory, create_reference_token,
    decode_reference_token,
)

SECRET = "an-interop-secret-that-is-32-bytes-long!!"


class TestTokenInterop:
    """Integration tests for tokens crossing library boundaries."""

    @pytest.fixture
    def subject(self):
        """Create a test subject."""
        return TestDataFactory.create_test_subjects()[1]

    @pytest.fixture
    def claims(self, subject):
        """Create claims valid for the next hour."""
        return TestDataFactory.create_claims(subject, now=int(time.time()))

    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_pyjwt_reads_our_tokens(self, claims, algorithm):
        """Test PyJWT verifies tokens we encode."""
        token = encode(claims, SECRET, algorithm)

        decoded = decode_reference_token(token, SECRET, algorithm.value)

        assert decoded == claims

    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_we_read_pyjwt_tokens(self, claims, algorithm):
        """Test we verify tokens PyJWT encodes."""
        token = create_reference_token(claims, SECRET, algorithm.value)

        _, decoded = decode(
            token, SECRET, True, True,
            expected_issuer=claims["iss"],
            expected_audience=claims["aud"],
            algorithm=algorithm
        )

        assert decoded == claims

    def test_pyjwt_reads_known_vector(self):
        """Test the known vector verifies with PyJWT too."""
        assert decode_reference_token(KNOWN_TOKEN, KNOWN_SECRET) == KNOWN_CLAIMS

    def test_expired_pyjwt_token(self, subject):
        """Test an expired PyJWT token fails with SignatureExpired."""
        past = int(time.time()) - 3600
        token = create_reference_token(TestDataFactory.create_claims(subject, now=past, expires_in=300), SECRET)

        with pytest.raises(SignatureExpired):
            decode(token, SECRET, True, True)

    def test_pyjwt_rejects_forged_token(self, claims):
        """Test PyJWT rejects our token under another key."""
        token = encode(claims, SECRET)

        with pytest.raises(jwt.InvalidSignatureError):
            decode_reference_token(token, "another-secret-that-is-32-bytes-long!!")

    def test_we_reject_pyjwt_token_with_other_key(self, claims):
        """Test we reject a PyJWT token signed with another key."""
        token = create_reference_token(claims, "another-secret-that-is-32-bytes-long!!")

        with pytest.raises(SignatureInvalid):
            decode(token, SECRET, True, False)

    def test_issuer_to_validator_flow(self, subject):
        """Test a configured issuer and validator agree, and audience is enforced."""
        config = TokenSettings(
            _env_file=None,
            default_algorithm="HS512",
            expected_issuer="https://issuer.test",
            expected_audience="access-layer",
        )
        issuer = TokenIssuer(SECRET, config=config)
        token = issuer.issue({"tenant_id": subject.tenant_id}, expires_in=300, subject=subject.subject)

        result = TokenValidator(SECRET, config=config).validate(token)
        assert result.valid is True
        assert result.claims["tenant_id"] == "tenant-2"

        other = TokenValidator(SECRET, config=config, expected_audience="reporting")
        with pytest.raises(AudienceInvalid):
            other.decode(token)

        decoded = decode_reference_token(token, SECRET, "HS512")
        assert decoded["sub"] == "user2"
