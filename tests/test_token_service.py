"""
Tests for bearer token issuing and verification.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from smartdine.application.services.token_service import (
    TokenExpired,
    TokenMalformed,
    TokenService,
)

SECRET = "unit-test-secret"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(SECRET, "HS256", timedelta(days=7))


class TestTokenService:
    """Issue/verify behaviour of TokenService"""

    def test_verify_returns_issued_user_id(self, tokens):
        claims = tokens.verify(tokens.issue(42))

        assert claims.user_id == 42
        assert claims.expires_at > claims.issued_at

    def test_default_lifetime_is_seven_days(self, tokens):
        claims = tokens.verify(tokens.issue(1))

        assert claims.expires_at - claims.issued_at == timedelta(days=7)

    def test_expired_token_raises_token_expired(self, tokens):
        token = tokens.issue(1, expires_delta=timedelta(seconds=-5))

        with pytest.raises(TokenExpired):
            tokens.verify(token)

    def test_token_signed_with_other_secret_is_malformed(self, tokens):
        foreign = TokenService("another-secret").issue(1)

        with pytest.raises(TokenMalformed):
            tokens.verify(foreign)

    def test_garbage_is_malformed(self, tokens):
        with pytest.raises(TokenMalformed):
            tokens.verify("not-a-jwt")

    def test_tampered_token_is_malformed(self, tokens):
        token = tokens.issue(1)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(TokenMalformed):
            tokens.verify(tampered)

    def test_missing_subject_is_malformed(self, tokens):
        now = datetime.now(timezone.utc)
        token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, SECRET, algorithm="HS256")

        with pytest.raises(TokenMalformed):
            tokens.verify(token)

    def test_non_numeric_subject_is_malformed(self, tokens):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "someone@example.com", "iat": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenMalformed):
            tokens.verify(token)

    def test_empty_secret_is_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")
