"""
Tests for signed token issue / verify.
"""

import json
from base64 import urlsafe_b64encode

import pytest

from auth.errors import InvalidTokenError
from auth.jwt import TokenService

NOW = 1_700_000_000


class TestTokenService:
    def setup_method(self):
        self.tokens = TokenService("secret-a", expiry_seconds=3600)

    def test_claims_roundtrip(self):
        token = self.tokens.create_token("user-1", now=NOW)
        claims = self.tokens.verify_token(token, now=NOW + 10)
        assert claims.subject == "user-1"
        assert claims.issued_at == NOW
        assert claims.expires_at == NOW + 3600

    def test_expired_token_rejected(self):
        token = self.tokens.create_token("user-1", now=NOW)
        with pytest.raises(InvalidTokenError) as exc_info:
            self.tokens.verify_token(token, now=NOW + 3600)
        assert exc_info.value.reason == "token expired"
        assert exc_info.value.message == "Invalid or expired token"

    def test_wrong_secret_rejected(self):
        token = TokenService("secret-b", expiry_seconds=3600).create_token("user-1", now=NOW)
        with pytest.raises(InvalidTokenError) as exc_info:
            self.tokens.verify_token(token, now=NOW)
        assert exc_info.value.reason == "bad signature"

    def test_tampered_payload_rejected(self):
        token = self.tokens.create_token("user-1", now=NOW)
        _, sig = token.split(".")
        forged = json.dumps({"sub": "user-2", "iat": NOW, "exp": NOW + 3600}).encode()
        forged_token = urlsafe_b64encode(forged).decode().rstrip("=") + "." + sig
        with pytest.raises(InvalidTokenError):
            self.tokens.verify_token(forged_token, now=NOW)

    @pytest.mark.parametrize("token", ["", "abc", "a.b.c", ".sig", "payload.", "!!!.abc", "eyJ9.é"])
    def test_malformed_tokens_rejected(self, token):
        with pytest.raises(InvalidTokenError):
            self.tokens.verify_token(token, now=NOW)

    def test_signed_but_missing_claims_rejected(self):
        raw = json.dumps({"sub": "user-1"}).encode()
        token = urlsafe_b64encode(raw).decode().rstrip("=") + "." + self.tokens._sign(raw)
        with pytest.raises(InvalidTokenError) as exc_info:
            self.tokens.verify_token(token, now=NOW)
        assert exc_info.value.reason == "bad claims"

    def test_lifetime_must_be_bounded(self):
        with pytest.raises(ValueError):
            TokenService("secret", expiry_seconds=0)
        with pytest.raises(ValueError):
            TokenService("", expiry_seconds=60)
