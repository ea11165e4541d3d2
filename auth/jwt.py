"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON claims signed with HMAC-SHA256::

    <base64url(json({"sub", "iat", "exp"}))>.<hex signature>

The secret and lifetime come from settings (``JWT_SECRET``,
``JWT_EXPIRY_SECONDS``) and are handed to ``TokenService`` once at startup.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass
from typing import Optional

from auth.errors import InvalidTokenError


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    issued_at: int
    expires_at: int


def _b64encode(raw: bytes) -> str:
    return urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64decode(data: str) -> bytes:
    return urlsafe_b64decode(data + "=" * (-len(data) % 4))


class TokenService:
    """Issues and verifies signed, time-bound tokens for one secret."""

    def __init__(self, secret: str, expiry_seconds: int) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        if expiry_seconds <= 0:
            raise ValueError("token expiry must be positive")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def create_token(self, user_id: str, now: Optional[float] = None) -> str:
        """Create a signed token for ``user_id`` valid for ``expiry_seconds``."""
        issued_at = int(time.time() if now is None else now)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode()
        return _b64encode(raw) + "." + self._sign(raw)

    def verify_token(self, token: str, now: Optional[float] = None) -> TokenClaims:
        """
        Verify signature and expiry and return the claims.

        Raises ``InvalidTokenError`` on any failure.
        """
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidTokenError("bad format")
        try:
            raw = _b64decode(parts[0])
            valid = hmac.compare_digest(parts[1].encode(), self._sign(raw).encode())
        except (binascii.Error, ValueError):
            raise InvalidTokenError("bad encoding")
        if not valid:
            raise InvalidTokenError("bad signature")

        try:
            payload = json.loads(raw)
            claims = TokenClaims(
                subject=str(payload["sub"]),
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
        except (ValueError, TypeError, KeyError):
            raise InvalidTokenError("bad claims")

        current = time.time() if now is None else now
        if claims.expires_at <= current:
            raise InvalidTokenError("token expired")
        return claims
