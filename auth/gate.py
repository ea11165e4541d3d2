"""
Bearer-token gate for protected routes.

``authenticate`` takes plain headers and returns a value instead of raising:
either ``Admitted`` with the caller's identity or ``Rejected`` with the
``AuthenticationError`` that explains why. It knows nothing about FastAPI;
``auth.dependencies`` turns the result into a 401 or a resolved user.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from auth.errors import AuthenticationError, InvalidTokenError
from auth.jwt import TokenService
from auth.store import UserStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer"


@dataclass(frozen=True)
class Identity:
    user_id: uuid.UUID
    email: str
    name: str


@dataclass(frozen=True)
class Admitted:
    identity: Identity


@dataclass(frozen=True)
class Rejected:
    error: AuthenticationError


GateResult = Union[Admitted, Rejected]


def extract_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """Return the token from ``Authorization: Bearer <token>``, else ``None``."""
    authorization = None
    for key, value in headers.items():
        if key.lower() == "authorization":
            authorization = value
            break
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_PREFIX:
        return None
    return parts[1]


async def authenticate(
    headers: Mapping[str, str],
    tokens: TokenService,
    users: UserStore,
) -> GateResult:
    token = extract_bearer_token(headers)
    if token is None:
        logger.info("Auth rejected: missing bearer token")
        return Rejected(AuthenticationError("Authorization token required"))

    try:
        claims = tokens.verify_token(token)
    except InvalidTokenError as exc:
        logger.info("Auth rejected: %s", exc.reason)
        return Rejected(exc)

    user = await users.find_by_id(claims.subject)
    if user is None:
        logger.info("Auth rejected: unknown subject %s", claims.subject)
        return Rejected(AuthenticationError("User not found"))

    return Admitted(Identity(user_id=user.user_id, email=user.email, name=user.name))
