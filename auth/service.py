"""
Signup and login flows.

    signup: validate → hash → insert (unique e-mail) → issue token
    login:  validate → lookup → verify → issue token
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from auth.errors import InvalidCredentialsError
from auth.jwt import TokenService
from auth.models import LoginRequest, SignupRequest, User
from auth.password import hash_password_async, verify_password_async
from auth.store import UserStore
from auth.validation import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH, validate_login, validate_signup

logger = logging.getLogger(__name__)

# Verified against when the e-mail is unknown, so both login failures
# cost the same bcrypt work. Keyed by bcrypt rounds.
_dummy_hashes: Dict[int, str] = {}


async def _dummy_hash(rounds: int) -> str:
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = await hash_password_async("dummy-password-for-timing", rounds)
    return _dummy_hashes[rounds]


async def signup(
    store: UserStore,
    tokens: TokenService,
    req: SignupRequest,
    *,
    min_password_length: int = MIN_PASSWORD_LENGTH,
    bcrypt_rounds: int = 12,
) -> Tuple[User, str]:
    data = validate_signup(req, min_password_length=min_password_length)
    password_hash = await hash_password_async(data.password, bcrypt_rounds)
    user = await store.create_user(data, password_hash)
    token = tokens.create_token(str(user.user_id))
    logger.info("Registered user %s (%s)", user.name, user.user_id)
    return user, token


async def login(
    store: UserStore,
    tokens: TokenService,
    req: LoginRequest,
    *,
    bcrypt_rounds: int = 12,
) -> Tuple[User, str]:
    data = validate_login(req)

    # bcrypt cannot check longer input, and no stored password is longer.
    password = data.password.encode("utf-8")
    if len(password) > MAX_PASSWORD_BYTES:
        truncated = password[:MAX_PASSWORD_BYTES].decode("utf-8", errors="ignore")
        await verify_password_async(truncated, await _dummy_hash(bcrypt_rounds))
        logger.info("Login failed: password longer than %d bytes", MAX_PASSWORD_BYTES)
        raise InvalidCredentialsError()

    user = await store.find_by_email(data.email)

    if user is None:
        await verify_password_async(data.password, await _dummy_hash(bcrypt_rounds))
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsError()

    if not await verify_password_async(data.password, user.password_hash):
        logger.info("Login failed: wrong password for %s", user.user_id)
        raise InvalidCredentialsError()

    token = tokens.create_token(str(user.user_id))
    logger.info("Login: %s (%s)", user.name, user.user_id)
    return user, token
