"""
Users API routes: signup, login, current user.

Route prefix: /api/users
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth import service
from auth.dependencies import (
    db_session,
    get_current_user,
    get_settings,
    get_token_service,
    get_user_store,
)
from auth.errors import AuthenticationError
from auth.gate import Identity
from auth.jwt import TokenService
from auth.models import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    UserResponse,
    user_to_response,
)
from auth.store import UserStore
from config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
    store: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Register a new user and return it with a fresh token."""
    user, token = await service.signup(
        store,
        tokens,
        req,
        min_password_length=settings.password_min_length,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    await session.commit()
    return {**user_to_response(user), "token": token}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    store: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Login with email + password."""
    user, token = await service.login(store, tokens, req, bcrypt_rounds=settings.bcrypt_rounds)
    return {"email": user.email, "token": token}


@router.get("/me", response_model=UserResponse)
async def me(
    identity: Identity = Depends(get_current_user),
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    # Identity carries only id, email and name. The gate already loaded this
    # user into the request session, so the lookup is served from its identity map.
    user = await store.find_by_id(identity.user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user_to_response(user)
