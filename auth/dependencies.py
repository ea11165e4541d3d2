"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_current_user`` and ``get_job_owner``
dependencies that are used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.gate import Admitted, Identity, authenticate
from auth.jwt import TokenService
from auth.store import UserStore
from config.settings import Settings
from database.session import get_db_session


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


async def get_current_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    users: UserStore = Depends(get_user_store),
) -> Identity:
    """
    Run the bearer-token gate. Rejections are raised as the gate's
    ``AuthenticationError`` (rendered as 401 by ``api.middleware``).
    """
    result = await authenticate(request.headers, tokens, users)
    if not isinstance(result, Admitted):
        raise result.error
    request.state.user = result.identity
    return result.identity


async def get_job_owner(
    request: Request,
    settings: Settings = Depends(get_settings),
    tokens: TokenService = Depends(get_token_service),
    users: UserStore = Depends(get_user_store),
) -> Optional[Identity]:
    """The caller in the authenticated deployment, ``None`` in the open one."""
    if not settings.require_auth:
        return None
    return await get_current_user(request, tokens, users)
