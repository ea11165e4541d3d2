"""
Shared fixtures: an in-memory SQLite app per test, in either deployment
variant, plus helpers for the common signup payload.
"""

from __future__ import annotations

from typing import Any, Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from auth.jwt import TokenService
from auth.store import UserStore
from config.settings import Settings
from database.session import build_session_factory, enable_sqlite_foreign_keys, init_models
from main import create_app

TEST_SECRET = "test-secret-key"

JOHN: Dict[str, Any] = {
    "name": "John Doe",
    "email": "john@example.com",
    "password": "R3g5T7#gh",
    "phone_number": "1234567890",
    "gender": "Male",
    "date_of_birth": "1990-01-01",
    "membership_status": "Inactive",
}

SEED_JOBS = [
    {
        "title": "Software Developer",
        "type": "Full-time",
        "description": "C++ Senior Developer",
        "company": {"name": "HelloWorld", "contactEmail": "helloworld@world.com", "contactPhone": "0451203698"},
    },
    {
        "title": "Accountant",
        "type": "Part-time",
        "description": "Financial Department of Small Company",
        "company": {"name": "MyMoney", "contactEmail": "mymoney@money.com", "contactPhone": "1258692741"},
    },
]


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "jwt_secret": TEST_SECRET,
        "jwt_expiry_seconds": 3600,
        "bcrypt_rounds": 4,
        "database_url": "sqlite+aiosqlite://",
    }
    values.update(overrides)
    return Settings(**values)


def memory_engine():
    return enable_sqlite_foreign_keys(create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool))


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def tokens(settings: Settings) -> TokenService:
    return TokenService(settings.jwt_secret, settings.jwt_expiry_seconds)


@pytest.fixture
def client():
    app = create_app(make_settings(require_auth=True), engine=memory_engine())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def open_client():
    app = create_app(make_settings(require_auth=False), engine=memory_engine())
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def session():
    engine = memory_engine()
    await init_models(engine)
    factory = build_session_factory(engine)
    async with factory() as db:
        yield db
    await engine.dispose()


@pytest.fixture
def store(session) -> UserStore:
    return UserStore(session)
