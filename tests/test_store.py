"""
Tests for the user store against an in-memory SQLite database.
"""

import asyncio
import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import create_async_engine

from auth.errors import DuplicateEmailError
from auth.models import User
from auth.store import UserStore
from auth.validation import SignupData
from database.session import build_session_factory, enable_sqlite_foreign_keys, init_models


def _data(email="leo@example.com", name="Leo") -> SignupData:
    return SignupData(name=name, email=email, password="R3g5T7#gh")


class TestUserStore:
    @pytest.mark.asyncio
    async def test_create_and_find(self, store):
        user = await store.create_user(_data(), "digest")
        assert isinstance(user.user_id, uuid.UUID)

        assert (await store.find_by_email("leo@example.com")).user_id == user.user_id
        assert (await store.find_by_id(user.user_id)).email == "leo@example.com"
        assert (await store.find_by_id(str(user.user_id))).name == "Leo"

    @pytest.mark.asyncio
    async def test_email_lookup_is_case_insensitive(self, store):
        await store.create_user(_data(email="Leo@Example.com"), "digest")
        user = await store.find_by_email("LEO@example.COM")
        assert user is not None
        assert user.email == "leo@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_by_constraint(self, store, session):
        await store.create_user(_data(), "digest")
        await session.commit()

        with pytest.raises(DuplicateEmailError):
            await store.create_user(_data(email="LEO@example.com", name="Second"), "digest")

        users = [u for u in [await store.find_by_email("leo@example.com")] if u is not None]
        assert len(users) == 1
        assert users[0].name == "Leo"

    @pytest.mark.asyncio
    async def test_unknown_and_malformed_ids(self, store):
        assert await store.find_by_id(uuid.uuid4()) is None
        assert await store.find_by_id("not-a-uuid") is None
        assert await store.find_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_delete(self, store):
        user = await store.create_user(_data(), "digest")
        await store.delete(user)
        assert await store.find_by_id(user.user_id) is None


class TestConcurrentSignup:
    @pytest.mark.asyncio
    async def test_same_email_only_one_insert_wins(self, tmp_path):
        engine = enable_sqlite_foreign_keys(create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.sqlite3'}"))
        await init_models(engine)
        factory = build_session_factory(engine)

        async def attempt(n: int):
            async with factory() as db:
                user = await UserStore(db).create_user(_data(name=f"Signup {n}"), "digest")
                await db.commit()
                return user

        try:
            results = await asyncio.gather(*(attempt(n) for n in range(5)), return_exceptions=True)
            created = [r for r in results if not isinstance(r, BaseException)]
            rejected = [r for r in results if isinstance(r, BaseException)]
            assert len(created) == 1
            assert all(isinstance(r, DuplicateEmailError) for r in rejected)

            async with factory() as db:
                count = await db.execute(select(func.count()).select_from(User).where(User.email == "leo@example.com"))
                assert count.scalar_one() == 1
        finally:
            await engine.dispose()
