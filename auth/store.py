"""
User persistence.

``create_user`` relies on the ``users.email`` unique constraint rather than
a read-then-write check, so two concurrent signups for the same address
cannot both succeed.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import DuplicateEmailError
from auth.models import User
from auth.validation import SignupData, normalize_email
from database.helpers import to_uuid

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_user(self, data: SignupData, password_hash: str) -> User:
        """Insert a user. Raises ``DuplicateEmailError`` if the e-mail is taken."""
        user = User(
            user_id=uuid.uuid4(),
            name=data.name,
            email=normalize_email(data.email),
            password_hash=password_hash,
            phone_number=data.phone_number,
            gender=data.gender,
            date_of_birth=data.date_of_birth,
            membership_status=data.membership_status,
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            logger.info("Signup rejected: email already registered")
            raise DuplicateEmailError()
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: Union[str, uuid.UUID]) -> Optional[User]:
        uid = to_uuid(user_id)
        if uid is None:
            return None
        return await self.session.get(User, uid)

    async def delete(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()
