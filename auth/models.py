"""Request/response schemas for the users API, plus the ``User`` ORM model."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel

from database.models import User  # noqa: F401


# Presence is checked by auth.validation so that a missing field yields
# the same 400 body as a blank one.
class SignupRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    phone_number: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    membership_status: Optional[str] = None


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    phone_number: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    membership_status: Optional[str] = None


class SignupResponse(UserResponse):
    token: str


class LoginResponse(BaseModel):
    email: str
    token: str


def user_to_response(user: User) -> dict:
    """Public fields of a user; never includes the password hash."""
    return {
        "id": str(user.user_id),
        "name": user.name,
        "email": user.email,
        "phone_number": user.phone_number,
        "gender": user.gender,
        "date_of_birth": user.date_of_birth,
        "membership_status": user.membership_status,
    }


__all__ = [
    "User",
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "SignupResponse",
    "LoginResponse",
    "user_to_response",
]
