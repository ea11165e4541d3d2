"""
Credential validation for signup and login payloads.

Pure checks, no I/O. Uniqueness of the e-mail is *not* checked here; the
``users.email`` unique constraint enforces it at insert time.

Password policy:
  • at least ``min_length`` characters (never fewer than 8)
  • at most 72 bytes once UTF-8 encoded (bcrypt input limit)
  • one lowercase letter, one uppercase letter, one digit, one symbol
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from auth.errors import ValidationError
from auth.models import LoginRequest, SignupRequest

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72
MAX_NAME_LENGTH = 128

MISSING_FIELDS = "All fields must be filled"


@dataclass(frozen=True)
class SignupData:
    name: str
    email: str
    password: str
    phone_number: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    membership_status: Optional[str] = None


@dataclass(frozen=True)
class LoginData:
    email: str
    password: str


def normalize_email(email: str) -> str:
    """E-mail addresses compare case-insensitively."""
    return email.strip().lower()


def check_email(email: str) -> Optional[str]:
    """Return the normalized address, or ``None`` if it is not valid."""
    try:
        validated = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None
    return normalize_email(validated.normalized)


def password_violations(password: str, min_length: int = MIN_PASSWORD_LENGTH) -> List[str]:
    min_length = max(min_length, MIN_PASSWORD_LENGTH)
    problems: List[str] = []
    if len(password) < min_length:
        problems.append(f"Password must be at least {min_length} characters long")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        problems.append(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    if not any(ch.islower() for ch in password):
        problems.append("Password must contain a lowercase letter")
    if not any(ch.isupper() for ch in password):
        problems.append("Password must contain an uppercase letter")
    if not any(ch.isdigit() for ch in password):
        problems.append("Password must contain a digit")
    if all(ch.isalnum() for ch in password):
        problems.append("Password must contain a symbol")
    return problems


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_signup(req: SignupRequest, min_password_length: int = MIN_PASSWORD_LENGTH) -> SignupData:
    """Check a signup payload and return it normalized.

    Raises ``ValidationError`` listing every rule that failed.
    """
    name = req.name.strip()
    if not name or not req.email.strip() or not req.password:
        raise ValidationError([MISSING_FIELDS])

    violations: List[str] = []
    if len(name) > MAX_NAME_LENGTH:
        violations.append(f"Name must be at most {MAX_NAME_LENGTH} characters long")

    email = check_email(req.email)
    if email is None:
        violations.append("Email not valid")

    violations.extend(password_violations(req.password, min_password_length))

    if req.date_of_birth is not None and req.date_of_birth >= date.today():
        violations.append("Date of birth must be in the past")

    if violations:
        raise ValidationError(violations)

    return SignupData(
        name=name,
        email=email,
        password=req.password,
        phone_number=_clean(req.phone_number),
        gender=_clean(req.gender),
        date_of_birth=req.date_of_birth,
        membership_status=_clean(req.membership_status),
    )


def validate_login(req: LoginRequest) -> LoginData:
    """Presence and e-mail shape only; the password policy is a signup rule."""
    if not req.email.strip() or not req.password:
        raise ValidationError([MISSING_FIELDS])
    email = check_email(req.email)
    if email is None:
        raise ValidationError(["Email not valid"])
    return LoginData(email=email, password=req.password)
