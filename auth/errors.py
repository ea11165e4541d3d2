"""
Error taxonomy for the users/jobs API.

Every error carries the HTTP status it maps to, so the exception handlers in
``api.middleware`` can turn it into a ``{"error": ...}`` body without a
lookup table::

    AppError
    ├── ValidationError            400
    ├── DuplicateEmailError        400
    ├── NotFoundError              404
    └── AuthenticationError        401
        ├── InvalidTokenError      401
        └── InvalidCredentialsError 400  (login path)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import status


class AppError(Exception):
    """Base class; ``message`` is safe to show to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """One or more input fields are missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations), {"violations": self.violations})


class DuplicateEmailError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("User already exists")


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(AppError):
    """The caller could not be identified."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(AuthenticationError):
    def __init__(self, reason: str = "") -> None:
        # The reason goes to the logs only.
        self.reason = reason
        super().__init__("Invalid or expired token")


class InvalidCredentialsError(AuthenticationError):
    """Login failure. Same message for unknown e-mail and wrong password."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("Invalid email or password")
