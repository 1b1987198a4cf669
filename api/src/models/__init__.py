"""Data models for the FastAPI service.

This package contains Pydantic models for request/response validation
and database records.
"""

from api.src.models.user import (
    CreateUserRequest,
    ErrorResponse,
    User,
    UserDB,
    database_user_to_user,
)

__all__ = [
    "CreateUserRequest",
    "ErrorResponse",
    "User",
    "UserDB",
    "database_user_to_user",
]
