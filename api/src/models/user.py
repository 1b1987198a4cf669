"""
User models.

Provides Pydantic schemas for:
- Create-user requests
- User records as persisted in the database
- User responses returned by the API
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CreateUserRequest(BaseModel):
    """Create user request body."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Display name")

    @model_validator(mode="before")
    @classmethod
    def match_name_key(cls, data: Any) -> Any:
        """Accept the name key in any letter case; an exact match wins."""
        if not isinstance(data, dict) or "name" in data:
            return data
        for key in data:
            if isinstance(key, str) and key.lower() == "name":
                return {**data, "name": data[key]}
        return data


class UserDB(BaseModel):
    """User record as stored in the users table."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
    name: str


class User(BaseModel):
    """User information returned by the API."""

    id: UUID = Field(..., description="Unique user identifier")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    name: str = Field(..., description="Display name")


class ErrorResponse(BaseModel):
    """Error envelope used by every non-success response."""

    error: str = Field(..., min_length=1)


def database_user_to_user(user: UserDB) -> User:
    """Translate a stored user record into its public shape."""
    return User(
        id=user.id,
        created_at=user.created_at,
        updated_at=user.updated_at,
        name=user.name,
    )
