"""Auth Schemas — registration, login and profile payloads.

Invariants:
    - email and password are required and non-empty
    - Responses never include the password hash
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)
    username: str | None = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("email cannot be empty or whitespace")
        return v


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    username: str | None = None


class UserResponse(UserSummary):
    """Public user data returned on registration."""
    created_at: datetime = Field(serialization_alias="createdAt")


class UserProfileResponse(UserResponse):
    """Profile returned by /auth/me."""
    updated_at: datetime = Field(serialization_alias="updatedAt")


class LoginResponse(BaseModel):
    token: str
    user: UserSummary
