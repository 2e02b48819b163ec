"""
Authentication schemas.

These schemas define the API contracts for registration, login and the
session body returned alongside the refresh-token cookie.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import RequestModel, check_email, check_text


class RegisterRequest(RequestModel):
    """User registration request schema."""

    username: Optional[str] = Field(default=None, description="Unique username")
    email: Optional[str] = Field(default=None, description="Unique email address")
    password: Optional[str] = Field(default=None, description="Plain password, hashed on receipt")

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: Any):
        return check_text(v, "Username", required=True, min_length=3, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v: Any):
        return check_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v: Any):
        return check_text(v, "Password", required=True, min_length=6)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "secret123",
            }
        }
    )


class LoginRequest(RequestModel):
    """User login request schema."""

    email: Optional[str] = Field(default=None, description="Account email")
    password: Optional[str] = Field(default=None, description="Account password")

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v: Any):
        return check_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v: Any):
        return check_text(v, "Password", required=True)

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "alice@example.com", "password": "secret123"}}
    )


class UserResponse(BaseModel):
    """Public identity of a user."""

    id: int = Field(description="User identifier")
    username: str = Field(description="Username")
    email: str = Field(description="Email address")

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(UserResponse):
    """Session body; the refresh token travels in an HTTP-only cookie."""

    access_token: str = Field(serialization_alias="accessToken", description="JWT access token")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "id": 1,
                "username": "alice",
                "email": "alice@example.com",
            }
        },
    )
