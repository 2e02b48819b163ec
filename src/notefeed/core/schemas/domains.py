"""Domain management schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import RequestModel, UtcDatetime, check_boolean, check_text

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000


class DomainCreate(RequestModel):
    """Domain creation request schema."""

    name: Optional[str] = Field(default=None, description="Domain name")
    description: Optional[str] = Field(default=None, description="Free text description")
    is_public: Optional[bool] = Field(default=True, description="Whether the domain is public")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any):
        return check_text(v, "Name", required=True, min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any):
        return check_text(v, "Description", max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("is_public", mode="before")
    @classmethod
    def validate_is_public(cls, v: Any):
        return check_boolean(v, "is_public must be a boolean")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Work", "description": "Job related notes", "is_public": True}
        }
    )


class DomainUpdate(RequestModel):
    """Domain update request schema; omitted or null fields are left unchanged."""

    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any):
        return check_text(v, "Name", min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any):
        return check_text(v, "Description", max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("is_public", mode="before")
    @classmethod
    def validate_is_public(cls, v: Any):
        return check_boolean(v, "is_public must be a boolean")


class DomainResponse(BaseModel):
    """Domain response schema."""

    id: int
    name: str
    description: Optional[str] = None
    is_public: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)
