"""Tag management schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import RequestModel, UtcDatetime, check_text

NAME_MAX_LENGTH = 50


class TagCreate(RequestModel):
    """Tag creation request schema."""

    name: Optional[str] = Field(default=None, description="Tag name, unique per user")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any):
        return check_text(v, "Name", required=True, min_length=1, max_length=NAME_MAX_LENGTH)

    model_config = ConfigDict(json_schema_extra={"example": {"name": "python"}})


class TagUpdate(RequestModel):
    """Tag rename request schema."""

    name: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any):
        return check_text(v, "Name", min_length=1, max_length=NAME_MAX_LENGTH)


class TagResponse(BaseModel):
    """Tag response schema."""

    id: int
    name: str
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)
