"""Subscription schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import RequestModel, check_integer


class SubscribeRequest(RequestModel):
    """Follow an author."""

    author_id: Optional[int] = Field(default=None, description="User to follow")

    @field_validator("author_id", mode="before")
    @classmethod
    def validate_author_id(cls, v: Any):
        return check_integer(v, "Author ID", required=True)

    model_config = ConfigDict(json_schema_extra={"example": {"author_id": 2}})


class SubscriptionStatusResponse(BaseModel):
    """Whether the caller follows an author."""

    author_id: int
    subscribed: bool
