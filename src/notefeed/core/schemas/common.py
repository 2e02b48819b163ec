"""
Shared schema pieces: field checks with the API's error messages, and the
pagination envelope used by every list endpoint.
"""

import re
from datetime import datetime
from typing import Annotated, Any, Callable, Generic, List, Optional, Sequence, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic_core import PydanticCustomError

from ..models.base import as_utc
from ..query import MAX_ID, Page

T = TypeVar("T")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# timestamps read back from SQLite are naive; they are always UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class RequestModel(BaseModel):
    """Base for request bodies.

    Every field is optional at the type level and validated (including its
    default) by before-validators, so a missing field reports our message
    rather than pydantic's generic "Field required".
    """

    model_config = ConfigDict(validate_default=True, extra="ignore")


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _is_storable_int(value: Any) -> bool:
    return not isinstance(value, bool) and isinstance(value, int) and -MAX_ID - 1 <= value <= MAX_ID


def check_text(
    value: Any,
    label: str,
    *,
    required: bool = False,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> Optional[str]:
    """Validate a string field.

    Blank (missing, null or empty) fails only when required; length limits
    apply to non-empty strings.
    """
    if _is_blank(value):
        if required:
            raise PydanticCustomError("blank", f"{label} cannot be blank")
        if value is None:
            return None

    if not isinstance(value, str):
        raise PydanticCustomError("string_type", f"{label} must be a string")

    if min_length is not None and len(value) < min_length:
        raise PydanticCustomError(
            "too_short", f"{label} must be at least {min_length} characters"
        )
    if max_length is not None and len(value) > max_length:
        raise PydanticCustomError("too_long", f"{label} cannot exceed {max_length} characters")

    return value


def check_email(value: Any, *, max_length: int = 180) -> Optional[str]:
    value = check_text(value, "Email", required=True)
    if len(value) > max_length or not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email", "Email is not valid")
    return value


def check_integer(value: Any, label: str, *, required: bool = False) -> Optional[int]:
    """Strict integer check; numeric strings, booleans and values too large to store are rejected."""
    if _is_blank(value):
        if required:
            raise PydanticCustomError("blank", f"{label} cannot be blank")
        return None

    if not _is_storable_int(value):
        raise PydanticCustomError("int_type", f"{label} must be an integer")
    return value


def check_boolean(value: Any, message: str) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise PydanticCustomError("bool_type", message)
    return value


def check_choice(value: Any, choices: Sequence[str], message: str) -> Optional[str]:
    if value is None:
        return None
    if value not in choices:
        raise PydanticCustomError("choice", message)
    return value


def check_integer_list(value: Any, list_message: str, item_message: str) -> Optional[List[int]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise PydanticCustomError("list_type", list_message)
    for item in value:
        if not _is_storable_int(item):
            raise PydanticCustomError("int_type", item_message)
    return value


class PaginationInfo(BaseModel):
    """Pagination block of a list response."""

    page: int = Field(description="Current page, 1-based")
    limit: int = Field(description="Page size")
    total: int = Field(description="Total matching items")
    total_pages: int = Field(description="ceil(total / limit), 0 when empty")


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for list endpoints."""

    items: List[T]
    pagination: PaginationInfo

    @classmethod
    def from_page(cls, page: Page, convert: Callable[[Any], T]) -> "PaginatedResponse[T]":
        return cls(
            items=[convert(item) for item in page.items],
            pagination=PaginationInfo(**page.pagination.to_dict()),
        )


class ErrorResponse(BaseModel):
    """Error body for business failures."""

    error: str = Field(description="Human-readable error message")

    model_config = ConfigDict(json_schema_extra={"example": {"error": "Domain not found"}})


class ValidationErrorResponse(BaseModel):
    """Error body for rejected request fields."""

    errors: dict = Field(description="First message per invalid field")

    model_config = ConfigDict(
        json_schema_extra={"example": {"errors": {"title": "Title cannot be blank"}}}
    )


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    version: str = Field(description="Application version")
    checks: dict = Field(description="Individual component health checks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "checks": {"database": {"status": "healthy", "response_time_ms": 15}},
            }
        }
    )
