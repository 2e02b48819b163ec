"""Lenient query-string parsing shared by the list endpoints.

Bad values never fail a list request: an unparseable page or limit falls
back to the default, and an unparseable filter is simply not applied.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Path, Query
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings, get_settings
from ..core.models.base import as_utc
from ..core.query import MAX_ID, clamp_limit, clamp_page

_datetime_adapter = TypeAdapter(datetime)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

# path ids outside the column range are rejected with a 400
ResourceId = Annotated[int, Path(ge=1, le=MAX_ID)]


def parse_int(value: Optional[str]) -> Optional[int]:
    """Integer within the 32-bit column range, else None."""
    if value is None:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    if not -MAX_ID - 1 <= number <= MAX_ID:
        return None
    return number


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """ISO 8601 date or datetime converted to UTC; naive values are taken as UTC."""
    if not value:
        return None
    try:
        return as_utc(_datetime_adapter.validate_python(value.strip())).astimezone(timezone.utc)
    except PydanticValidationError:
        return None


def compact(filters: Dict[str, Any]) -> Dict[str, Any]:
    """Drop filters that were absent or failed to parse."""
    return {key: value for key, value in filters.items() if value is not None and value != ""}


@dataclass
class ListParams:
    page: int
    limit: int
    sort: Optional[str] = None


def list_params(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size, 1 to 100"),
    sort: Optional[str] = Query(None, description="Sort field, prefix with '-' for descending"),
    settings: Settings = Depends(get_settings),
) -> ListParams:
    return ListParams(
        page=clamp_page(parse_int(page)),
        limit=clamp_limit(
            parse_int(limit), default=settings.default_page_size, maximum=settings.max_page_size
        ),
        sort=sort,
    )
