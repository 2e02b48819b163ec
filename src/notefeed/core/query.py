"""
Filtering, sorting and pagination primitives shared by the repositories.

Repositories describe which request keys map to which columns; these helpers
turn the request values into WHERE / ORDER BY / LIMIT clauses.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

T = TypeVar("T")

MIN_PAGE = 1
# ids and page numbers must fit a 32-bit INTEGER column
MAX_ID = 2**31 - 1
MAX_PAGE = MAX_ID
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 20

RANGE_FROM_KEYS = ("from", "from_date")
RANGE_TO_KEYS = ("to", "to_date")
SEARCH_MARKERS = ("search", "query")


def clamp_page(page: Optional[int]) -> int:
    """1-based page within [1, MAX_PAGE]."""
    if page is None:
        return MIN_PAGE
    return max(MIN_PAGE, min(MAX_PAGE, int(page)))


def clamp_limit(
    limit: Optional[int], default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT
) -> int:
    """Page size clamped to [1, maximum]; 100 unless configured lower."""
    if limit is None:
        limit = default
    return max(MIN_LIMIT, min(maximum, MAX_LIMIT, int(limit)))


def total_pages_for(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains(column: ColumnElement, term: str) -> ColumnElement:
    """Case-insensitive substring match."""
    return column.ilike(f"%{escape_like(str(term))}%", escape="\\")


def apply_filters(
    stmt: Select, filters: Mapping[str, Any], allowed_fields: Mapping[str, ColumnElement]
) -> Select:
    """Apply request filters to a select.

    Unknown keys and empty values are ignored. Lists become IN clauses,
    from/to keys become range bounds, keys mentioning search/query become
    substring matches and everything else is an equality test.
    """
    for key, value in filters.items():
        column = allowed_fields.get(key)
        if column is None or value is None or value == "":
            continue

        if isinstance(value, (list, tuple, set)):
            if value:
                stmt = stmt.where(column.in_(list(value)))
            continue

        if key in RANGE_FROM_KEYS:
            stmt = stmt.where(column >= value)
            continue

        if key in RANGE_TO_KEYS:
            stmt = stmt.where(column <= value)
            continue

        if any(marker in key for marker in SEARCH_MARKERS):
            stmt = stmt.where(contains(column, value))
            continue

        stmt = stmt.where(column == value)

    return stmt


@dataclass(frozen=True)
class SortSpec:
    """Parsed sort parameter."""

    field: str
    descending: bool


def parse_sort(
    sort: Optional[str],
    allowed_fields: Mapping[str, ColumnElement],
    default: str = "created_at",
    default_direction: str = "desc",
) -> SortSpec:
    """Parse "field" / "-field"; unknown or empty falls back to the default."""
    descending = False
    name = (sort or "").strip()

    if name.startswith("-"):
        descending = True
        name = name[1:]

    if not name or name not in allowed_fields:
        return SortSpec(field=default, descending=default_direction.lower() == "desc")

    return SortSpec(field=name, descending=descending)


def apply_sort(
    stmt: Select,
    sort: Optional[str],
    allowed_fields: Mapping[str, ColumnElement],
    default: str = "created_at",
    default_direction: str = "desc",
    tie_breaker: Optional[ColumnElement] = None,
) -> Select:
    """Order a select by the requested field, optionally breaking ties."""
    parsed = parse_sort(sort, allowed_fields, default, default_direction)
    column = allowed_fields[parsed.field]

    order = [column.desc() if parsed.descending else column.asc()]
    if tie_breaker is not None:
        order.append(tie_breaker.desc() if parsed.descending else tie_breaker.asc())

    return stmt.order_by(*order)


@dataclass
class PaginationMeta:
    page: int
    limit: int
    total: int
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    pagination: PaginationMeta = field(default_factory=lambda: PaginationMeta(1, DEFAULT_LIMIT, 0, 0))


async def count_rows(session: AsyncSession, stmt: Select) -> int:
    """COUNT(*) over a select, ignoring its ordering and eager-load options."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    result = await session.execute(count_stmt)
    return int(result.scalar() or 0)


async def paginate(
    session: AsyncSession, stmt: Select, page: Optional[int] = 1, limit: Optional[int] = DEFAULT_LIMIT
) -> Page:
    """Run a select for one page and return items plus totals.

    Pages past the end give an empty item list with the real totals.
    """
    page = clamp_page(page)
    limit = clamp_limit(limit)

    total = await count_rows(session, stmt)

    result = await session.execute(stmt.offset((page - 1) * limit).limit(limit))
    items = list(result.scalars().all())

    return Page(
        items=items,
        pagination=PaginationMeta(
            page=page, limit=limit, total=total, total_pages=total_pages_for(total, limit)
        ),
    )
