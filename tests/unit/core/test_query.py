"""Tests for filtering, sorting and pagination helpers."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from notefeed.core.models import Domain, Note
from notefeed.core.query import (
    MAX_PAGE,
    apply_filters,
    apply_sort,
    clamp_limit,
    clamp_page,
    escape_like,
    paginate,
    parse_sort,
    total_pages_for,
)

NOTE_FIELDS = {
    "domain_id": Note.domain_id,
    "access_type": Note.access_type,
    "from_date": Note.created_at,
    "to_date": Note.created_at,
    "title_search": Note.title,
}
SORTS = {"created_at": Note.created_at, "title": Note.title}


def sql(stmt) -> str:
    return str(stmt.compile()).replace("\n", " ")


class TestClamping:
    def test_page_never_below_one(self):
        assert clamp_page(None) == 1
        assert clamp_page(0) == 1
        assert clamp_page(-4) == 1
        assert clamp_page(3) == 3

    def test_page_capped_to_storable_offset(self):
        assert clamp_page(10**20) == MAX_PAGE == 2**31 - 1

    def test_limit_bounds(self):
        assert clamp_limit(None) == 20
        assert clamp_limit(0) == 1
        assert clamp_limit(-10) == 1
        assert clamp_limit(500) == 100
        assert clamp_limit(35) == 35

    def test_limit_respects_lower_configured_maximum(self):
        assert clamp_limit(80, maximum=50) == 50
        # configuration cannot raise the hard cap
        assert clamp_limit(500, maximum=1000) == 100

    def test_total_pages(self):
        assert total_pages_for(0, 20) == 0
        assert total_pages_for(1, 20) == 1
        assert total_pages_for(40, 20) == 2
        assert total_pages_for(41, 20) == 3


class TestApplyFilters:
    def test_unknown_keys_and_empty_values_are_ignored(self):
        base = select(Note)
        stmt = apply_filters(base, {"bogus": 1, "domain_id": None, "access_type": ""}, NOTE_FIELDS)
        assert "WHERE" not in sql(stmt)

    def test_scalar_is_equality(self):
        stmt = apply_filters(select(Note), {"domain_id": 3}, NOTE_FIELDS)
        assert "notes.domain_id = :domain_id_1" in sql(stmt)

    def test_list_becomes_in_clause(self):
        stmt = apply_filters(select(Note), {"domain_id": [1, 2]}, NOTE_FIELDS)
        assert "notes.domain_id IN" in sql(stmt)

    def test_empty_list_is_ignored(self):
        stmt = apply_filters(select(Note), {"domain_id": []}, NOTE_FIELDS)
        assert "WHERE" not in sql(stmt)

    def test_range_keys(self):
        now = datetime.now(timezone.utc)
        stmt = apply_filters(select(Note), {"from_date": now, "to_date": now}, NOTE_FIELDS)
        compiled = sql(stmt)
        assert "notes.created_at >=" in compiled
        assert "notes.created_at <=" in compiled

    def test_search_key_uses_case_insensitive_like(self):
        stmt = apply_filters(select(Note), {"title_search": "verb"}, NOTE_FIELDS)
        assert "lower(notes.title) LIKE lower(" in sql(stmt)


class TestSorting:
    def test_parse_sort_descending_prefix(self):
        parsed = parse_sort("-title", SORTS)
        assert parsed.field == "title"
        assert parsed.descending is True

    def test_parse_sort_ascending(self):
        parsed = parse_sort("title", SORTS)
        assert parsed.field == "title"
        assert parsed.descending is False

    @pytest.mark.parametrize("value", [None, "", "-", "password_hash", "-bogus"])
    def test_unknown_falls_back_to_default(self, value):
        spec = parse_sort(value, SORTS)
        assert spec.field == "created_at"
        assert spec.descending is True

    def test_tie_breaker_follows_direction(self):
        stmt = apply_sort(select(Note), "-title", SORTS, tie_breaker=Note.id)
        assert "ORDER BY notes.title DESC, notes.id DESC" in sql(stmt)

        stmt = apply_sort(select(Note), "title", SORTS, tie_breaker=Note.id)
        assert "ORDER BY notes.title ASC, notes.id ASC" in sql(stmt)


def test_escape_like_neutralizes_wildcards():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


@pytest.mark.asyncio
async def test_paginate_reports_totals_and_handles_out_of_range(test_session, make_user):
    user = await make_user()
    for i in range(5):
        test_session.add(Domain(user_id=user.id, name=f"d{i}"))
    await test_session.commit()

    stmt = select(Domain).order_by(Domain.id)

    first = await paginate(test_session, stmt, page=1, limit=2)
    assert [d.name for d in first.items] == ["d0", "d1"]
    assert first.pagination.to_dict() == {"page": 1, "limit": 2, "total": 5, "total_pages": 3}

    last = await paginate(test_session, stmt, page=3, limit=2)
    assert [d.name for d in last.items] == ["d4"]

    beyond = await paginate(test_session, stmt, page=9, limit=2)
    assert beyond.items == []
    assert beyond.pagination.total == 5
    assert beyond.pagination.total_pages == 3


@pytest.mark.asyncio
async def test_search_matches_wildcards_literally(test_session, make_user):
    user = await make_user()
    test_session.add_all(
        [Domain(user_id=user.id, name="100% done"), Domain(user_id=user.id, name="1000 done")]
    )
    await test_session.commit()

    stmt = apply_filters(select(Domain), {"search": "0%"}, {"search": Domain.name})
    result = await paginate(test_session, stmt)
    assert [d.name for d in result.items] == ["100% done"]
