"""Note repository: storage for notes and the three feed queries."""

from typing import Any, Dict, Optional

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.note import AccessType, Note
from ..models.subscription import Subscription
from ..models.tag import note_tags
from ..query import Page, apply_filters, apply_sort, contains, paginate

NOTE_SORTS = {
    "created_at": Note.created_at,
    "updated_at": Note.updated_at,
    "title": Note.title,
}

OWN_NOTE_FILTERS = {
    "domain_id": Note.domain_id,
    "access_type": Note.access_type,
    "from_date": Note.created_at,
    "to_date": Note.created_at,
}

FEED_FILTERS = {
    "domain_id": Note.domain_id,
    "author_id": Note.user_id,
    "from_date": Note.created_at,
    "to_date": Note.created_at,
}


def with_relations(stmt):
    """Eager-load everything a serialized note needs."""
    return stmt.options(
        selectinload(Note.tags),
        selectinload(Note.domain),
        selectinload(Note.author),
    )


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_note(self, note_data: dict) -> Note:
        """Stage a new note and flush to get its ID (caller commits)."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.flush()
        return note

    async def get_by_id_with_tags(self, note_id: int) -> Optional[Note]:
        """Get note by ID with tags, domain and author, bypassing stale identity-map state."""
        stmt = (
            with_relations(select(Note))
            .where(Note.id == note_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_and_user(self, note_id: int, user_id: int) -> Optional[Note]:
        """Get note by ID if authored by user."""
        stmt = (
            with_relations(select(Note))
            .where(and_(Note.id == note_id, Note.user_id == user_id))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_note(self, note: Note) -> None:
        """Delete a note and its tag links; tags and domain are untouched."""
        await self.session.execute(delete(note_tags).where(note_tags.c.note_id == note.id))
        await self.session.execute(
            delete(Note).where(Note.id == note.id).execution_options(synchronize_session="fetch")
        )
        await self.session.commit()

    async def list_user_notes(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> Page[Note]:
        """All notes authored by the user, whatever their access type."""
        stmt = select(Note).where(Note.user_id == user_id)
        return await self._run_feed(stmt, filters, OWN_NOTE_FILTERS, page, limit, sort)

    async def list_public_notes(
        self,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> Page[Note]:
        """Public notes of every author; `search` matches title or content."""
        filters = dict(filters or {})
        stmt = select(Note).where(Note.access_type == AccessType.PUBLIC.value)

        search = filters.pop("search", None)
        if search:
            stmt = stmt.where(or_(contains(Note.title, search), contains(Note.content, search)))

        return await self._run_feed(stmt, filters, FEED_FILTERS, page, limit, sort)

    async def list_subscriber_notes(
        self,
        subscriber_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> Page[Note]:
        """Subscriber-only notes of the authors the viewer currently follows."""
        followed = select(Subscription.author_id).where(Subscription.subscriber_id == subscriber_id)
        stmt = select(Note).where(
            and_(
                Note.access_type == AccessType.SUBSCRIBERS.value,
                Note.user_id.in_(followed),
            )
        )
        return await self._run_feed(stmt, filters, FEED_FILTERS, page, limit, sort)

    async def _run_feed(self, stmt, filters, allowed, page, limit, sort) -> Page[Note]:
        filters = dict(filters or {})

        # tag filter goes through the link table so a note never appears twice
        tag_id = filters.pop("tag_id", None)
        if tag_id is not None:
            tagged = select(note_tags.c.note_id).where(note_tags.c.tag_id == tag_id)
            stmt = stmt.where(Note.id.in_(tagged))

        stmt = apply_filters(stmt, filters, allowed)
        stmt = apply_sort(stmt, sort, NOTE_SORTS, tie_breaker=Note.id)

        return await paginate(self.session, with_relations(stmt), page, limit)
