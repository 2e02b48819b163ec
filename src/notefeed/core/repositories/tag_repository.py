"""Tag repository for database operations."""

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tag import Tag, note_tags
from ..query import Page, apply_filters, apply_sort, paginate

TAG_FILTERS = {
    "search": Tag.name,
}

TAG_SORTS = {
    "created_at": Tag.created_at,
    "updated_at": Tag.updated_at,
    "name": Tag.name,
}


class TagRepository:
    """Repository for tags and the note_tags link table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_tag(self, tag_data: dict) -> Tag:
        """Create new tag."""
        tag = Tag(**tag_data)
        self.session.add(tag)
        await self.session.commit()
        await self.session.refresh(tag)
        return tag

    async def get_by_id_and_user(self, tag_id: int, user_id: int) -> Optional[Tag]:
        """Get tag by ID if owned by user."""
        stmt = select(Tag).where(and_(Tag.id == tag_id, Tag.user_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name_and_user(self, name: str, user_id: int) -> Optional[Tag]:
        """Exact, case-sensitive name lookup within one user's tags."""
        stmt = select(Tag).where(and_(Tag.name == name, Tag.user_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned_ids(self, tag_ids: Iterable[int], user_id: int) -> List[int]:
        """Subset of tag_ids that exist and belong to the user, in request order."""
        wanted = list(dict.fromkeys(tag_ids))
        if not wanted:
            return []
        stmt = select(Tag.id).where(and_(Tag.id.in_(wanted), Tag.user_id == user_id))
        result = await self.session.execute(stmt)
        owned = set(result.scalars())
        return [tag_id for tag_id in wanted if tag_id in owned]

    async def update_tag(self, tag: Tag, update_data: dict) -> Tag:
        """Apply changes to a loaded tag."""
        for key, value in update_data.items():
            setattr(tag, key, value)
        tag.touch()

        await self.session.commit()
        await self.session.refresh(tag)
        return tag

    async def delete_tag(self, tag: Tag) -> None:
        """Delete a tag and its note links; the notes stay."""
        await self.session.execute(delete(note_tags).where(note_tags.c.tag_id == tag.id))
        await self.session.delete(tag)
        await self.session.commit()

    async def list_user_tags(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> Page[Tag]:
        """List a user's tags."""
        stmt = select(Tag).where(Tag.user_id == user_id)
        stmt = apply_filters(stmt, filters or {}, TAG_FILTERS)
        stmt = apply_sort(stmt, sort, TAG_SORTS, tie_breaker=Tag.id)
        return await paginate(self.session, stmt, page, limit)

    # note_tags link table; callers commit

    async def link_note_tags(self, note_id: int, tag_ids: Iterable[int]) -> None:
        """Insert links for a note (tag_ids must already be ownership-checked)."""
        rows = [{"note_id": note_id, "tag_id": tag_id} for tag_id in dict.fromkeys(tag_ids)]
        if rows:
            await self.session.execute(insert(note_tags), rows)

    async def unlink_note_tags(self, note_id: int) -> None:
        """Remove every tag link of a note."""
        await self.session.execute(delete(note_tags).where(note_tags.c.note_id == note_id))
