"""Domain repository for database operations."""

from typing import Any, Dict, Optional

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.domain import Domain
from ..models.note import Note
from ..models.tag import note_tags
from ..query import Page, apply_filters, apply_sort, contains, paginate

DOMAIN_FILTERS = {
    "is_public": Domain.is_public,
}

DOMAIN_SORTS = {
    "created_at": Domain.created_at,
    "updated_at": Domain.updated_at,
    "name": Domain.name,
}


class DomainRepository:
    """Repository for domain database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_domain(self, domain_data: dict) -> Domain:
        """Create new domain."""
        domain = Domain(**domain_data)
        self.session.add(domain)
        await self.session.commit()
        await self.session.refresh(domain)
        return domain

    async def get_by_id_and_user(self, domain_id: int, user_id: int) -> Optional[Domain]:
        """Get domain by ID if owned by user."""
        stmt = select(Domain).where(and_(Domain.id == domain_id, Domain.user_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_domain(self, domain: Domain, update_data: dict) -> Domain:
        """Apply changes to a loaded domain."""
        for key, value in update_data.items():
            setattr(domain, key, value)
        domain.touch()

        await self.session.commit()
        await self.session.refresh(domain)
        return domain

    async def delete_domain(self, domain: Domain) -> None:
        """Delete a domain together with its notes and their tag links."""
        note_ids = select(Note.id).where(Note.domain_id == domain.id)
        await self.session.execute(delete(note_tags).where(note_tags.c.note_id.in_(note_ids)))
        await self.session.execute(
            delete(Note)
            .where(Note.domain_id == domain.id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.delete(domain)
        await self.session.commit()

    async def list_user_domains(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> Page[Domain]:
        """List a user's domains; `search` matches name or description."""
        filters = dict(filters or {})
        stmt = select(Domain).where(Domain.user_id == user_id)

        search = filters.pop("search", None)
        if search:
            stmt = stmt.where(or_(contains(Domain.name, search), contains(Domain.description, search)))

        stmt = apply_filters(stmt, filters, DOMAIN_FILTERS)
        stmt = apply_sort(stmt, sort, DOMAIN_SORTS, tie_breaker=Domain.id)

        return await paginate(self.session, stmt, page, limit)
