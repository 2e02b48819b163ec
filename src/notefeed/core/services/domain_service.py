"""Domain service implementation."""

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..logging import get_logger
from ..models.domain import Domain
from ..repositories.domain_repository import DomainRepository
from ..schemas.common import PaginatedResponse
from ..schemas.domains import DomainCreate, DomainResponse, DomainUpdate
from .interfaces import IDomainService

logger = get_logger("services.domains")

DOMAIN_NOT_FOUND = "Domain not found"


class DomainService(IDomainService):
    """Domain service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.domain_repo = DomainRepository(session)

    async def create_domain(self, user_id: int, request: DomainCreate) -> DomainResponse:
        domain = await self.domain_repo.create_domain(
            {
                "user_id": user_id,
                "name": request.name,
                "description": request.description,
                "is_public": True if request.is_public is None else request.is_public,
            }
        )
        logger.info("Domain created", extra={"user_id": user_id, "domain_id": domain.id})
        return DomainResponse.model_validate(domain)

    async def get_domain(self, user_id: int, domain_id: int) -> DomainResponse:
        return DomainResponse.model_validate(await self._get_owned(user_id, domain_id))

    async def update_domain(
        self, user_id: int, domain_id: int, request: DomainUpdate
    ) -> DomainResponse:
        """Update only the fields present in the request."""
        domain = await self._get_owned(user_id, domain_id)
        domain = await self.domain_repo.update_domain(
            domain, request.model_dump(exclude_none=True)
        )
        return DomainResponse.model_validate(domain)

    async def delete_domain(self, user_id: int, domain_id: int) -> None:
        """Delete a domain together with its notes."""
        domain = await self._get_owned(user_id, domain_id)
        await self.domain_repo.delete_domain(domain)
        logger.info("Domain deleted", extra={"user_id": user_id, "domain_id": domain_id})

    async def list_domains(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[DomainResponse]:
        result = await self.domain_repo.list_user_domains(user_id, page, limit, filters, sort)
        return PaginatedResponse[DomainResponse].from_page(result, DomainResponse.model_validate)

    async def _get_owned(self, user_id: int, domain_id: int) -> Domain:
        domain = await self.domain_repo.get_by_id_and_user(domain_id, user_id)
        if domain is None:
            raise NotFoundError(DOMAIN_NOT_FOUND)
        return domain
