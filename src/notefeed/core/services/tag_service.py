"""Tag service implementation."""

from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ConflictError, NotFoundError
from ..logging import get_logger
from ..models.tag import Tag
from ..repositories.tag_repository import TagRepository
from ..schemas.common import PaginatedResponse
from ..schemas.tags import TagCreate, TagResponse, TagUpdate
from .interfaces import ITagService

logger = get_logger("services.tags")

TAG_NOT_FOUND = "Tag not found"
TAG_EXISTS = "Tag with this name already exists"


class TagService(ITagService):
    """Tag service implementation.

    Names are unique per user and compared case-sensitively; two users may
    own tags with the same name.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tag_repo = TagRepository(session)

    async def create_tag(self, user_id: int, request: TagCreate) -> TagResponse:
        if await self.tag_repo.get_by_name_and_user(request.name, user_id):
            raise ConflictError(TAG_EXISTS)

        try:
            tag = await self.tag_repo.create_tag({"user_id": user_id, "name": request.name})
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(TAG_EXISTS)

        logger.info("Tag created", extra={"user_id": user_id, "tag_id": tag.id})
        return TagResponse.model_validate(tag)

    async def get_tag(self, user_id: int, tag_id: int) -> TagResponse:
        return TagResponse.model_validate(await self._get_owned(user_id, tag_id))

    async def update_tag(self, user_id: int, tag_id: int, request: TagUpdate) -> TagResponse:
        tag = await self._get_owned(user_id, tag_id)

        if request.name is not None and request.name != tag.name:
            existing = await self.tag_repo.get_by_name_and_user(request.name, user_id)
            if existing is not None and existing.id != tag.id:
                raise ConflictError(TAG_EXISTS)

        try:
            tag = await self.tag_repo.update_tag(tag, request.model_dump(exclude_none=True))
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(TAG_EXISTS)

        return TagResponse.model_validate(tag)

    async def delete_tag(self, user_id: int, tag_id: int) -> None:
        """Delete a tag; notes that carried it are kept."""
        tag = await self._get_owned(user_id, tag_id)
        await self.tag_repo.delete_tag(tag)
        logger.info("Tag deleted", extra={"user_id": user_id, "tag_id": tag_id})

    async def list_tags(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[TagResponse]:
        result = await self.tag_repo.list_user_tags(user_id, page, limit, filters, sort)
        return PaginatedResponse[TagResponse].from_page(result, TagResponse.model_validate)

    async def _get_owned(self, user_id: int, tag_id: int) -> Tag:
        tag = await self.tag_repo.get_by_id_and_user(tag_id, user_id)
        if tag is None:
            raise NotFoundError(TAG_NOT_FOUND)
        return tag
