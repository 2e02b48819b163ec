"""Note service implementation."""

from typing import Any, Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..logging import get_logger
from ..models.note import AccessType, Note
from ..query import Page
from ..repositories.domain_repository import DomainRepository
from ..repositories.note_repository import NoteRepository
from ..repositories.tag_repository import TagRepository
from ..schemas.common import PaginatedResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = get_logger("services.notes")

NOTE_NOT_FOUND = "Note not found"
DOMAIN_NOT_FOUND = "Domain not found"


class NoteService(INoteService):
    """Note CRUD for authors, plus the three feeds.

    Who sees what:
    - the author sees every own note through the personal list;
    - ``public`` notes appear in the public feed, for anyone;
    - ``subscribers`` notes appear in the subscriber feed of users who
      follow the author;
    - ``private`` notes appear in no feed.
    A single note can only be fetched by its author.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.domain_repo = DomainRepository(session)
        self.tag_repo = TagRepository(session)

    async def create_note(self, user_id: int, request: NoteCreate) -> NoteResponse:
        """Create new note in one of the author's domains."""
        await self._check_domain(user_id, request.domain_id)
        tag_ids = await self._owned_tag_ids(user_id, request.tag_ids or [])

        note = await self.note_repo.add_note(
            {
                "user_id": user_id,
                "domain_id": request.domain_id,
                "title": request.title,
                "content": request.content,
                "access_type": request.access_type or AccessType.PUBLIC.value,
            }
        )
        await self.tag_repo.link_note_tags(note.id, tag_ids)
        await self.session.commit()

        logger.info(
            "Note created",
            extra={"user_id": user_id, "note_id": note.id, "access_type": note.access_type},
        )
        return await self._to_response(note.id)

    async def get_note(self, user_id: int, note_id: int) -> NoteResponse:
        """Get note by ID; other users' notes are reported as missing."""
        note = await self._get_owned(user_id, note_id)
        return NoteResponse.from_note(note)

    async def update_note(self, user_id: int, note_id: int, request: NoteUpdate) -> NoteResponse:
        """Apply the fields present in the request.

        ``tag_ids`` replaces the whole tag set; foreign ids are dropped.
        """
        note = await self._get_owned(user_id, note_id)

        if request.domain_id is not None:
            await self._check_domain(user_id, request.domain_id)
            note.domain_id = request.domain_id
        if request.title is not None:
            note.title = request.title
        if request.content is not None:
            note.content = request.content
        if request.access_type is not None:
            note.access_type = request.access_type

        if request.tag_ids is not None:
            tag_ids = await self._owned_tag_ids(user_id, request.tag_ids)
            await self.tag_repo.unlink_note_tags(note.id)
            await self.tag_repo.link_note_tags(note.id, tag_ids)

        # the row itself may be unchanged when only tags moved
        note.touch()
        await self.session.commit()

        return await self._to_response(note.id)

    async def delete_note(self, user_id: int, note_id: int) -> None:
        """Delete note; its tags and domain stay."""
        note = await self._get_owned(user_id, note_id)
        await self.note_repo.delete_note(note)
        logger.info("Note deleted", extra={"user_id": user_id, "note_id": note_id})

    async def list_own_notes(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[NoteResponse]:
        result = await self.note_repo.list_user_notes(user_id, page, limit, filters, sort)
        return self._to_page(result)

    async def public_feed(
        self,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[NoteResponse]:
        result = await self.note_repo.list_public_notes(page, limit, filters, sort)
        return self._to_page(result)

    async def subscriber_feed(
        self,
        viewer_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[NoteResponse]:
        result = await self.note_repo.list_subscriber_notes(viewer_id, page, limit, filters, sort)
        return self._to_page(result)

    async def _get_owned(self, user_id: int, note_id: int) -> Note:
        note = await self.note_repo.get_by_id_and_user(note_id, user_id)
        if note is None:
            raise NotFoundError(NOTE_NOT_FOUND)
        return note

    async def _check_domain(self, user_id: int, domain_id: int) -> None:
        if await self.domain_repo.get_by_id_and_user(domain_id, user_id) is None:
            raise NotFoundError(DOMAIN_NOT_FOUND)

    async def _owned_tag_ids(self, user_id: int, tag_ids: Iterable[int]):
        owned = await self.tag_repo.get_owned_ids(tag_ids, user_id)
        dropped = set(tag_ids) - set(owned)
        if dropped:
            logger.debug(
                "Ignoring tags not owned by author",
                extra={"user_id": user_id, "tag_ids": sorted(dropped)},
            )
        return owned

    async def _to_response(self, note_id: int) -> NoteResponse:
        note = await self.note_repo.get_by_id_with_tags(note_id)
        return NoteResponse.from_note(note)

    @staticmethod
    def _to_page(result: Page[Note]) -> PaginatedResponse[NoteResponse]:
        return PaginatedResponse[NoteResponse].from_page(result, NoteResponse.from_note)
