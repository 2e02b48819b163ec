"""Notes API endpoints: the author's notes and the two feeds."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import PaginatedResponse
from ..core.schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .params import ListParams, ResourceId, compact, list_params, parse_datetime, parse_int

router = APIRouter(prefix="/notes", tags=["notes"])

NotePage = PaginatedResponse[NoteResponse]


# feed routes are declared before /{note_id} so "feed" is never taken for an ID


@router.get("/feed", response_model=NotePage)
async def public_feed(
    params: ListParams = Depends(list_params),
    domain_id: Optional[str] = Query(None),
    author_id: Optional[str] = Query(None),
    tag_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches title or content"),
    from_date: Optional[str] = Query(None),
    to_date: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """Public notes from every author; no login required."""
    filters = compact(
        {
            "domain_id": parse_int(domain_id),
            "author_id": parse_int(author_id),
            "tag_id": parse_int(tag_id),
            "search": search,
            "from_date": parse_datetime(from_date),
            "to_date": parse_datetime(to_date),
        }
    )
    note_service = NoteService(session)
    return await note_service.public_feed(params.page, params.limit, filters, params.sort)


@router.get("/feed/subscribers", response_model=NotePage)
async def subscriber_feed(
    params: ListParams = Depends(list_params),
    domain_id: Optional[str] = Query(None),
    author_id: Optional[str] = Query(None),
    tag_id: Optional[str] = Query(None),
    from_date: Optional[str] = Query(None),
    to_date: Optional[str] = Query(None),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Subscriber-only notes from the authors the current user follows."""
    filters = compact(
        {
            "domain_id": parse_int(domain_id),
            "author_id": parse_int(author_id),
            "tag_id": parse_int(tag_id),
            "from_date": parse_datetime(from_date),
            "to_date": parse_datetime(to_date),
        }
    )
    note_service = NoteService(session)
    return await note_service.subscriber_feed(
        current_user_id, params.page, params.limit, filters, params.sort
    )


@router.get("", response_model=NotePage)
async def list_notes(
    params: ListParams = Depends(list_params),
    domain_id: Optional[str] = Query(None),
    access_type: Optional[str] = Query(None),
    tag_id: Optional[str] = Query(None),
    from_date: Optional[str] = Query(None),
    to_date: Optional[str] = Query(None),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List every note of the current user, whatever its access type."""
    filters = compact(
        {
            "domain_id": parse_int(domain_id),
            "access_type": access_type,
            "tag_id": parse_int(tag_id),
            "from_date": parse_datetime(from_date),
            "to_date": parse_datetime(to_date),
        }
    )
    note_service = NoteService(session)
    return await note_service.list_own_notes(
        current_user_id, params.page, params.limit, filters, params.sort
    )


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    return await note_service.create_note(current_user_id, request)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get one of the current user's notes."""
    note_service = NoteService(session)
    return await note_service.get_note(current_user_id, note_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: ResourceId,
    request: NoteUpdate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note."""
    note_service = NoteService(session)
    return await note_service.update_note(current_user_id, note_id, request)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    await note_service.delete_note(current_user_id, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
