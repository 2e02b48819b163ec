"""Tags API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import PaginatedResponse
from ..core.schemas.tags import TagCreate, TagResponse, TagUpdate
from ..core.services import TagService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .params import ListParams, ResourceId, compact, list_params

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=PaginatedResponse[TagResponse])
async def list_tags(
    params: ListParams = Depends(list_params),
    search: Optional[str] = Query(None, description="Substring of the tag name"),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the current user's tags."""
    tag_service = TagService(session)
    return await tag_service.list_tags(
        current_user_id, params.page, params.limit, compact({"search": search}), params.sort
    )


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: TagCreate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    tag_service = TagService(session)
    return await tag_service.create_tag(current_user_id, request)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    tag_service = TagService(session)
    return await tag_service.get_tag(current_user_id, tag_id)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: ResourceId,
    request: TagUpdate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Rename a tag."""
    tag_service = TagService(session)
    return await tag_service.update_tag(current_user_id, tag_id, request)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a tag; notes keep existing without it."""
    tag_service = TagService(session)
    await tag_service.delete_tag(current_user_id, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
