"""Domains API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import PaginatedResponse
from ..core.schemas.domains import DomainCreate, DomainResponse, DomainUpdate
from ..core.services import DomainService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .params import ListParams, ResourceId, compact, list_params, parse_bool

router = APIRouter(prefix="/domains", tags=["domains"])


@router.get("", response_model=PaginatedResponse[DomainResponse])
async def list_domains(
    params: ListParams = Depends(list_params),
    is_public: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches name or description"),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the current user's domains."""
    filters = compact({"is_public": parse_bool(is_public), "search": search})
    domain_service = DomainService(session)
    return await domain_service.list_domains(
        current_user_id, params.page, params.limit, filters, params.sort
    )


@router.post("", response_model=DomainResponse, status_code=status.HTTP_201_CREATED)
async def create_domain(
    request: DomainCreate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a domain."""
    domain_service = DomainService(session)
    return await domain_service.create_domain(current_user_id, request)


@router.get("/{domain_id}", response_model=DomainResponse)
async def get_domain(
    domain_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    domain_service = DomainService(session)
    return await domain_service.get_domain(current_user_id, domain_id)


@router.put("/{domain_id}", response_model=DomainResponse)
async def update_domain(
    domain_id: ResourceId,
    request: DomainUpdate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    domain_service = DomainService(session)
    return await domain_service.update_domain(current_user_id, domain_id, request)


@router.delete("/{domain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_domain(
    domain_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a domain and every note in it."""
    domain_service = DomainService(session)
    await domain_service.delete_domain(current_user_id, domain_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
