"""Subscriptions API endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import UserResponse
from ..core.schemas.common import PaginatedResponse
from ..core.schemas.subscriptions import SubscribeRequest, SubscriptionStatusResponse
from ..core.services import SubscriptionService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .params import ListParams, ResourceId, list_params

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("/authors", response_model=PaginatedResponse[UserResponse])
async def list_authors(
    params: ListParams = Depends(list_params),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Users the current user follows."""
    subscription_service = SubscriptionService(session)
    return await subscription_service.list_authors(current_user_id, params.page, params.limit)


@router.get("/subscribers", response_model=PaginatedResponse[UserResponse])
async def list_subscribers(
    params: ListParams = Depends(list_params),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Users following the current user."""
    subscription_service = SubscriptionService(session)
    return await subscription_service.list_subscribers(current_user_id, params.page, params.limit)


@router.get("/{author_id}", response_model=SubscriptionStatusResponse)
async def subscription_status(
    author_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Whether the current user follows the author."""
    subscription_service = SubscriptionService(session)
    subscribed = await subscription_service.is_subscribed(current_user_id, author_id)
    return SubscriptionStatusResponse(author_id=author_id, subscribed=subscribed)


@router.post("", status_code=status.HTTP_204_NO_CONTENT)
async def subscribe(
    request: SubscribeRequest,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Follow an author."""
    subscription_service = SubscriptionService(session)
    await subscription_service.subscribe(current_user_id, request.author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(
    author_id: ResourceId,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Stop following an author."""
    subscription_service = SubscriptionService(session)
    await subscription_service.unsubscribe(current_user_id, author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
