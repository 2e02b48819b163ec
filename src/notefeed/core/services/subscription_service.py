"""Subscription service implementation."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ConflictError, NotFoundError
from ..logging import get_logger
from ..repositories.subscription_repository import SubscriptionRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import UserResponse
from ..schemas.common import PaginatedResponse
from .interfaces import ISubscriptionService

logger = get_logger("services.subscriptions")

AUTHOR_NOT_FOUND = "Author not found"
SELF_SUBSCRIPTION = "Cannot subscribe to yourself"
ALREADY_SUBSCRIBED = "Already subscribed to this user"
SUBSCRIPTION_NOT_FOUND = "Subscription not found"


class SubscriptionService(ISubscriptionService):
    """Directed follower -> author edges between users."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.subscription_repo = SubscriptionRepository(session)
        self.user_repo = UserRepository(session)

    async def subscribe(self, subscriber_id: int, author_id: int) -> None:
        if subscriber_id == author_id:
            raise ConflictError(SELF_SUBSCRIPTION)

        if await self.user_repo.get_by_id(author_id) is None:
            raise NotFoundError(AUTHOR_NOT_FOUND)

        if await self.subscription_repo.subscription_exists(subscriber_id, author_id):
            raise ConflictError(ALREADY_SUBSCRIBED)

        try:
            await self.subscription_repo.create_subscription(subscriber_id, author_id)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(ALREADY_SUBSCRIBED)

        logger.info(
            "Subscribed", extra={"subscriber_id": subscriber_id, "author_id": author_id}
        )

    async def unsubscribe(self, subscriber_id: int, author_id: int) -> None:
        subscription = await self.subscription_repo.get_subscription(subscriber_id, author_id)
        if subscription is None:
            raise NotFoundError(SUBSCRIPTION_NOT_FOUND)

        await self.subscription_repo.delete_subscription(subscription)
        logger.info(
            "Unsubscribed", extra={"subscriber_id": subscriber_id, "author_id": author_id}
        )

    async def is_subscribed(self, subscriber_id: int, author_id: int) -> bool:
        return await self.subscription_repo.subscription_exists(subscriber_id, author_id)

    async def list_authors(
        self, subscriber_id: int, page: int = 1, limit: int = 20
    ) -> PaginatedResponse[UserResponse]:
        """Users the subscriber follows."""
        result = await self.subscription_repo.list_subscribed_authors(subscriber_id, page, limit)
        return PaginatedResponse[UserResponse].from_page(result, UserResponse.model_validate)

    async def list_subscribers(
        self, author_id: int, page: int = 1, limit: int = 20
    ) -> PaginatedResponse[UserResponse]:
        """Users following the author."""
        result = await self.subscription_repo.list_subscribers(author_id, page, limit)
        return PaginatedResponse[UserResponse].from_page(result, UserResponse.model_validate)
