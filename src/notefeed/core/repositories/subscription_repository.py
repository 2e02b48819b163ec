"""Subscription repository for database operations."""

from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.subscription import Subscription
from ..models.user import User
from ..query import Page, paginate


class SubscriptionRepository:
    """Repository for follower -> author edges."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_subscription(self, subscriber_id: int, author_id: int) -> Subscription:
        """Create new edge."""
        subscription = Subscription(subscriber_id=subscriber_id, author_id=author_id)
        self.session.add(subscription)
        await self.session.commit()
        await self.session.refresh(subscription)
        return subscription

    async def get_subscription(self, subscriber_id: int, author_id: int) -> Optional[Subscription]:
        """Get the edge for an ordered pair."""
        stmt = select(Subscription).where(
            and_(Subscription.subscriber_id == subscriber_id, Subscription.author_id == author_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def subscription_exists(self, subscriber_id: int, author_id: int) -> bool:
        """Existence check without loading the row."""
        stmt = select(func.count(Subscription.id)).where(
            and_(Subscription.subscriber_id == subscriber_id, Subscription.author_id == author_id)
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def delete_subscription(self, subscription: Subscription) -> None:
        """Delete an edge."""
        await self.session.delete(subscription)
        await self.session.commit()

    async def list_subscribed_authors(
        self, subscriber_id: int, page: int = 1, limit: int = 20
    ) -> Page[User]:
        """Users the subscriber follows, by user ID ascending."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.author_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(User.id.asc())
        )
        return await paginate(self.session, stmt, page, limit)

    async def list_subscribers(self, author_id: int, page: int = 1, limit: int = 20) -> Page[User]:
        """Users following the author, by user ID ascending."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.author_id == author_id)
            .order_by(User.id.asc())
        )
        return await paginate(self.session, stmt, page, limit)
