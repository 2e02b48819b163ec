# Follower -> author edges between users
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .user import User


class Subscription(BaseModel):
    """Directed edge: subscriber follows author. Created or deleted, never updated."""

    __tablename__ = "subscriptions"

    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    subscriber: Mapped["User"] = relationship("User", foreign_keys=[subscriber_id], lazy="raise")
    author: Mapped["User"] = relationship("User", foreign_keys=[author_id], lazy="raise")

    __table_args__ = (
        UniqueConstraint("subscriber_id", "author_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> author_id", name="ck_subscriptions_not_self"),
        Index("idx_subscriptions_subscriber_id", "subscriber_id"),
        Index("idx_subscriptions_author_id", "author_id"),
    )

    def __repr__(self) -> str:
        return f"<Subscription(subscriber_id={self.subscriber_id}, author_id={self.author_id})>"
