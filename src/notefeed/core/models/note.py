# Note model for user content
from enum import Enum
from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel, TimestampMixin
from .tag import note_tags

if TYPE_CHECKING:
    from .domain import Domain
    from .tag import Tag
    from .user import User


class AccessType(str, Enum):
    """Who may read a note through the feeds."""

    PUBLIC = "public"
    SUBSCRIBERS = "subscribers"
    PRIVATE = "private"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class Note(TimestampMixin, BaseModel):
    """Note authored by a user and filed under one of the author's domains."""

    __tablename__ = "notes"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    domain_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("domains.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    access_type: Mapped[str] = mapped_column(
        String(20), default=AccessType.PUBLIC.value, nullable=False
    )

    # relationships, loaded explicitly with selectinload() by the repository
    author: Mapped["User"] = relationship("User", back_populates="notes", lazy="raise")
    domain: Mapped["Domain"] = relationship("Domain", back_populates="notes", lazy="raise")
    tags: Mapped[List["Tag"]] = relationship(
        "Tag",
        secondary=note_tags,
        back_populates="notes",
        lazy="raise",
        passive_deletes=True,
        order_by="Tag.id",
    )

    __table_args__ = (
        CheckConstraint("length(title) <= 255", name="ck_notes_title_len"),
        CheckConstraint(
            "access_type IN ('public', 'subscribers', 'private')", name="ck_notes_access_type"
        ),
        Index("idx_notes_user_id", "user_id"),
        Index("idx_notes_domain_id", "domain_id"),
        Index("idx_notes_access_type_created", "access_type", "created_at"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', user_id={self.user_id})>"

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    @property
    def is_public(self) -> bool:
        return self.access_type == AccessType.PUBLIC.value
