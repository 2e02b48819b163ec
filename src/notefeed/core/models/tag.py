# Tag models for organizing notes
from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel, TimestampMixin

if TYPE_CHECKING:
    from .note import Note
    from .user import User


# Plain many-to-many link between notes and tags (no per-link data)
note_tags = Table(
    "note_tags",
    BaseModel.metadata,
    Column("note_id", Integer, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_note_tags_note_id", "note_id"),
    Index("idx_note_tags_tag_id", "tag_id"),
)


class Tag(TimestampMixin, BaseModel):
    """Label owned by one user; names are unique per owner, case-sensitive."""

    __tablename__ = "tags"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)

    owner: Mapped["User"] = relationship("User", back_populates="tags", lazy="raise")
    notes: Mapped[List["Note"]] = relationship(
        "Note",
        secondary=note_tags,
        back_populates="tags",
        lazy="raise",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_tags_user_name"),
        CheckConstraint("length(name) <= 50", name="ck_tags_name_len"),
        Index("idx_tags_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Tag(name='{self.name}')>"
