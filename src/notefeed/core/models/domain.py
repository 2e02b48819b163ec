# Domains: per-user subject areas that notes are filed under
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel, TimestampMixin

if TYPE_CHECKING:
    from .note import Note
    from .user import User


class Domain(TimestampMixin, BaseModel):
    """Named subject area owned by one user."""

    __tablename__ = "domains"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    owner: Mapped["User"] = relationship("User", back_populates="domains", lazy="raise")
    notes: Mapped[List["Note"]] = relationship(
        "Note", back_populates="domain", lazy="raise", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("length(name) <= 100", name="ck_domains_name_len"),
        CheckConstraint(
            "description IS NULL OR length(description) <= 1000", name="ck_domains_description_len"
        ),
        Index("idx_domains_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Domain(name='{self.name}', user_id={self.user_id})>"

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id
