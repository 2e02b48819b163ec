"""
User model for authentication.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import JSON, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel, TimestampMixin

if TYPE_CHECKING:
    from .domain import Domain
    from .note import Note
    from .refresh_token import RefreshToken
    from .tag import Tag

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


class User(TimestampMixin, BaseModel):
    """User account identified by email, with a unique public username."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(180), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    roles: Mapped[List[str]] = mapped_column(JSON, default=lambda: [ROLE_USER], nullable=False)

    # Relations are never loaded implicitly; repositories ask for what they need
    domains: Mapped[List["Domain"]] = relationship(
        "Domain", back_populates="owner", lazy="raise", passive_deletes=True
    )
    notes: Mapped[List["Note"]] = relationship(
        "Note", back_populates="author", lazy="raise", passive_deletes=True
    )
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", back_populates="owner", lazy="raise", passive_deletes=True
    )
    refresh_tokens: Mapped[List["RefreshToken"]] = relationship(
        "RefreshToken", back_populates="user", lazy="raise", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("length(username) <= 255", name="ck_users_username_len"),
        CheckConstraint("length(email) <= 180", name="ck_users_email_len"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"

    def get_roles(self) -> List[str]:
        """Roles granted to the user; every user has ROLE_USER."""
        roles = list(self.roles or [])
        if ROLE_USER not in roles:
            roles.append(ROLE_USER)
        return roles

    def has_role(self, role: str) -> bool:
        return role in self.get_roles()
