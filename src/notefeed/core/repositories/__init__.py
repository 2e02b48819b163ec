"""Repository layer for data access."""

from .domain_repository import DomainRepository
from .note_repository import NoteRepository
from .refresh_token_repository import RefreshTokenRepository
from .subscription_repository import SubscriptionRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "DomainRepository",
    "TagRepository",
    "NoteRepository",
    "SubscriptionRepository",
    "RefreshTokenRepository",
]
