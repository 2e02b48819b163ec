"""
Database models for the NoteFeed application.

Models included:
    - User: account with email/username login and role labels
    - Domain: per-user subject area notes are filed under
    - Note: authored content with an access scope
    - Tag / note_tags: per-user labels and their note links
    - Subscription: follower -> author edges
    - RefreshToken: long-lived session tokens
"""

from .base import BaseModel
from .domain import Domain
from .note import AccessType, Note
from .refresh_token import RefreshToken
from .subscription import Subscription
from .tag import Tag, note_tags
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "BaseModel",
    "User",
    "ROLE_USER",
    "ROLE_ADMIN",
    "Domain",
    "Note",
    "AccessType",
    "Tag",
    "note_tags",
    "Subscription",
    "RefreshToken",
]
