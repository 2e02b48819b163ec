"""
Service layer interfaces and implementations.

Services hold the business rules and raise typed errors from
``notefeed.core.exceptions``; routers only translate HTTP in and out.
"""

from .interfaces import (
    IAuthService,
    IDomainService,
    IHealthService,
    INoteService,
    IRefreshTokenService,
    ISubscriptionService,
    ITagService,
)

from .auth_service import AuthResult, AuthService
from .domain_service import DomainService
from .health_service import HealthService
from .note_service import NoteService
from .refresh_token_service import RefreshTokenService
from .subscription_service import SubscriptionService
from .tag_service import TagService

__all__ = [
    # Interfaces
    "IAuthService",
    "IRefreshTokenService",
    "IDomainService",
    "ITagService",
    "INoteService",
    "ISubscriptionService",
    "IHealthService",

    # Implementations
    "AuthResult",
    "AuthService",
    "RefreshTokenService",
    "DomainService",
    "TagService",
    "NoteService",
    "SubscriptionService",
    "HealthService",
]
