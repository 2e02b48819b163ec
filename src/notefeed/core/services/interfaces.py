"""
Service interfaces for the NoteFeed application.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from ..models.refresh_token import RefreshToken
from ..schemas.auth import LoginRequest, RegisterRequest, UserResponse
from ..schemas.common import HealthCheckResponse, PaginatedResponse
from ..schemas.domains import DomainCreate, DomainResponse, DomainUpdate
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..schemas.tags import TagCreate, TagResponse, TagUpdate


class IRefreshTokenService(ABC):
    """Ledger of long-lived refresh tokens."""

    @abstractmethod
    async def issue(
        self, user_id: int, token: Optional[str] = None, expires_at: Optional[datetime] = None
    ) -> RefreshToken:
        """Persist a new valid token."""
        pass

    @abstractmethod
    async def find_valid(self, token: str) -> Optional[RefreshToken]:
        """Token row if unrevoked and unexpired, else None."""
        pass

    @abstractmethod
    async def revoke(self, token: str) -> None:
        """Revoke one token (idempotent)."""
        pass

    @abstractmethod
    async def revoke_all(self, user_id: int) -> int:
        """Revoke every token of a user."""
        pass

    @abstractmethod
    async def purge_expired(self) -> int:
        """Delete expired tokens."""
        pass

    @abstractmethod
    def expiration_window(self) -> timedelta:
        """Lifetime of newly issued tokens."""
        pass


class IAuthService(ABC):
    """Registration, login and session rotation."""

    @abstractmethod
    async def register(self, request: RegisterRequest):
        """Register new user and open a session."""
        pass

    @abstractmethod
    async def login(self, request: LoginRequest):
        """Login user and open a session."""
        pass

    @abstractmethod
    async def refresh(self, refresh_token: Optional[str]):
        """Rotate a refresh token into a new session."""
        pass

    @abstractmethod
    async def logout(self, refresh_token: Optional[str]) -> None:
        """End the session holding this refresh token."""
        pass

    @abstractmethod
    async def logout_all(self, user_id: int) -> int:
        """End every session of a user."""
        pass

    @abstractmethod
    async def get_current_user(self, user_id: int) -> UserResponse:
        """Get user by ID."""
        pass


class IDomainService(ABC):
    """Domain CRUD scoped to the owner."""

    @abstractmethod
    async def create_domain(self, user_id: int, request: DomainCreate) -> DomainResponse:
        pass

    @abstractmethod
    async def get_domain(self, user_id: int, domain_id: int) -> DomainResponse:
        pass

    @abstractmethod
    async def update_domain(
        self, user_id: int, domain_id: int, request: DomainUpdate
    ) -> DomainResponse:
        pass

    @abstractmethod
    async def delete_domain(self, user_id: int, domain_id: int) -> None:
        pass

    @abstractmethod
    async def list_domains(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[DomainResponse]:
        pass


class ITagService(ABC):
    """Tag CRUD scoped to the owner."""

    @abstractmethod
    async def create_tag(self, user_id: int, request: TagCreate) -> TagResponse:
        pass

    @abstractmethod
    async def get_tag(self, user_id: int, tag_id: int) -> TagResponse:
        pass

    @abstractmethod
    async def update_tag(self, user_id: int, tag_id: int, request: TagUpdate) -> TagResponse:
        pass

    @abstractmethod
    async def delete_tag(self, user_id: int, tag_id: int) -> None:
        pass

    @abstractmethod
    async def list_tags(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[TagResponse]:
        pass


class INoteService(ABC):
    """Note CRUD and feeds."""

    @abstractmethod
    async def create_note(self, user_id: int, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def get_note(self, user_id: int, note_id: int) -> NoteResponse:
        """Get one of the user's notes."""
        pass

    @abstractmethod
    async def update_note(self, user_id: int, note_id: int, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""
        pass

    @abstractmethod
    async def delete_note(self, user_id: int, note_id: int) -> None:
        """Delete note."""
        pass

    @abstractmethod
    async def list_own_notes(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[NoteResponse]:
        """Every note the user wrote."""
        pass

    @abstractmethod
    async def public_feed(
        self,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[NoteResponse]:
        """Public notes of all users."""
        pass

    @abstractmethod
    async def subscriber_feed(
        self,
        viewer_id: int,
        page: int = 1,
        limit: int = 20,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
    ) -> PaginatedResponse[NoteResponse]:
        """Subscriber-only notes of followed authors."""
        pass


class ISubscriptionService(ABC):
    """Follower graph."""

    @abstractmethod
    async def subscribe(self, subscriber_id: int, author_id: int) -> None:
        pass

    @abstractmethod
    async def unsubscribe(self, subscriber_id: int, author_id: int) -> None:
        pass

    @abstractmethod
    async def is_subscribed(self, subscriber_id: int, author_id: int) -> bool:
        pass

    @abstractmethod
    async def list_authors(
        self, subscriber_id: int, page: int = 1, limit: int = 20
    ) -> PaginatedResponse[UserResponse]:
        pass

    @abstractmethod
    async def list_subscribers(
        self, author_id: int, page: int = 1, limit: int = 20
    ) -> PaginatedResponse[UserResponse]:
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
