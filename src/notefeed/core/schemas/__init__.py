"""
Pydantic schemas for validating and documenting API requests and responses.

Request models carry the per-field error messages returned to clients;
response models define the JSON shapes of users, domains, tags, notes,
subscriptions and the shared pagination envelope.
"""

from .auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from .common import (
    ErrorResponse,
    HealthCheckResponse,
    PaginatedResponse,
    PaginationInfo,
    ValidationErrorResponse,
)
from .domains import DomainCreate, DomainResponse, DomainUpdate
from .notes import NoteAuthor, NoteCreate, NoteResponse, NoteTag, NoteUpdate
from .subscriptions import SubscribeRequest, SubscriptionStatusResponse
from .tags import TagCreate, TagResponse, TagUpdate

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "UserResponse",
    # Domain schemas
    "DomainCreate",
    "DomainUpdate",
    "DomainResponse",
    # Tag schemas
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteTag",
    "NoteAuthor",
    # Subscription schemas
    "SubscribeRequest",
    "SubscriptionStatusResponse",
    # Common schemas
    "PaginatedResponse",
    "PaginationInfo",
    "ErrorResponse",
    "ValidationErrorResponse",
    "HealthCheckResponse",
]
