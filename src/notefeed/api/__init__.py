"""API routers for NoteFeed."""

from .auth import router as auth_router
from .domains import router as domains_router
from .health import router as health_router
from .notes import router as notes_router
from .subscriptions import router as subscriptions_router
from .tags import router as tags_router

__all__ = [
    "auth_router",
    "domains_router",
    "tags_router",
    "notes_router",
    "subscriptions_router",
    "health_router",
]
