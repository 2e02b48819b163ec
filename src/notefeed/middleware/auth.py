"""Authentication dependencies."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.exceptions import UnauthorizedError
from ..security import get_user_id_from_token


class JWTBearer(HTTPBearer):
    """Bearer token authentication resolving to a user ID."""

    def __init__(self):
        # HTTPBearer's own errors are 403s; we report 401 ourselves
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> int:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        user_id = None
        if credentials and credentials.scheme.lower() == "bearer":
            user_id = get_user_id_from_token(credentials.credentials)

        if user_id is None:
            raise UnauthorizedError()

        return user_id


# Dependency for getting current user ID from JWT
async def get_current_user_id(user_id: int = Depends(JWTBearer())) -> int:
    """Get current authenticated user ID."""
    return user_id
