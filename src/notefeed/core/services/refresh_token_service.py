"""Refresh token ledger service."""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import generate_refresh_token
from ..logging import get_logger, mask_token
from ..models.base import utcnow
from ..models.refresh_token import RefreshToken
from ..repositories.refresh_token_repository import RefreshTokenRepository
from .interfaces import IRefreshTokenService

logger = get_logger("services.refresh_tokens")


class RefreshTokenService(IRefreshTokenService):
    """Issues, validates and revokes refresh tokens.

    A token is valid while it is unrevoked and unexpired. Revocation is
    permanent; a user may hold any number of valid tokens at once (one per
    device or browser session).
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.token_repo = RefreshTokenRepository(session)
        self.settings = get_settings()

    def expiration_window(self) -> timedelta:
        return timedelta(days=self.settings.refresh_token_expire_days)

    def expiration_date(self) -> datetime:
        """Expiry for a token issued now."""
        return utcnow() + self.expiration_window()

    async def issue(
        self, user_id: int, token: Optional[str] = None, expires_at: Optional[datetime] = None
    ) -> RefreshToken:
        refresh_token = await self.token_repo.create_token(
            user_id=user_id,
            token=token or generate_refresh_token(),
            expires_at=expires_at or self.expiration_date(),
        )
        logger.debug(
            "Refresh token issued",
            extra={"user_id": user_id, "token": mask_token(refresh_token.token)},
        )
        return refresh_token

    async def find_valid(self, token: str) -> Optional[RefreshToken]:
        if not token:
            return None
        return await self.token_repo.find_valid_token(token)

    async def consume(self, token: str) -> Optional[RefreshToken]:
        """Validate and revoke in one step, for rotation.

        The revoke is a conditional update, so two requests racing with the
        same token cannot both succeed.
        """
        refresh_token = await self.find_valid(token)
        if refresh_token is None:
            return None
        if not await self.token_repo.revoke_if_active(token):
            return None
        return refresh_token

    async def revoke(self, token: str) -> None:
        if not token:
            return
        refresh_token = await self.token_repo.get_by_token(token)
        if refresh_token is None:
            return
        await self.token_repo.revoke_token(refresh_token)
        logger.info(
            "Refresh token revoked",
            extra={"user_id": refresh_token.user_id, "token": mask_token(token)},
        )

    async def revoke_all(self, user_id: int) -> int:
        count = await self.token_repo.revoke_user_tokens(user_id)
        logger.info("Revoked all refresh tokens", extra={"user_id": user_id, "count": count})
        return count

    async def purge_expired(self) -> int:
        count = await self.token_repo.delete_expired_tokens()
        logger.info("Purged expired refresh tokens", extra={"count": count})
        return count
