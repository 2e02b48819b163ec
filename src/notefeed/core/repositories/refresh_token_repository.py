"""Refresh token repository for database operations."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.refresh_token import RefreshToken


class RefreshTokenRepository:
    """Repository for refresh token database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_token(self, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
        """Persist a new, unrevoked refresh token."""
        refresh_token = RefreshToken(
            token=token, user_id=user_id, expires_at=expires_at, is_revoked=False
        )
        self.session.add(refresh_token)
        await self.session.commit()
        await self.session.refresh(refresh_token)
        return refresh_token

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """Get refresh token by token string, whatever its state."""
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_valid_token(self, token: str) -> Optional[RefreshToken]:
        """Token row only if it is unrevoked and unexpired."""
        refresh_token = await self.get_by_token(token)
        if refresh_token is None or not refresh_token.is_valid:
            return None
        return refresh_token

    async def revoke_token(self, refresh_token: RefreshToken) -> None:
        """Mark one token revoked (no-op if it already is)."""
        if refresh_token.is_revoked:
            return
        refresh_token.revoke()
        await self.session.commit()

    async def revoke_if_active(self, token: str) -> bool:
        """Atomically revoke an unrevoked token; False if it was already revoked or unknown."""
        stmt = (
            update(RefreshToken)
            .where(and_(RefreshToken.token == token, RefreshToken.is_revoked.is_(False)))
            .values(is_revoked=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return (result.rowcount or 0) == 1

    async def revoke_user_tokens(self, user_id: int) -> int:
        """Revoke every unrevoked token of a user; returns how many changed."""
        stmt = (
            update(RefreshToken)
            .where(and_(RefreshToken.user_id == user_id, RefreshToken.is_revoked.is_(False)))
            .values(is_revoked=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def delete_expired_tokens(self, now: Optional[datetime] = None) -> int:
        """Delete all tokens past expiry."""
        stmt = (
            delete(RefreshToken)
            .where(RefreshToken.expires_at < (now or utcnow()))
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0
