"""Maintenance commands meant to run from cron or a scheduler."""

import asyncio

from .core.logging import get_logger, setup_logging
from .core.services.refresh_token_service import RefreshTokenService
from .database import AsyncSessionLocal, dispose_engine

logger = get_logger("maintenance")


async def purge_expired_refresh_tokens(session_factory=AsyncSessionLocal) -> int:
    """Delete every expired refresh token; safe to run concurrently and repeatedly."""
    async with session_factory() as session:
        return await RefreshTokenService(session).purge_expired()


async def _run_purge() -> int:
    try:
        return await purge_expired_refresh_tokens()
    finally:
        await dispose_engine()


def purge_tokens_command() -> None:
    """Console entry point: notefeed-purge-tokens."""
    setup_logging()
    count = asyncio.run(_run_purge())
    logger.info("Token purge finished", extra={"deleted": count})
