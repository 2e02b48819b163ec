"""Tests for the maintenance entry points."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from notefeed.core.models import RefreshToken
from notefeed.core.models.base import utcnow
from notefeed.maintenance import purge_expired_refresh_tokens


@pytest.mark.asyncio
async def test_purge_deletes_only_expired_tokens(session_factory, test_session, make_user):
    user = await make_user()
    now = utcnow()
    test_session.add_all(
        [
            RefreshToken(user_id=user.id, token="a" * 64, expires_at=now - timedelta(days=1)),
            RefreshToken(
                user_id=user.id, token="b" * 64, expires_at=now - timedelta(minutes=1), is_revoked=True
            ),
            RefreshToken(user_id=user.id, token="c" * 64, expires_at=now + timedelta(days=1)),
        ]
    )
    await test_session.commit()

    assert await purge_expired_refresh_tokens(session_factory) == 2
    # running again is harmless
    assert await purge_expired_refresh_tokens(session_factory) == 0

    remaining = (await test_session.execute(select(RefreshToken.token))).scalars().all()
    assert remaining == ["c" * 64]
