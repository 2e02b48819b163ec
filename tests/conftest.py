"""Shared pytest fixtures configured to use SQLite in-memory databases."""

import os

# settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import logging
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notefeed.core.models import BaseModel, Domain, Note, Subscription, Tag, User
from notefeed.core.models.tag import note_tags
from notefeed.database import enable_sqlite_foreign_keys, get_db_session
from notefeed.main import app
from notefeed.security import create_access_token, hash_password

# aiosqlite logs every statement at DEBUG
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "secret123"

_sequence = count(1)


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test, foreign keys enforced."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,  # every connection sees the same memory DB
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory):
    """HTTP client against the app; each request gets its own session.

    https base URL so the Secure refresh cookie is sent back.
    """

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="https://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt is slow; hash the shared test password once
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def make_user(test_session, password_hash):
    """Factory creating committed users."""

    async def _make_user(username=None, email=None):
        n = next(_sequence)
        username = username or f"user{n}"
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=password_hash,
        )
        test_session.add(user)
        await test_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_domain(test_session):
    async def _make_domain(user, name="General", **kwargs):
        domain = Domain(user_id=user.id, name=name, **kwargs)
        test_session.add(domain)
        await test_session.commit()
        return domain

    return _make_domain


@pytest.fixture
def make_tag(test_session):
    async def _make_tag(user, name):
        tag = Tag(user_id=user.id, name=name)
        test_session.add(tag)
        await test_session.commit()
        return tag

    return _make_tag


@pytest.fixture
def make_note(test_session):
    """Factory creating committed notes, optionally linked to tags."""

    async def _make_note(user, domain, title="Note", access_type="public", tags=(), **kwargs):
        note = Note(
            user_id=user.id,
            domain_id=domain.id,
            title=title,
            content=kwargs.pop("content", f"{title} body"),
            access_type=access_type,
            **kwargs,
        )
        test_session.add(note)
        await test_session.flush()
        for tag in tags:
            await test_session.execute(note_tags.insert().values(note_id=note.id, tag_id=tag.id))
        await test_session.commit()
        return note

    return _make_note


@pytest.fixture
def subscribe(test_session):
    async def _subscribe(subscriber, author):
        test_session.add(Subscription(subscriber_id=subscriber.id, author_id=author.id))
        await test_session.commit()

    return _subscribe


def auth_headers_for(user) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return auth_headers_for
