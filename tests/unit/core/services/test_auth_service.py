"""Tests for AuthService: registration, login and session rotation."""

import pytest

from notefeed.core.exceptions import ConflictError, UnauthorizedError
from notefeed.core.models.user import ROLE_USER
from notefeed.core.schemas.auth import LoginRequest, RegisterRequest
from notefeed.core.services import auth_service as auth_module
from notefeed.core.services.auth_service import AuthService
from notefeed.security import decode_access_token

TEST_PASSWORD = "secret123"


def register_request(username="alice", email="alice@example.com", password="secret123"):
    return RegisterRequest(username=username, email=email, password=password)


@pytest.fixture
def service(test_session):
    return AuthService(test_session)


@pytest.mark.asyncio
async def test_register_creates_user_and_opens_session(service):
    result = await service.register(register_request())

    assert result.user.id is not None
    assert result.user.get_roles() == [ROLE_USER]
    assert result.user.password_hash != "secret123"
    assert len(result.refresh_token) == 64

    payload = decode_access_token(result.access_token)
    assert payload["sub"] == str(result.user.id)
    assert payload["type"] == "access"

    body = result.to_response().model_dump(by_alias=True)
    assert body == {
        "id": result.user.id,
        "username": "alice",
        "email": "alice@example.com",
        "accessToken": result.access_token,
    }
    assert await service.refresh_tokens.find_valid(result.refresh_token) is not None


@pytest.mark.asyncio
async def test_register_checks_email_before_username(service):
    await service.register(register_request())

    with pytest.raises(ConflictError) as exc:
        await service.register(register_request(username="alice", email="alice@example.com"))
    assert exc.value.message == "User with this email already exists"

    with pytest.raises(ConflictError) as exc:
        await service.register(register_request(username="alice", email="other@example.com"))
    assert exc.value.message == "User with this username already exists"


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(service, make_user):
    user = await make_user()

    with pytest.raises(UnauthorizedError) as unknown:
        await service.login(LoginRequest(email="nobody@example.com", password=TEST_PASSWORD))
    with pytest.raises(UnauthorizedError) as wrong:
        await service.login(LoginRequest(email=user.email, password="wrong-password"))

    assert unknown.value.message == wrong.value.message == "Invalid credentials"


@pytest.mark.asyncio
async def test_each_login_gets_its_own_refresh_token(service, make_user):
    user = await make_user()

    first = await service.login(LoginRequest(email=user.email, password=TEST_PASSWORD))
    second = await service.login(LoginRequest(email=user.email, password=TEST_PASSWORD))

    assert first.refresh_token != second.refresh_token
    assert await service.refresh_tokens.find_valid(first.refresh_token) is not None
    assert await service.refresh_tokens.find_valid(second.refresh_token) is not None


@pytest.mark.asyncio
async def test_refresh_rotates_and_rejects_replay(service, make_user):
    user = await make_user()
    session = await service.login(LoginRequest(email=user.email, password=TEST_PASSWORD))

    rotated = await service.refresh(session.refresh_token)
    assert rotated.user.id == user.id
    assert rotated.refresh_token != session.refresh_token

    with pytest.raises(UnauthorizedError) as exc:
        await service.refresh(session.refresh_token)
    assert exc.value.message == "Invalid or expired refresh token"

    # the rotated token keeps working
    assert (await service.refresh(rotated.refresh_token)).user.id == user.id


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, "", "0" * 64])
async def test_refresh_rejects_missing_or_unknown_token(service, token):
    with pytest.raises(UnauthorizedError):
        await service.refresh(token)


@pytest.mark.asyncio
async def test_logout_revokes_only_that_session(service, make_user):
    user = await make_user()
    phone = await service.login(LoginRequest(email=user.email, password=TEST_PASSWORD))
    laptop = await service.login(LoginRequest(email=user.email, password=TEST_PASSWORD))

    await service.logout(phone.refresh_token)
    await service.logout(phone.refresh_token)
    await service.logout(None)

    with pytest.raises(UnauthorizedError):
        await service.refresh(phone.refresh_token)
    assert (await service.refresh(laptop.refresh_token)).user.id == user.id


@pytest.mark.asyncio
async def test_logout_all_ends_every_session(service, make_user):
    user = await make_user()
    sessions = [
        await service.login(LoginRequest(email=user.email, password=TEST_PASSWORD))
        for _ in range(2)
    ]

    assert await service.logout_all(user.id) == 2

    for session in sessions:
        with pytest.raises(UnauthorizedError):
            await service.refresh(session.refresh_token)


@pytest.mark.asyncio
async def test_get_current_user(service, make_user):
    user = await make_user(username="carol")

    me = await service.get_current_user(user.id)
    assert (me.id, me.username, me.email) == (user.id, "carol", "carol@example.com")

    with pytest.raises(UnauthorizedError) as exc:
        await service.get_current_user(9999)
    assert exc.value.message == "Unauthorized"


@pytest.mark.asyncio
async def test_register_maps_lost_race_to_conflict(monkeypatch):
    """A unique violation at insert time is reported like the pre-check."""
    from sqlalchemy.exc import IntegrityError

    class FakeSession:
        rolled_back = False

        async def rollback(self):
            self.rolled_back = True

    class FakeUserRepo:
        calls = 0

        async def is_email_taken(self, email):
            # free during the pre-check, taken once the other request committed
            FakeUserRepo.calls += 1
            return FakeUserRepo.calls > 1

        async def is_username_taken(self, username):
            return False

        async def create_user(self, user_data):
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))

    monkeypatch.setattr(auth_module, "UserRepository", lambda s: FakeUserRepo())
    monkeypatch.setattr(auth_module, "hash_password", lambda p: "hashed")

    session = FakeSession()
    service = AuthService(session)

    with pytest.raises(ConflictError) as exc:
        await service.register(register_request())
    assert exc.value.message == "User with this email already exists"
    assert session.rolled_back is True
