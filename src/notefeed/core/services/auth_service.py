"""Authentication service implementation."""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...security import create_access_token, generate_refresh_token, hash_password, verify_password
from ..exceptions import ConflictError, UnauthorizedError
from ..logging import get_logger, mask_token
from ..models.user import ROLE_USER, User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from .interfaces import IAuthService
from .refresh_token_service import RefreshTokenService

logger = get_logger("services.auth")

EMAIL_TAKEN = "User with this email already exists"
USERNAME_TAKEN = "User with this username already exists"
INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


@dataclass
class AuthResult:
    """A freshly opened session."""

    access_token: str
    refresh_token: str
    user: User

    def to_response(self) -> AuthResponse:
        return AuthResponse(
            access_token=self.access_token,
            id=self.user.id,
            username=self.user.username,
            email=self.user.email,
        )


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.refresh_tokens = RefreshTokenService(session)

    async def register(self, request: RegisterRequest) -> AuthResult:
        """Register new user; email is checked before username."""
        if await self.user_repo.is_email_taken(request.email):
            raise ConflictError(EMAIL_TAKEN)
        if await self.user_repo.is_username_taken(request.username):
            raise ConflictError(USERNAME_TAKEN)

        user_data = {
            "username": request.username,
            "email": request.email,
            "password_hash": hash_password(request.password),
            "roles": [ROLE_USER],
        }

        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError:
            # lost a race with a concurrent registration
            await self.session.rollback()
            if await self.user_repo.is_email_taken(request.email):
                raise ConflictError(EMAIL_TAKEN)
            raise ConflictError(USERNAME_TAKEN)

        logger.info("User registered", extra={"user_id": user.id, "username": user.username})
        return await self._open_session(user)

    async def login(self, request: LoginRequest) -> AuthResult:
        """Login by email; unknown email and wrong password look the same."""
        user = await self.user_repo.get_by_email(request.email)
        if user is None or not verify_password(request.password, user.password_hash):
            logger.warning("Login failed", extra={"email": request.email})
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("User logged in", extra={"user_id": user.id})
        return await self._open_session(user)

    async def refresh(self, refresh_token: Optional[str]) -> AuthResult:
        """Rotate: the presented token is revoked and a new session issued."""
        stored = await self.refresh_tokens.consume(refresh_token) if refresh_token else None
        if stored is None:
            logger.warning("Refresh rejected", extra={"token": mask_token(refresh_token)})
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        user = await self.user_repo.get_by_id(stored.user_id)
        if user is None:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        logger.info("Refresh token rotated", extra={"user_id": user.id})
        return await self._open_session(user)

    async def logout(self, refresh_token: Optional[str]) -> None:
        """Revoke the presented token if it exists; never fails."""
        if refresh_token:
            await self.refresh_tokens.revoke(refresh_token)

    async def logout_all(self, user_id: int) -> int:
        return await self.refresh_tokens.revoke_all(user_id)

    async def get_current_user(self, user_id: int) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UnauthorizedError()
        return UserResponse.model_validate(user)

    async def _open_session(self, user: User) -> AuthResult:
        access_token = create_access_token(
            data={"sub": str(user.id), "username": user.username, "roles": user.get_roles()}
        )
        refresh_token = generate_refresh_token()
        await self.refresh_tokens.issue(user.id, refresh_token)
        return AuthResult(access_token=access_token, refresh_token=refresh_token, user=user)
