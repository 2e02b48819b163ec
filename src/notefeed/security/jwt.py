"""JWT token utilities."""

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from ..config import get_settings

REFRESH_TOKEN_BYTES = 32


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed, short-lived JWT access token."""
    settings = get_settings()
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    jti = str(uuid.uuid4())
    to_encode.update({"exp": expire, "type": "access", "jti": jti})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def generate_refresh_token() -> str:
    """Opaque refresh token: 64 hex characters from a CSPRNG."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate an access token; None when invalid or expired."""
    try:
        settings = get_settings()
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    # refuse anything that is not an access token
    if payload.get("type") != "access":
        return None

    return payload


def get_user_id_from_token(token: str) -> Optional[int]:
    """Extract the user ID from an access token."""
    payload = decode_access_token(token)
    if not payload:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None

    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None
