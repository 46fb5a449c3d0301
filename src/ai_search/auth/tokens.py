"""
JWT token utilities for authentication
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from ai_search.config import Settings, settings as default_settings
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)


class AuthError(Exception):
    """Raised when a token is missing, invalid or expired, or credentials are wrong."""

    pass


def create_access_token(
    user_id: str,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a signed access token whose subject is user_id."""
    settings = settings or default_settings
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expires_minutes))

    # Encode temporal claims as integer epoch seconds for robust decoding
    to_encode = {
        "sub": user_id,
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Decode and validate an access token.

    Raises:
        AuthError: If the token is expired, malformed or has no subject
    """
    settings = settings or default_settings
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token has expired") from e
    except jwt.PyJWTError as e:
        logger.warning("JWT validation error", extra={"error": str(e)})
        raise AuthError("Could not validate credentials") from e

    if not payload.get("sub"):
        raise AuthError("Could not validate credentials")
    return payload
