"""FastAPI dependencies resolving the caller from a Bearer token."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ai_search.auth.tokens import AuthError, decode_token
from ai_search.db.database import get_db
from ai_search.db.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def unauthorized(detail: str = "Not authorized, no token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the active user named by the token's subject, or raise 401."""
    if credentials is None or not credentials.credentials:
        raise unauthorized()

    try:
        payload = decode_token(credentials.credentials)
    except AuthError as e:
        raise unauthorized(str(e)) from e

    user = db.get(User, payload["sub"])
    if user is None:
        raise unauthorized("User not found")
    if not user.is_active:
        raise unauthorized("Account is deactivated")
    return user
