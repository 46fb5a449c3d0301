"""Authentication endpoints: register, login, profile and password management."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ai_search.api.serializers import user_out
from ai_search.auth.deps import get_current_user, unauthorized
from ai_search.auth.password import hash_password, verify_password
from ai_search.auth.tokens import create_access_token
from ai_search.db.database import get_db
from ai_search.db.models import User, utcnow
from ai_search.types.api import MessageResponse
from ai_search.types.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

DUPLICATE_EMAIL_DETAIL = "User with this email already exists"


def _ensure_email_available(db: Session, email: str) -> None:
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_EMAIL_DETAIL)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    _ensure_email_available(db, request.email)

    user = User(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        last_login=utcnow(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Registered concurrently between the check and the insert
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_EMAIL_DETAIL)
    db.refresh(user)

    logger.info("User registered", extra={"user_id": user.id})
    return AuthResponse(user=user_out(user), token=create_access_token(user.id))


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    user = db.scalar(select(User).where(User.email == request.email))
    if user is None or not verify_password(request.password, user.password_hash):
        raise unauthorized("Invalid credentials")
    if not user.is_active:
        raise unauthorized("Account is deactivated")

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)

    logger.info("User logged in", extra={"user_id": user.id})
    return AuthResponse(user=user_out(user), token=create_access_token(user.id))


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse(user=user_out(user))


@router.put("/profile", response_model=UserResponse)
def update_profile(
    request: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    if request.name:
        user.name = request.name
    if request.preferences is not None:
        changes = request.preferences.model_dump(by_alias=True, exclude_none=True, mode="json")
        user.preferences = {**(user.preferences or {}), **changes}

    db.commit()
    db.refresh(user)
    return UserResponse(user=user_out(user), message="Profile updated successfully")


@router.put("/password", response_model=MessageResponse)
def change_password(
    request: PasswordChange,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    if not verify_password(request.current_password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )

    user.password_hash = hash_password(request.new_password)
    db.commit()
    return MessageResponse(message="Password updated successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user)) -> MessageResponse:
    # Tokens are stateless; the client discards its copy
    logger.info("User logged out", extra={"user_id": user.id})
    return MessageResponse(message="Logged out successfully")
