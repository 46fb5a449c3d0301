"""Auth and user schemas."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, field_validator

from ai_search.consts import MAX_PASSWORD_BYTES
from ai_search.types.api import CamelModel
from ai_search.types.search import Focus


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return v


class Preferences(CamelModel):
    theme: Literal["light", "dark"] = "light"
    search_focus: Focus = Focus.GENERAL


class PreferencesUpdate(CamelModel):
    theme: Literal["light", "dark"] | None = None
    search_focus: Focus | None = None


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ProfileUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    preferences: PreferencesUpdate | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)

    @field_validator("new_password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    preferences: Preferences
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime


class AuthResponse(CamelModel):
    user: UserOut
    token: str


class UserResponse(CamelModel):
    user: UserOut
    message: str | None = None
