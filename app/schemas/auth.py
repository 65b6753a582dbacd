"""Auth-related schemas (sign-in, session, sign-out, header identity)."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.sanitize import clean_email, has_control_chars
from app.schemas.user import UserOut


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return clean_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if has_control_chars(value):
            raise ValueError("password_contains_control_chars")
        if not value.strip():
            raise ValueError("password_required")
        return value


class SessionOut(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_at: dt.datetime | None = None
    user: UserOut


class LogoutResponse(BaseModel):
    message: str
    redirect_to: str


class NavigationTargets(BaseModel):
    dashboard: str = "/dashboard"
    profile: str = "/profile"
    settings: str = "/settings"
    login: str = "/login"


class HeaderOut(BaseModel):
    user: UserOut
    navigation: NavigationTargets
