"""Pydantic schemas for the settings screens."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from app.core.sanitize import has_control_chars
from app.schemas.preferences import PreferencesOut
from app.schemas.user import Profile, UserOut

MAX_PASSWORD_LEN = 128


class SecurityOut(BaseModel):
    """Security screen state; two-factor is shown but cannot be enabled yet."""

    two_factor_available: bool = False
    two_factor_enabled: bool = False
    password_min_length: int


class SettingsOut(BaseModel):
    user: UserOut
    profile: Profile | None = None
    profile_error: str | None = None
    preferences: PreferencesOut
    security: SecurityOut


class PasswordUpdate(BaseModel):
    # Collected by the form but not checked; the hosted service only needs the new password.
    current_password: str | None = Field(default=None, max_length=MAX_PASSWORD_LEN)
    new_password: str = Field(default="", max_length=MAX_PASSWORD_LEN)
    confirm_password: str = Field(default="", max_length=MAX_PASSWORD_LEN)

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if has_control_chars(value):
            raise ValueError("password_contains_control_chars")
        return value


class PasswordUpdateOut(BaseModel):
    message: str
