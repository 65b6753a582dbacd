"""Pydantic schemas for the hosted user record, the profile row and their responses."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.core.sanitize import clean_single_line, initials_from
from app.schemas.preferences import Preferences, PreferencesOut

MAX_NAME_LEN = 80
DEFAULT_DISPLAY_NAME = "User"


class UserAccount(BaseModel):
    """Cached copy of the hosted auth user."""

    id: str
    email: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    preferences: Preferences = Field(default_factory=Preferences)

    @classmethod
    def from_auth_payload(cls, payload: dict[str, Any]) -> "UserAccount":
        metadata = payload.get("user_metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        return cls(
            id=str(payload.get("id") or ""),
            email=payload.get("email") or None,
            full_name=clean_single_line(metadata.get("full_name")) or None,
            avatar_url=metadata.get("avatar_url") or None,
            metadata=metadata,
            preferences=Preferences.from_metadata(metadata),
        )

    @property
    def display_name(self) -> str:
        return self.full_name or DEFAULT_DISPLAY_NAME

    @property
    def initials(self) -> str:
        return initials_from(self.full_name, self.email)


class Profile(BaseModel):
    id: str
    full_name: str | None = None
    email: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class UserOut(BaseModel):
    id: str
    email: str | None = None
    full_name: str | None = None
    display_name: str
    initials: str
    avatar_url: str | None = None
    preferences: PreferencesOut

    @classmethod
    def from_account(cls, user: UserAccount) -> "UserOut":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            display_name=user.display_name,
            initials=user.initials,
            avatar_url=user.avatar_url,
            preferences=PreferencesOut.from_preferences(user.preferences),
        )


class ProfileUpdate(BaseModel):
    full_name: str = Field(default="", max_length=MAX_NAME_LEN)

    @field_validator("full_name", mode="before")
    @classmethod
    def normalize_name(cls, value: str | None) -> str:
        return clean_single_line(value)
