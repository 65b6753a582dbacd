"""Pydantic schemas for the preferences map stored in user metadata."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.sanitize import clean_single_line

Theme = Literal["light", "dark", "system"]
ALLOWED_THEMES = {"light", "dark", "system"}


def _normalize_theme(value: Any) -> str:
    normalized = clean_single_line(value if isinstance(value, str) else "").lower()
    if normalized not in ALLOWED_THEMES:
        return "system"
    return normalized


def _coerce_flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "on"}:
            return True
        if lowered in {"false", "0", "no", "off"}:
            return False
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    return default


class Preferences(BaseModel):
    """Preferences as stored under ``user_metadata.preferences``.

    Keys are camelCase on the wire. Malformed values fall back to their
    defaults instead of failing, and keys this service does not own are kept
    so writing the map back never drops them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    theme: Theme = "system"
    reduce_animations: bool = Field(default=False, alias="reduceAnimations")
    email_notifications: bool = Field(default=True, alias="emailNotifications")
    activity_reminders: bool = Field(default=True, alias="activityReminders")
    achievement_notifications: bool = Field(default=True, alias="achievementNotifications")
    marketing_emails: bool = Field(default=False, alias="marketingEmails")

    @field_validator("theme", mode="before")
    @classmethod
    def normalize_theme(cls, value: Any) -> str:
        return _normalize_theme(value)

    @field_validator("reduce_animations", "marketing_emails", mode="before")
    @classmethod
    def normalize_off_by_default(cls, value: Any) -> bool:
        return _coerce_flag(value, False)

    @field_validator("email_notifications", "activity_reminders", "achievement_notifications", mode="before")
    @classmethod
    def normalize_on_by_default(cls, value: Any) -> bool:
        return _coerce_flag(value, True)

    @classmethod
    def from_metadata(cls, metadata: dict[str, Any] | None) -> "Preferences":
        raw = (metadata or {}).get("preferences")
        if not isinstance(raw, dict):
            return cls()
        return cls.model_validate(raw)

    def to_metadata(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def merged(self, **changes: Any) -> "Preferences":
        """Return a copy with only ``changes`` overlaid; every other key is preserved."""
        data = self.to_metadata()
        for name, value in changes.items():
            if value is None:
                continue
            field = type(self).model_fields.get(name)
            key = (field.alias or name) if field else name
            data[key] = value
        return type(self).model_validate(data)


class PreferencesOut(BaseModel):
    theme: Theme
    reduce_animations: bool
    email_notifications: bool
    activity_reminders: bool
    achievement_notifications: bool
    marketing_emails: bool

    @classmethod
    def from_preferences(cls, prefs: Preferences) -> "PreferencesOut":
        return cls(**{name: getattr(prefs, name) for name in cls.model_fields})


class NotificationPreferencesUpdate(BaseModel):
    email_notifications: bool | None = None
    activity_reminders: bool | None = None
    achievement_notifications: bool | None = None
    marketing_emails: bool | None = None


class AppearancePreferencesUpdate(BaseModel):
    theme: Theme | None = None
    reduce_animations: bool | None = None

    @field_validator("theme", mode="before")
    @classmethod
    def normalize_theme(cls, value: Any) -> str | None:
        if value is None:
            return None
        normalized = clean_single_line(str(value)).lower()
        if normalized not in ALLOWED_THEMES:
            raise ValueError("invalid_theme")
        return normalized


class ThemeUpdate(BaseModel):
    theme: Theme

    @field_validator("theme", mode="before")
    @classmethod
    def normalize_theme(cls, value: Any) -> str:
        normalized = clean_single_line(str(value or "")).lower()
        if normalized not in ALLOWED_THEMES:
            raise ValueError("invalid_theme")
        return normalized
