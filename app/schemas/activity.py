"""Pydantic schemas for logged activities fed into the notification feed."""

from __future__ import annotations

import datetime as dt
from typing import Any
from zoneinfo import ZoneInfo

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.core.config import settings
from app.core.sanitize import clean_multiline, clean_single_line

MAX_ACTIVITIES = 5000


def _local_date(value: dt.datetime) -> dt.date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(ZoneInfo(settings.TIMEZONE)).date()


def parse_activity_date(value: Any) -> dt.date | None:
    """Calendar date of an activity in the configured timezone, or ``None`` when missing or unparsable."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return _local_date(value)
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if len(raw) == 10:
        try:
            return dt.date.fromisoformat(raw)
        except ValueError:
            return None
    try:
        return _local_date(dt.datetime.fromisoformat(raw.replace("Z", "+00:00")))
    except ValueError:
        return None


class Activity(BaseModel):
    date: dt.date | None = None
    duration: int = 0
    activity_type: str | None = Field(default=None, validation_alias=AliasChoices("activity_type", "type"))
    notes: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> dt.date | None:
        return parse_activity_date(value)

    @field_validator("duration", mode="before")
    @classmethod
    def normalize_duration(cls, value: Any) -> int:
        try:
            return max(int(value or 0), 0)
        except (TypeError, ValueError):
            return 0

    @field_validator("activity_type", mode="before")
    @classmethod
    def normalize_type(cls, value: str | None) -> str | None:
        cleaned = clean_single_line(value)
        return cleaned or None

    @field_validator("notes", mode="before")
    @classmethod
    def normalize_notes(cls, value: str | None) -> str | None:
        cleaned = clean_multiline(value)
        return cleaned or None


class ActivityFeedRequest(BaseModel):
    activities: list[Activity] = Field(default_factory=list, max_length=MAX_ACTIVITIES)
