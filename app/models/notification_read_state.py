"""Per-user set of dismissed notification identifiers."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class NotificationReadState(Base):
    __tablename__ = "notification_read_state"

    # "readNotifications_<userId>"; one row per user.
    storage_key: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    notification_ids: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
