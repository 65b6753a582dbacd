"""Pydantic schemas for derived progress notifications."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel

NotificationType = Literal["warning", "info", "success"]


class ProgressNotification(BaseModel):
    id: str
    type: NotificationType
    title: str
    message: str
    date: dt.datetime
    read: bool = False


class ProgressNotificationOut(ProgressNotification):
    date_label: str


class NotificationFeedOut(BaseModel):
    notifications: list[ProgressNotificationOut]
    unread_count: int
