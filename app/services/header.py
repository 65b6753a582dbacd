"""Dashboard header state: the derived notification feed and its read/unread bookkeeping."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
import math
from collections.abc import Callable, Sequence
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.schemas.activity import Activity
from app.schemas.notification import NotificationFeedOut, ProgressNotification, ProgressNotificationOut
from app.schemas.user import UserAccount
from app.services.notification_deriver import WEEK_DAYS, count_unread, derive_notifications
from app.services.read_state import ReadIdSet

logger = logging.getLogger(__name__)

MIN_REFRESH_SECONDS = 0.05
# Same span as the this-week + last-week windows.
READ_ID_RETENTION_DAYS = 2 * WEEK_DAYS


def local_now() -> dt.datetime:
    return dt.datetime.now(ZoneInfo(settings.TIMEZONE))


def relative_date_label(value: dt.datetime, now: dt.datetime) -> str:
    diff_days = math.floor((now - value).total_seconds() / 86400)
    if diff_days <= 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    return f"{value.day} {value.strftime('%b')}"


class HeaderSession:
    """Notification feed for one signed-in user.

    The feed is re-derived whenever the activity list or the user changes, on
    ``refresh()``, and every ``NOTIFICATION_REFRESH_SECONDS`` while the refresh
    timer runs. Marking notifications as read updates the current list in place
    and persists the identifiers through ``persist``.
    """

    def __init__(
        self,
        user: UserAccount,
        read_ids: ReadIdSet,
        *,
        activities: Sequence[Activity] | None = None,
        persist: Callable[[ReadIdSet], None] | None = None,
        clock: Callable[[], dt.datetime] = local_now,
        weekly_target: int | None = None,
    ) -> None:
        self.user = user
        self.read_ids = read_ids
        self.activities: list[Activity] = list(activities or [])
        self.notifications: list[ProgressNotification] = []
        self.unread_count = 0
        self._persist = persist
        self._clock = clock
        self._weekly_target = weekly_target or settings.WEEKLY_ACTIVITY_TARGET
        self._task: asyncio.Task | None = None
        self.refresh()

    def refresh(self) -> list[ProgressNotification]:
        self.notifications = derive_notifications(
            self.activities,
            self._clock(),
            self.read_ids,
            weekly_target=self._weekly_target,
        )
        self.unread_count = count_unread(self.notifications)
        return self.notifications

    def set_activities(self, activities: Sequence[Activity] | None) -> list[ProgressNotification]:
        self.activities = list(activities or [])
        return self.refresh()

    def set_user(self, user: UserAccount, read_ids: ReadIdSet) -> list[ProgressNotification]:
        self.user = user
        self.read_ids = read_ids
        return self.refresh()

    def mark_as_read(self, notification_id: str) -> bool:
        """Mark one notification of the current feed as read.

        Returns False for identifiers that are not in the feed; those are never stored.
        """
        if not any(notification.id == notification_id for notification in self.notifications):
            return False
        self.notifications = [
            notification.model_copy(update={"read": True}) if notification.id == notification_id else notification
            for notification in self.notifications
        ]
        self.unread_count = count_unread(self.notifications)
        if self.read_ids.add(notification_id):
            self._save()
        return True

    def mark_all_as_read(self) -> int:
        updated = self.read_ids.add_all(notification.id for notification in self.notifications)
        self.notifications = [notification.model_copy(update={"read": True}) for notification in self.notifications]
        self.unread_count = 0
        self._save()
        return updated

    def feed(self) -> NotificationFeedOut:
        now = self._clock()
        return NotificationFeedOut(
            notifications=[
                ProgressNotificationOut(**notification.model_dump(), date_label=relative_date_label(notification.date, now))
                for notification in self.notifications
            ],
            unread_count=self.unread_count,
        )

    def _save(self) -> None:
        # Older ids can never be derived again.
        self.read_ids.prune(before=self._clock().date() - dt.timedelta(days=READ_ID_RETENTION_DAYS - 1))
        if self._persist is not None:
            self._persist(self.read_ids)

    async def _loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self.refresh()
            logger.debug("Header notifications refreshed: user=%s unread=%s", self.user.id, self.unread_count)

    def start(self, interval: float | None = None) -> None:
        """Start the periodic refresh; must be called from a running event loop."""
        if self._task is not None:
            return
        seconds = max(MIN_REFRESH_SECONDS, interval or settings.NOTIFICATION_REFRESH_SECONDS)
        self._task = asyncio.create_task(self._loop(seconds), name=f"header-refresh-{self.user.id}")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def close(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
