"""Load and save the per-user set of read notification identifiers."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from app.models.notification_read_state import NotificationReadState

logger = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "readNotifications_"


def storage_key(user_id: str) -> str:
    return f"{STORAGE_KEY_PREFIX}{user_id}"


@dataclass
class ReadIdSet:
    """Notification identifiers one user has dismissed."""

    user_id: str
    ids: set[str] = field(default_factory=set)

    def __contains__(self, notification_id: object) -> bool:
        return notification_id in self.ids

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.ids))

    def __len__(self) -> int:
        return len(self.ids)

    def add(self, notification_id: str) -> bool:
        if notification_id in self.ids:
            return False
        self.ids.add(notification_id)
        return True

    def add_all(self, notification_ids: Iterable[str]) -> int:
        return sum(1 for notification_id in list(notification_ids) if self.add(notification_id))

    def prune(self, *, before: dt.date) -> int:
        """Drop identifiers whose date suffix is older than ``before``; returns how many were dropped."""
        stale = {notification_id for notification_id in self.ids if not _dated_on_or_after(notification_id, before)}
        self.ids -= stale
        return len(stale)


def _dated_on_or_after(notification_id: str, day: dt.date) -> bool:
    # Identifiers end with "-<ISO date>".
    try:
        stamp = dt.date.fromisoformat(notification_id[-10:])
    except ValueError:
        return False
    return stamp >= day


def _parse_ids(raw: object, *, user_id: str) -> set[str]:
    if raw is None:
        return set()
    if not isinstance(raw, list):
        logger.warning("Ignoring malformed read-notification state for user %s", user_id)
        return set()
    return {item for item in raw if isinstance(item, str) and item}


def load_read_ids(db: Session, user_id: str) -> ReadIdSet:
    record = db.get(NotificationReadState, storage_key(user_id))
    if record is None:
        return ReadIdSet(user_id=user_id)
    return ReadIdSet(user_id=user_id, ids=_parse_ids(record.notification_ids, user_id=user_id))


def save_read_ids(db: Session, read_ids: ReadIdSet) -> None:
    """Persist the whole set; the last writer wins."""
    key = storage_key(read_ids.user_id)
    record = db.get(NotificationReadState, key)
    if record is None:
        record = NotificationReadState(storage_key=key, user_id=read_ids.user_id)
    record.notification_ids = sorted(read_ids.ids)
    db.add(record)
    db.commit()
    logger.info("Read notifications saved: user=%s count=%s", read_ids.user_id, len(read_ids))
