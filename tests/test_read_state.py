from __future__ import annotations

import datetime as dt

from app.models.notification_read_state import NotificationReadState
from app.services.read_state import ReadIdSet, load_read_ids, save_read_ids, storage_key


def test_storage_key_is_per_user() -> None:
    assert storage_key("abc") == "readNotifications_abc"


def test_load_without_saved_state_returns_empty_set(db_session) -> None:
    read_ids = load_read_ids(db_session, "user-1")

    assert read_ids.user_id == "user-1"
    assert len(read_ids) == 0
    assert "daily-2026-10-19" not in read_ids


def test_save_then_load_round_trips_per_user(db_session) -> None:
    read_ids = ReadIdSet(user_id="user-1")
    read_ids.add("daily-2026-10-19")
    read_ids.add("weekly-2026-10-19")
    save_read_ids(db_session, read_ids)

    assert "daily-2026-10-19" in load_read_ids(db_session, "user-1")
    assert len(load_read_ids(db_session, "user-2")) == 0

    record = db_session.get(NotificationReadState, "readNotifications_user-1")
    assert record.notification_ids == ["daily-2026-10-19", "weekly-2026-10-19"]


def test_save_overwrites_previous_state(db_session) -> None:
    save_read_ids(db_session, ReadIdSet(user_id="user-1", ids={"a"}))
    save_read_ids(db_session, ReadIdSet(user_id="user-1", ids={"a", "b"}))

    assert list(load_read_ids(db_session, "user-1")) == ["a", "b"]


def test_malformed_saved_state_is_ignored(db_session) -> None:
    db_session.add(
        NotificationReadState(storage_key=storage_key("user-1"), user_id="user-1", notification_ids={"not": "a list"})
    )
    db_session.commit()

    assert len(load_read_ids(db_session, "user-1")) == 0


def test_non_string_entries_are_dropped(db_session) -> None:
    db_session.add(
        NotificationReadState(storage_key=storage_key("user-1"), user_id="user-1", notification_ids=["ok", 7, None, ""])
    )
    db_session.commit()

    assert list(load_read_ids(db_session, "user-1")) == ["ok"]


def test_add_reports_new_ids_only() -> None:
    read_ids = ReadIdSet(user_id="user-1", ids={"a"})

    assert read_ids.add("a") is False
    assert read_ids.add("b") is True
    assert read_ids.add_all(["b", "c", "d"]) == 2


def test_prune_keeps_ids_dated_on_or_after_the_cutoff() -> None:
    read_ids = ReadIdSet(user_id="user-1", ids={"daily-2026-10-05", "weekly-2026-10-06", "streak-2026-10-19", "oops"})

    assert read_ids.prune(before=dt.date(2026, 10, 6)) == 2
    assert list(read_ids) == ["streak-2026-10-19", "weekly-2026-10-06"]
