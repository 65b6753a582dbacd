"""Derive progress notifications from a user's logged activities.

Derivation is a pure function of ``(activities, now, read ids)``. Every rule is
evaluated on each pass and the result replaces the previous list. Identifiers
are ``<category>-<ISO date>``, so recomputing on the same day yields the same
identifiers and a dismissed notification comes back marked as read.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Container, Iterable, Sequence

from app.schemas.activity import Activity
from app.schemas.notification import ProgressNotification

DEFAULT_WEEKLY_TARGET = 5
WEEK_DAYS = 7
STREAK_DAYS = 3
TREND_THRESHOLD_PERCENT = 20

MILESTONES = (
    (50, "success", "Outstanding achievement!", "You've logged {total} activities! You're a truly consistent athlete."),
    (20, "info", "Good progress!", "{total} activities logged! You're building a solid exercise habit."),
    (5, "info", "Good start!", "{total} activities logged so far. Keep going toward a healthy lifestyle!"),
)


def round_percent(numerator: int, denominator: int) -> int:
    """``numerator / denominator * 100`` rounded half up, in exact integer arithmetic."""
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    return (200 * numerator + denominator) // (2 * denominator)


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular}" if count == 1 else f"{count} {plural}"


def activities_between(activities: Iterable[Activity], start: dt.date, end: dt.date) -> list[Activity]:
    """Activities dated within ``[start, end]``; undated activities never match."""
    return [activity for activity in activities if activity.date is not None and start <= activity.date <= end]


def _build(
    notification_id: str,
    kind: str,
    title: str,
    message: str,
    *,
    now: dt.datetime,
    read_ids: Container[str],
) -> ProgressNotification:
    return ProgressNotification(
        id=notification_id,
        type=kind,
        title=title,
        message=message,
        date=now,
        read=notification_id in read_ids,
    )


def _daily(todays: Sequence[Activity], *, stamp: str, now: dt.datetime, read_ids: Container[str]) -> ProgressNotification:
    notification_id = f"daily-{stamp}"
    if not todays:
        return _build(
            notification_id,
            "warning",
            "No activity today",
            "You haven't logged any exercise today. Don't forget to stay active!",
            now=now,
            read_ids=read_ids,
        )
    minutes = _plural(sum(activity.duration for activity in todays), "minute", "minutes")
    sessions = _plural(len(todays), "activity", "activities")
    return _build(
        notification_id,
        "success",
        "Today's activity logged!",
        f"Nice work! You've exercised {minutes} today across {sessions}.",
        now=now,
        read_ids=read_ids,
    )


def _weekly(
    this_week: Sequence[Activity],
    *,
    target: int,
    stamp: str,
    now: dt.datetime,
    read_ids: Container[str],
) -> ProgressNotification:
    notification_id = f"weekly-{stamp}"
    count = len(this_week)
    if count < target:
        progress = round_percent(count, target)
        return _build(
            notification_id,
            "info",
            "Weekly progress",
            f"You've exercised {count} of your {target} target sessions this week ({progress}%). Keep it up!",
            now=now,
            read_ids=read_ids,
        )
    return _build(
        notification_id,
        "success",
        "Weekly goal reached!",
        f"Amazing! You've hit your target of {target} activities this week. Stay consistent!",
        now=now,
        read_ids=read_ids,
    )


def _trend(
    this_week: Sequence[Activity],
    last_week: Sequence[Activity],
    *,
    stamp: str,
    now: dt.datetime,
    read_ids: Container[str],
) -> ProgressNotification | None:
    if not last_week:
        return None
    change = round_percent(len(this_week) - len(last_week), len(last_week))
    notification_id = f"trend-{stamp}"
    if change < -TREND_THRESHOLD_PERCENT:
        return _build(
            notification_id,
            "warning",
            "Activity is down",
            f"Your activity dropped {abs(change)}% compared to last week. Let's get back into the routine!",
            now=now,
            read_ids=read_ids,
        )
    if change > TREND_THRESHOLD_PERCENT:
        return _build(
            notification_id,
            "success",
            "Activity is up!",
            f"Great! Your activity rose {change}% compared to last week. Keep the momentum going!",
            now=now,
            read_ids=read_ids,
        )
    return None


def _streak(
    recent: Sequence[Activity],
    total: int,
    *,
    stamp: str,
    now: dt.datetime,
    read_ids: Container[str],
) -> ProgressNotification | None:
    if recent or total == 0:
        return None
    return _build(
        f"streak-{stamp}",
        "warning",
        "Don't break your streak",
        f"You haven't exercised in the last {STREAK_DAYS} days. Start again with something light today!",
        now=now,
        read_ids=read_ids,
    )


def _milestone(total: int, *, stamp: str, now: dt.datetime, read_ids: Container[str]) -> ProgressNotification | None:
    for threshold, kind, title, template in MILESTONES:
        if total >= threshold:
            return _build(
                f"motivation-{stamp}",
                kind,
                title,
                template.format(total=total),
                now=now,
                read_ids=read_ids,
            )
    return None


def derive_notifications(
    activities: Sequence[Activity] | None,
    now: dt.datetime,
    read_ids: Container[str] = frozenset(),
    *,
    weekly_target: int = DEFAULT_WEEKLY_TARGET,
) -> list[ProgressNotification]:
    """Return the notifications for ``now`` in rule order: daily, weekly, trend, streak, milestone."""
    activities = list(activities or [])
    today = now.date()
    stamp = today.isoformat()

    todays = activities_between(activities, today, today)
    this_week = activities_between(activities, today - dt.timedelta(days=WEEK_DAYS - 1), today)
    last_week = activities_between(
        activities,
        today - dt.timedelta(days=2 * WEEK_DAYS - 1),
        today - dt.timedelta(days=WEEK_DAYS),
    )
    recent = activities_between(activities, today - dt.timedelta(days=STREAK_DAYS - 1), today)
    total = len(activities)

    candidates = [
        _daily(todays, stamp=stamp, now=now, read_ids=read_ids),
        _weekly(this_week, target=weekly_target, stamp=stamp, now=now, read_ids=read_ids),
        _trend(this_week, last_week, stamp=stamp, now=now, read_ids=read_ids),
        _streak(recent, total, stamp=stamp, now=now, read_ids=read_ids),
        _milestone(total, stamp=stamp, now=now, read_ids=read_ids),
    ]
    return [notification for notification in candidates if notification is not None]


def count_unread(notifications: Iterable[ProgressNotification]) -> int:
    return sum(1 for notification in notifications if not notification.read)
