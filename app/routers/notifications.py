"""Dashboard-header notification feed endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from app.core.deps import SessionContext, get_session_context
from app.core.exceptions import NotFoundError
from app.db.session import get_db
from app.schemas.activity import Activity, ActivityFeedRequest
from app.schemas.notification import NotificationFeedOut
from app.services.header import HeaderSession
from app.services.read_state import load_read_ids, save_read_ids

router = APIRouter()

MAX_NOTIFICATION_ID_LEN = 64


def _activities(ctx: SessionContext, payload: ActivityFeedRequest | None) -> list[Activity]:
    if payload is not None:
        return payload.activities
    return ctx.store.list_activities(ctx.user.id)


def _header(ctx: SessionContext, db: Session, activities: list[Activity]) -> HeaderSession:
    return HeaderSession(
        ctx.user,
        load_read_ids(db, ctx.user.id),
        activities=activities,
        persist=lambda read_ids: save_read_ids(db, read_ids),
    )


@router.get("/", response_model=NotificationFeedOut)
def get_notifications(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
) -> NotificationFeedOut:
    return _header(ctx, db, _activities(ctx, None)).feed()


@router.post("/derive", response_model=NotificationFeedOut)
def derive_feed(
    payload: ActivityFeedRequest = Body(...),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
) -> NotificationFeedOut:
    return _header(ctx, db, payload.activities).feed()


@router.post("/read-all", response_model=NotificationFeedOut)
def read_all_notifications(
    payload: ActivityFeedRequest | None = Body(default=None),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
) -> NotificationFeedOut:
    header = _header(ctx, db, _activities(ctx, payload))
    header.mark_all_as_read()
    return header.feed()


@router.post("/{notification_id}/read", response_model=NotificationFeedOut)
def read_notification(
    notification_id: str = Path(..., min_length=1, max_length=MAX_NOTIFICATION_ID_LEN),
    payload: ActivityFeedRequest | None = Body(default=None),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
) -> NotificationFeedOut:
    header = _header(ctx, db, _activities(ctx, payload))
    if not header.mark_as_read(notification_id):
        raise NotFoundError("notification_not_found", details={"notification_id": notification_id})
    return header.feed()
