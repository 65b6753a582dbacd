"""Service helpers behind the profile, notifications, appearance and security screens."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from app.core.config import settings
from app.core.deps import SessionContext
from app.core.exceptions import PasswordValidationError, PreferenceStoreError
from app.schemas.preferences import (
    AppearancePreferencesUpdate,
    NotificationPreferencesUpdate,
    PreferencesOut,
)
from app.schemas.settings import PasswordUpdate, SecurityOut, SettingsOut
from app.schemas.user import UserAccount, UserOut

logger = logging.getLogger(__name__)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def security_summary() -> SecurityOut:
    return SecurityOut(password_min_length=settings.PASSWORD_MIN_LENGTH)


def load_settings(ctx: SessionContext) -> SettingsOut:
    """Current values for every screen.

    A failed profile read is reported in ``profile_error`` and does not block the other screens.
    """
    profile = None
    profile_error = None
    try:
        profile = ctx.store.get_profile_by_id(ctx.user.id)
    except PreferenceStoreError as exc:
        logger.warning("Profile load failed for %s: %s", ctx.user.id, exc.message)
        profile_error = exc.message

    return SettingsOut(
        user=UserOut.from_account(ctx.user),
        profile=profile,
        preferences=PreferencesOut.from_preferences(ctx.user.preferences),
        security=security_summary(),
        profile_error=profile_error,
    )


def update_profile(ctx: SessionContext, full_name: str, *, now: dt.datetime | None = None) -> UserAccount:
    stamp = (now or _utcnow()).isoformat()
    ctx.store.update_profile(ctx.user.id, {"full_name": full_name, "updated_at": stamp})
    updated = ctx.store.update_user_metadata({"full_name": full_name})
    ctx.user = ctx.store.get_current_user() or updated
    logger.info("Profile saved: %s", ctx.user.id)
    return ctx.user


def _save_preferences(ctx: SessionContext, changes: dict[str, Any]) -> UserAccount:
    # Overlay onto the freshest stored map so fields owned by other screens survive.
    latest = ctx.store.get_current_user() or ctx.user
    merged = latest.preferences.merged(**changes)
    ctx.user = ctx.store.update_user_metadata({"preferences": merged.to_metadata()})
    logger.info("Preferences saved: user=%s fields=%s", ctx.user.id, sorted(k for k, v in changes.items() if v is not None))
    return ctx.user


def update_notification_preferences(ctx: SessionContext, payload: NotificationPreferencesUpdate) -> UserAccount:
    return _save_preferences(ctx, payload.model_dump())


def update_appearance_preferences(ctx: SessionContext, payload: AppearancePreferencesUpdate) -> UserAccount:
    return _save_preferences(ctx, payload.model_dump())


def change_theme(ctx: SessionContext, theme: str) -> UserAccount:
    return _save_preferences(ctx, {"theme": theme})


def validate_new_password(new_password: str, confirm_password: str) -> None:
    min_length = settings.PASSWORD_MIN_LENGTH
    if len(new_password) < min_length:
        raise PasswordValidationError(f"New password must be at least {min_length} characters", field="new_password")
    if new_password != confirm_password:
        raise PasswordValidationError("New password and confirmation do not match", field="confirm_password")


def update_password(ctx: SessionContext, payload: PasswordUpdate) -> None:
    validate_new_password(payload.new_password, payload.confirm_password)
    ctx.store.update_password(payload.new_password)
