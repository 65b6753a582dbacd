"""Settings screen endpoints (profile, notifications, appearance, security)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.deps import SessionContext, get_session_context
from app.schemas.preferences import AppearancePreferencesUpdate, NotificationPreferencesUpdate, ThemeUpdate
from app.schemas.settings import PasswordUpdate, PasswordUpdateOut, SecurityOut, SettingsOut
from app.schemas.user import ProfileUpdate, UserOut
from app.services.settings import (
    change_theme,
    load_settings,
    security_summary,
    update_appearance_preferences,
    update_notification_preferences,
    update_password,
    update_profile,
)

router = APIRouter()


@router.get("/", response_model=SettingsOut)
def get_settings(ctx: SessionContext = Depends(get_session_context)) -> SettingsOut:
    return load_settings(ctx)


@router.put("/profile", response_model=UserOut)
def put_profile(payload: ProfileUpdate, ctx: SessionContext = Depends(get_session_context)) -> UserOut:
    return UserOut.from_account(update_profile(ctx, payload.full_name))


@router.put("/notifications", response_model=UserOut)
def put_notification_preferences(
    payload: NotificationPreferencesUpdate,
    ctx: SessionContext = Depends(get_session_context),
) -> UserOut:
    return UserOut.from_account(update_notification_preferences(ctx, payload))


@router.put("/appearance", response_model=UserOut)
def put_appearance_preferences(
    payload: AppearancePreferencesUpdate,
    ctx: SessionContext = Depends(get_session_context),
) -> UserOut:
    return UserOut.from_account(update_appearance_preferences(ctx, payload))


@router.put("/theme", response_model=UserOut)
def put_theme(payload: ThemeUpdate, ctx: SessionContext = Depends(get_session_context)) -> UserOut:
    return UserOut.from_account(change_theme(ctx, payload.theme))


@router.get("/security", response_model=SecurityOut)
def get_security(_: SessionContext = Depends(get_session_context)) -> SecurityOut:
    return security_summary()


@router.post("/security/password", response_model=PasswordUpdateOut)
def post_password(payload: PasswordUpdate, ctx: SessionContext = Depends(get_session_context)) -> PasswordUpdateOut:
    update_password(ctx, payload)
    return PasswordUpdateOut(message="password_updated")
