"""Authentication endpoints (sign-in, sign-out, header identity)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.core.config import settings
from app.core.deps import SessionContext, get_preference_store, get_session_context, get_supabase_client
from app.integrations.supabase.client import SupabaseClient
from app.schemas.auth import HeaderOut, LoginRequest, LogoutResponse, NavigationTargets, SessionOut
from app.schemas.user import UserOut
from app.services.preference_store import PreferenceStore

router = APIRouter()

HOME_PATH = "/"


def _set_session_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        settings.COOKIE_NAME,
        access_token,
        httponly=True,
        samesite="lax",
        secure=settings.ENV != "development",
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.COOKIE_NAME, path="/")


@router.post("/login", response_model=SessionOut)
def login_user(
    payload: LoginRequest,
    response: Response,
    client: SupabaseClient = Depends(get_supabase_client),
) -> SessionOut:
    _, session, user = PreferenceStore.sign_in(payload.email, payload.password, client=client)
    _set_session_cookie(response, session.access_token)
    return SessionOut(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user=UserOut.from_account(user),
    )


@router.post("/logout", response_model=LogoutResponse)
def logout_user(response: Response, store: PreferenceStore = Depends(get_preference_store)) -> LogoutResponse:
    # A failed remote sign-out raises before the cookie is cleared; the session stays usable.
    if store.access_token:
        store.sign_out()
    _clear_session_cookie(response)
    return LogoutResponse(message="signed_out", redirect_to=HOME_PATH)


@router.get("/me", response_model=HeaderOut)
def get_header_identity(ctx: SessionContext = Depends(get_session_context)) -> HeaderOut:
    return HeaderOut(
        user=UserOut.from_account(ctx.user),
        navigation=NavigationTargets(login=settings.LOGIN_PATH),
    )
