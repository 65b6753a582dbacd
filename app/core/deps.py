"""Common FastAPI dependencies for the signed-in session."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request

from app.core.config import settings
from app.core.exceptions import SessionExpiredError
from app.integrations.supabase.client import SupabaseClient
from app.schemas.user import UserAccount
from app.services.preference_store import PreferenceStore, Session


@dataclass
class SessionContext:
    """Session, cached user and store handed explicitly to each screen."""

    session: Session
    user: UserAccount
    store: PreferenceStore


def _extract_bearer_token(request: Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    cleaned = token.strip()
    return cleaned or None


def get_access_token(request: Request) -> str | None:
    return _extract_bearer_token(request) or request.cookies.get(settings.COOKIE_NAME) or None


def get_supabase_client() -> SupabaseClient:
    return SupabaseClient()


def get_preference_store(
    request: Request,
    client: SupabaseClient = Depends(get_supabase_client),
) -> PreferenceStore:
    return PreferenceStore(get_access_token(request), client=client)


def get_session_context(store: PreferenceStore = Depends(get_preference_store)) -> SessionContext:
    session = store.get_session()
    if session is None:
        raise SessionExpiredError("not_authenticated", login_path=settings.LOGIN_PATH)

    user = store.get_current_user()
    if user is None:
        raise SessionExpiredError("user_not_found", login_path=settings.LOGIN_PATH)

    return SessionContext(session=session, user=user, store=store)
