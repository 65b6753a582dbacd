from __future__ import annotations

import copy
import datetime as dt
import json
import os
import sys
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

# Must be set before app.core.config is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "")

import httpx  # noqa: E402
import pytest  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.deps import SessionContext  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.integrations.supabase.client import SupabaseClient  # noqa: E402
from app.models import NotificationReadState  # noqa: E402,F401
from app.services.preference_store import PreferenceStore  # noqa: E402

USER_ID = "5d1f6f1e-0000-4000-8000-000000000001"
USER_EMAIL = "rina@example.com"
USER_PASSWORD = "hunter22"


def make_token(sub: str = USER_ID, *, email: str = USER_EMAIL, expires_in: int = 3600) -> str:
    now = int(dt.datetime.now(dt.timezone.utc).timestamp())
    claims = {"sub": sub, "email": email, "aud": "authenticated", "iat": now, "exp": now + expires_in}
    return jwt.encode(claims, "not-the-configured-secret", algorithm="HS256")


class FakeSupabase:
    """In-memory stand-in for the hosted auth + PostgREST endpoints."""

    def __init__(self) -> None:
        self.token = make_token()
        self.users: dict[str, dict[str, Any]] = {
            USER_ID: {
                "id": USER_ID,
                "email": USER_EMAIL,
                "user_metadata": {
                    "full_name": "Rina Putri",
                    "preferences": {
                        "theme": "dark",
                        "reduceAnimations": False,
                        "emailNotifications": False,
                        "activityReminders": True,
                        "achievementNotifications": False,
                        "marketingEmails": True,
                        "language": "id",
                    },
                },
            }
        }
        self.passwords = {USER_EMAIL: USER_PASSWORD}
        self.profiles: dict[str, dict[str, Any]] = {
            USER_ID: {
                "id": USER_ID,
                "full_name": "Rina Putri",
                "email": USER_EMAIL,
                "created_at": "2026-01-02T03:04:05+00:00",
                "updated_at": "2026-01-02T03:04:05+00:00",
            }
        }
        self.activities: dict[str, list[dict[str, Any]]] = {USER_ID: []}
        self.failures: dict[tuple[str, str], tuple[int, dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        self.signed_out: list[str] = []

    def fail(self, method: str, path: str, status: int, body: dict[str, Any]) -> None:
        self.failures[(method, path)] = (status, body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self) -> SupabaseClient:
        return SupabaseClient(base_url="http://supabase.test", api_key="anon-test-key", transport=self.transport())

    def _user_for(self, request: httpx.Request) -> dict[str, Any] | None:
        auth = request.headers.get("Authorization", "")
        if auth != f"Bearer {self.token}":
            return None
        return self.users[USER_ID]

    def _eq(self, request: httpx.Request, column: str) -> str | None:
        params = parse_qs(request.url.query.decode())
        value = (params.get(column) or [""])[0]
        return value[3:] if value.startswith("eq.") else None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.failures:
            status, body = self.failures.pop(key)
            return httpx.Response(status, json=body)

        path = request.url.path
        if path == "/auth/v1/token" and request.method == "POST":
            body = json.loads(request.content)
            if self.passwords.get(body.get("email")) != body.get("password"):
                return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})
            return httpx.Response(
                200,
                json={
                    "access_token": self.token,
                    "refresh_token": "refresh-1",
                    "expires_at": 1_900_000_000,
                    "user": copy.deepcopy(self.users[USER_ID]),
                },
            )

        if path.startswith("/auth/v1/"):
            user = self._user_for(request)
            if user is None:
                return httpx.Response(401, json={"code": 401, "msg": "invalid JWT: unable to parse or verify signature"})
            if path == "/auth/v1/user" and request.method == "GET":
                return httpx.Response(200, json=copy.deepcopy(user))
            if path == "/auth/v1/user" and request.method == "PUT":
                body = json.loads(request.content)
                if "data" in body:
                    user["user_metadata"].update(copy.deepcopy(body["data"]))
                if "password" in body:
                    self.passwords[user["email"]] = body["password"]
                return httpx.Response(200, json=copy.deepcopy(user))
            if path == "/auth/v1/logout" and request.method == "POST":
                self.signed_out.append(user["id"])
                return httpx.Response(204)

        if path == "/rest/v1/profiles":
            if self._user_for(request) is None:
                return httpx.Response(401, json={"message": "JWT expired"})
            profile_id = self._eq(request, "id")
            row = self.profiles.get(profile_id or "")
            if request.method == "GET":
                if row is None:
                    return httpx.Response(406, json={"message": "JSON object requested, multiple (or no) rows returned"})
                return httpx.Response(200, json=copy.deepcopy(row))
            if request.method == "PATCH":
                if row is None:
                    return httpx.Response(200, json=[])
                row.update(json.loads(request.content))
                return httpx.Response(200, json=[copy.deepcopy(row)])

        if path == "/rest/v1/activities" and request.method == "GET":
            user_id = self._eq(request, "user_id") or ""
            return httpx.Response(200, json=copy.deepcopy(self.activities.get(user_id, [])))

        return httpx.Response(404, json={"message": f"no route for {request.method} {path}"})


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def store(supabase: FakeSupabase) -> PreferenceStore:
    return PreferenceStore(supabase.token, client=supabase.client())


@pytest.fixture
def ctx(store: PreferenceStore) -> SessionContext:
    session = store.get_session()
    user = store.get_current_user()
    assert session is not None and user is not None
    return SessionContext(session=session, user=user, store=store)


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    SessionTesting = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = SessionTesting()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()
