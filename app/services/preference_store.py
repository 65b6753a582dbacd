"""Adapter over the hosted auth/database service used by the settings and header flows."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any

from app.core.exceptions import PreferenceStoreError
from app.core.security import decode_access_token, token_expiry
from app.integrations.supabase.client import SupabaseClient, eq
from app.schemas.activity import Activity
from app.schemas.user import Profile, UserAccount

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
ACTIVITIES_TABLE = "activities"


@dataclass(frozen=True)
class Session:
    access_token: str
    user_id: str
    email: str | None = None
    expires_at: dt.datetime | None = None
    refresh_token: str | None = None


class PreferenceStore:
    """Operations the settings screens and the header need, bound to one access token.

    Every method is a single remote call. Failures raise ``PreferenceStoreError``
    with the service's own message; nothing is retried.
    """

    def __init__(self, access_token: str | None, *, client: SupabaseClient | None = None) -> None:
        self.access_token = access_token
        self.client = client or SupabaseClient()

    @classmethod
    def sign_in(
        cls,
        email: str,
        password: str,
        *,
        client: SupabaseClient | None = None,
    ) -> tuple["PreferenceStore", Session, UserAccount]:
        client = client or SupabaseClient()
        data = client.sign_in_with_password(email, password)
        access_token = data.get("access_token")
        user_payload = data.get("user")
        if not access_token or not isinstance(user_payload, dict):
            raise PreferenceStoreError("invalid_sign_in_response", operation="sign_in")
        user = UserAccount.from_auth_payload(user_payload)
        expires_at = None
        if data.get("expires_at"):
            expires_at = dt.datetime.fromtimestamp(int(data["expires_at"]), tz=dt.timezone.utc)
        session = Session(
            access_token=access_token,
            user_id=user.id,
            email=user.email,
            expires_at=expires_at,
            refresh_token=data.get("refresh_token"),
        )
        logger.info("User signed in: %s", user.id)
        return cls(access_token, client=client), session, user

    def get_session(self) -> Session | None:
        if not self.access_token:
            return None
        try:
            claims = decode_access_token(self.access_token)
        except ValueError as exc:
            logger.info("Rejecting access token: %s", exc)
            return None
        user_id = claims.get("sub")
        if not user_id:
            return None
        return Session(
            access_token=self.access_token,
            user_id=str(user_id),
            email=claims.get("email"),
            expires_at=token_expiry(claims),
        )

    def get_current_user(self) -> UserAccount | None:
        if not self.access_token:
            return None
        try:
            payload = self.client.get_user(self.access_token)
        except PreferenceStoreError as exc:
            if exc.details.get("upstream_status") in {401, 403}:
                return None
            raise
        if not payload.get("id"):
            return None
        return UserAccount.from_auth_payload(payload)

    def update_user_metadata(self, patch: dict[str, Any]) -> UserAccount:
        payload = self.client.update_user(self._token(), {"data": patch})
        logger.info("User metadata updated: keys=%s", sorted(patch))
        return UserAccount.from_auth_payload(payload)

    def update_password(self, new_password: str) -> None:
        self.client.update_user(self._token(), {"password": new_password})
        logger.info("Password updated")

    def get_profile_by_id(self, user_id: str) -> Profile:
        row = self.client.select_one(self._token(), PROFILES_TABLE, filters={"id": eq(user_id)})
        return Profile.model_validate(row)

    def update_profile(self, user_id: str, patch: dict[str, Any]) -> Profile | None:
        rows = self.client.update(self._token(), PROFILES_TABLE, filters={"id": eq(user_id)}, patch=patch)
        logger.info("Profile updated: %s", user_id)
        if not rows:
            return None
        return Profile.model_validate(rows[0])

    def list_activities(self, user_id: str) -> list[Activity]:
        rows = self.client.select_many(
            self._token(),
            ACTIVITIES_TABLE,
            filters={"user_id": eq(user_id)},
            order="date.desc",
        )
        return [Activity.model_validate(row) for row in rows]

    def sign_out(self) -> None:
        self.client.sign_out(self._token())
        logger.info("User signed out")

    def _token(self) -> str:
        if not self.access_token:
            raise PreferenceStoreError("not_authenticated", upstream_status=401)
        return self.access_token
