"""Supabase REST client wrapper (GoTrue auth + PostgREST tables).

Calls are made once: failures surface to the caller instead of being retried,
so a rejected update is never silently re-applied.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import settings
from app.core.exceptions import PreferenceStoreError

logger = logging.getLogger(__name__)

AUTH_PATH = "/auth/v1"
REST_PATH = "/rest/v1"
SINGLE_OBJECT_ACCEPT = "application/vnd.pgrst.object+json"


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    text = (response.text or "").strip()
    return text or f"HTTP {response.status_code}"


def eq(value: Any) -> str:
    return f"eq.{value}"


class SupabaseClient:
    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY
        self.timeout = timeout or settings.SUPABASE_TIMEOUT_SECONDS
        self.transport = transport

    def _headers(self, access_token: str | None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Accept": "application/json",
        }
        headers["Authorization"] = f"Bearer {access_token or self.api_key}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        access_token: str | None = None,
        extra_headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> Any:
        headers = self._headers(access_token)
        if extra_headers:
            headers.update(extra_headers)
        with httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=headers,
            transport=self.transport,
        ) as client:
            try:
                response = client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                logger.warning("Supabase %s failed (transport): %s", operation, exc)
                raise PreferenceStoreError(str(exc) or "network_error", operation=operation) from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning("Supabase %s failed (status=%s): %s", operation, response.status_code, message)
            raise PreferenceStoreError(message, upstream_status=response.status_code, operation=operation)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise PreferenceStoreError("invalid_response", upstream_status=response.status_code, operation=operation) from exc

    # ----- auth -----

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        data = self._request(
            "POST",
            f"{AUTH_PATH}/token",
            operation="sign_in",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return data if isinstance(data, dict) else {}

    def get_user(self, access_token: str) -> dict[str, Any]:
        data = self._request("GET", f"{AUTH_PATH}/user", operation="get_user", access_token=access_token)
        return data if isinstance(data, dict) else {}

    def update_user(self, access_token: str, attributes: dict[str, Any]) -> dict[str, Any]:
        data = self._request(
            "PUT",
            f"{AUTH_PATH}/user",
            operation="update_user",
            access_token=access_token,
            json=attributes,
        )
        return data if isinstance(data, dict) else {}

    def sign_out(self, access_token: str) -> None:
        self._request("POST", f"{AUTH_PATH}/logout", operation="sign_out", access_token=access_token)

    # ----- tables -----

    def select_one(self, access_token: str, table: str, *, filters: dict[str, str]) -> dict[str, Any]:
        data = self._request(
            "GET",
            f"{REST_PATH}/{table}",
            operation=f"select_{table}",
            access_token=access_token,
            extra_headers={"Accept": SINGLE_OBJECT_ACCEPT},
            params={"select": "*", **filters},
        )
        return data if isinstance(data, dict) else {}

    def select_many(
        self,
        access_token: str,
        table: str,
        *,
        filters: dict[str, str],
        order: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {"select": "*", **filters}
        if order:
            params["order"] = order
        data = self._request(
            "GET",
            f"{REST_PATH}/{table}",
            operation=f"select_{table}",
            access_token=access_token,
            params=params,
        )
        if isinstance(data, list):
            return [row for row in data if isinstance(row, dict)]
        return []

    def update(
        self,
        access_token: str,
        table: str,
        *,
        filters: dict[str, str],
        patch: dict[str, Any],
    ) -> list[dict[str, Any]]:
        data = self._request(
            "PATCH",
            f"{REST_PATH}/{table}",
            operation=f"update_{table}",
            access_token=access_token,
            extra_headers={"Prefer": "return=representation"},
            params=filters,
            json=patch,
        )
        if isinstance(data, list):
            return [row for row in data if isinstance(row, dict)]
        return []
