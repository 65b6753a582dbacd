"""Helpers for reading the access tokens issued by the hosted auth service."""

from __future__ import annotations

import datetime as dt
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import settings

JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"


def decode_access_token(token: str) -> dict[str, Any]:
    """Return the claims of a hosted-service access token.

    The signature is only checked when ``SUPABASE_JWT_SECRET`` is configured;
    without it the token is still checked for expiry here and verified
    remotely when the user record is fetched.
    """
    secret = settings.SUPABASE_JWT_SECRET.strip()
    try:
        if secret:
            claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE)
        else:
            claims = jwt.get_unverified_claims(token)
    except ExpiredSignatureError as exc:
        raise ValueError("expired_token") from exc
    except JWTError as exc:
        raise ValueError("invalid_token") from exc

    exp = claims.get("exp")
    if exp is not None and not secret:
        now = int(dt.datetime.now(dt.timezone.utc).timestamp())
        if int(exp) <= now:
            raise ValueError("expired_token")
    return claims


def token_expiry(claims: dict[str, Any]) -> dt.datetime | None:
    exp = claims.get("exp")
    if exp is None:
        return None
    return dt.datetime.fromtimestamp(int(exp), tz=dt.timezone.utc)
