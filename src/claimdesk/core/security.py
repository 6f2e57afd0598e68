from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from claimdesk.core.config import settings


def create_access_token(*, claims: dict[str, Any], expires_minutes: int | None = None) -> str:
    """Mint a signed token carrying ``claims``. Used for local development and tests."""
    expire_minutes = expires_minutes or settings.access_token_exp_minutes
    expire = datetime.now(UTC) + timedelta(minutes=expire_minutes)
    payload: dict[str, Any] = {**claims, "exp": expire}
    if settings.jwt_audience and "aud" not in payload:
        payload["aud"] = settings.jwt_audience
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    options = {"verify_aud": bool(settings.jwt_audience)}
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError:
        return None
    return payload if isinstance(payload, dict) else None
