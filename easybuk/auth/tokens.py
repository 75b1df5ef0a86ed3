"""
Session token issue and verification.

Access and refresh tokens are self-contained signed JWTs; nothing about them
is stored server-side.  Verification is CPU-only and never raises: any
failure yields None, which callers turn into a 401.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import NamedTuple

from jose import JWTError, jwt

from easybuk.auth.constants import TOKEN_TYPE_ACCESS, TOKEN_TYPE_REFRESH
from easybuk.config import Settings
from easybuk.core.constants import Role
from easybuk.core.models.user import CurrentUser
from easybuk.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SessionTokens(NamedTuple):
    access_token: str
    refresh_token: str


def _encode(claims: dict, settings: Settings, expire_seconds: int) -> str:
    if not settings.jwt_secret:
        raise ConfigurationError("JWT_SECRET is not set; refusing to issue tokens")
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": now,
        "exp": now + timedelta(seconds=expire_seconds),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    roles: list[str],
    settings: Settings,
) -> str:
    return _encode(
        {
            "sub": str(user_id),
            "email": email,
            "roles": roles,
            "type": TOKEN_TYPE_ACCESS,
        },
        settings,
        settings.jwt_expire_seconds,
    )


def create_refresh_token(user_id: uuid.UUID, email: str, settings: Settings) -> str:
    return _encode(
        {"sub": str(user_id), "email": email, "type": TOKEN_TYPE_REFRESH},
        settings,
        settings.jwt_refresh_expire_seconds,
    )


def issue_session_tokens(
    user_id: uuid.UUID,
    email: str,
    roles: list[str],
    settings: Settings,
) -> SessionTokens:
    return SessionTokens(
        access_token=create_access_token(user_id, email, roles, settings),
        refresh_token=create_refresh_token(user_id, email, settings),
    )


def decode_token(token: str, settings: Settings) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


def verify_token(
    token: str | None,
    settings: Settings,
    *,
    expected_type: str = TOKEN_TYPE_ACCESS,
) -> CurrentUser | None:
    """Return the identity carried by ``token``, or None if it is unusable."""
    if not token or not settings.jwt_secret:
        return None
    try:
        payload = decode_token(token, settings)
        if payload.get("type") != expected_type:
            return None
        return CurrentUser(
            id=uuid.UUID(payload["sub"]),
            email=payload.get("email") or "",
            roles=[Role(r) for r in payload.get("roles") or []],
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (JWTError, ValueError, KeyError, TypeError) as exc:
        logger.debug("Rejected %s token: %s", expected_type, exc)
        return None
