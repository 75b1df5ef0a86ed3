"""
EasyBuk: auth FastAPI dependencies.

Routes import their identity guards from here.  The session cookie is
checked before the Authorization header; the first token found is the only
one verified.
"""
from __future__ import annotations

from fastapi import Depends, Request

from easybuk.auth.constants import ACCESS_TOKEN_COOKIE
from easybuk.auth.tokens import verify_token
from easybuk.config import Settings
from easybuk.core.models.user import CurrentUser
from easybuk.dependencies import get_settings
from easybuk.exceptions import NotAuthenticated


def extract_token(request: Request) -> str | None:
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def get_current_user_optional(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> CurrentUser | None:
    """The caller's identity, or None for anonymous or unusable tokens."""
    return verify_token(extract_token(request), settings)


def get_current_user(
    current_user: CurrentUser | None = Depends(get_current_user_optional),
) -> CurrentUser:
    if current_user is None:
        raise NotAuthenticated()
    return current_user
