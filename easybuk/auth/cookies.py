"""Session cookie helpers.  Both cookies are HTTP-only and scoped to ``/``."""
from fastapi import Response

from easybuk.auth.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from easybuk.auth.tokens import SessionTokens
from easybuk.config import Settings


def _set_cookie(
    response: Response, key: str, value: str, max_age: int, settings: Settings
) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def set_access_cookie(response: Response, access_token: str, settings: Settings) -> None:
    _set_cookie(
        response, ACCESS_TOKEN_COOKIE, access_token, settings.jwt_expire_seconds, settings
    )


def set_auth_cookies(response: Response, tokens: SessionTokens, settings: Settings) -> None:
    set_access_cookie(response, tokens.access_token, settings)
    _set_cookie(
        response,
        REFRESH_TOKEN_COOKIE,
        tokens.refresh_token,
        settings.jwt_refresh_expire_seconds,
        settings,
    )


def clear_auth_cookies(response: Response, settings: Settings) -> None:
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        _set_cookie(response, key, "", 0, settings)
