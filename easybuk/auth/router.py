"""
EasyBuk: auth router.

Only HTTP concerns live here:
  - Route declarations, HTTP methods, status codes, response_model
  - Dependency injection (session, settings, current user)
  - Session cookies on the outgoing response
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.auth.constants import REFRESH_TOKEN_COOKIE
from easybuk.auth.controller import (
    add_role as add_role_controller,
    login as login_controller,
    me as me_controller,
    refresh as refresh_controller,
    send_verification as send_verification_controller,
    signup as signup_controller,
    verify_email as verify_email_controller,
)
from easybuk.auth.cookies import clear_auth_cookies, set_access_cookie, set_auth_cookies
from easybuk.auth.dependencies import get_current_user, get_current_user_optional
from easybuk.auth.schemas import (
    AddRoleRequest,
    AuthResponse,
    LoginRequest,
    SendVerificationRequest,
    SignupRequest,
    VerifyEmailRequest,
)
from easybuk.config import Settings
from easybuk.core.models.user import CurrentUser
from easybuk.core.schemas import MessageResponse
from easybuk.database import get_db
from easybuk.dependencies import get_settings
from easybuk.rate_limit import limiter

router = APIRouter(prefix="/auth", tags=["auth"])


# ── Email + password ──────────────────────────────────────────────────────────

@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account and start a session",
)
@limiter.limit("5/hour")
async def signup(
    request: Request,
    response: Response,
    body: SignupRequest,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    result, tokens = await signup_controller(session, body, settings, background_tasks)
    set_auth_cookies(response, tokens, settings)
    return result


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Sign in with email and password",
)
@limiter.limit("10/minute")
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    result, tokens = await login_controller(session, body, settings)
    set_auth_cookies(response, tokens, settings)
    return result


# ── Session ───────────────────────────────────────────────────────────────────

@router.post(
    "/refresh",
    response_model=AuthResponse,
    summary="Reissue both session cookies from the refresh cookie",
)
@limiter.limit("30/minute")
async def refresh(
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    result, tokens = await refresh_controller(
        session, request.cookies.get(REFRESH_TOKEN_COOKIE), settings
    )
    set_auth_cookies(response, tokens, settings)
    return result


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Clear the session cookies",
)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    clear_auth_cookies(response, settings)
    return MessageResponse(message="Logged out successfully.")


@router.get(
    "/me",
    response_model=AuthResponse,
    summary="Current user with roles and linked profiles",
)
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> AuthResponse:
    return await me_controller(session, current_user)


@router.post(
    "/add-role",
    response_model=AuthResponse,
    summary="Add CLIENT or PROVIDER to the current account",
)
async def add_role(
    response: Response,
    body: AddRoleRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    result, access_token = await add_role_controller(
        session, body, current_user, settings
    )
    set_access_cookie(response, access_token, settings)
    return result


# ── Email verification ────────────────────────────────────────────────────────

@router.post(
    "/send-verification",
    response_model=MessageResponse,
    summary="Email a verification link to the caller or to the given address",
)
@limiter.limit("5/hour")
async def send_verification(
    request: Request,
    background_tasks: BackgroundTasks,
    body: SendVerificationRequest | None = None,
    current_user: CurrentUser | None = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    return await send_verification_controller(
        session, body, current_user, settings, background_tasks
    )


@router.post(
    "/verify-email",
    response_model=MessageResponse,
    summary="Redeem an email verification token",
)
@limiter.limit("20/minute")
async def verify_email(
    request: Request,
    body: VerifyEmailRequest,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    return await verify_email_controller(session, body)
