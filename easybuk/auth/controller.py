"""
EasyBuk: auth controller (request orchestration layer).

Responsibilities:
  - Receive validated input from the router.
  - Call service functions (which own business logic).
  - Issue session tokens and compose the response model.

Cookies are written by the router; controllers hand back the tokens.
"""
from __future__ import annotations

import logging
import uuid

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.auth.constants import TOKEN_TYPE_REFRESH
from easybuk.auth.models import User
from easybuk.auth.schemas import (
    AddRoleRequest,
    AdminProfileView,
    AuthResponse,
    ClientProfileView,
    LoginRequest,
    ProviderProfileView,
    SendVerificationRequest,
    SignupRequest,
    UserSessionView,
    VerifyEmailRequest,
)
from easybuk.auth.service import (
    active_role,
    add_role_to_user,
    assert_account_usable,
    authenticate_user,
    consume_verification_token,
    get_user_by_email,
    get_user_by_id,
    issue_verification_token,
    record_login,
    register_user,
)
from easybuk.auth.tokens import (
    SessionTokens,
    create_access_token,
    issue_session_tokens,
    verify_token,
)
from easybuk.config import Settings
from easybuk.core.models.user import CurrentUser
from easybuk.core.schemas import MessageResponse
from easybuk.email import send as email
from easybuk.exceptions import EmailRequired, SessionExpired, UserNotFound

logger = logging.getLogger(__name__)

# Same wording whether or not the address belongs to an account.
VERIFICATION_SENT_MESSAGE = (
    "If an account exists for this email, a verification link has been sent."
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _profile_view(view_cls, profile):
    return view_cls.model_validate(profile) if profile is not None else None


def build_session_view(user: User) -> UserSessionView:
    return UserSessionView(
        id=user.id,
        email=user.email,
        name=user.name,
        phone=user.phone,
        image=user.image,
        roles=user.roles,
        active_role=active_role(user.roles),
        email_verified=user.is_email_verified,
        email_verified_at=user.email_verified_at,
        client_profile=_profile_view(ClientProfileView, user.client_profile),
        provider_profile=_profile_view(ProviderProfileView, user.provider_profile),
        admin_profile=_profile_view(AdminProfileView, user.admin_profile),
    )


async def get_user_session(
    session: AsyncSession, user_id: uuid.UUID
) -> UserSessionView | None:
    """Re-read the user behind a verified token; None once the account is gone."""
    user = await get_user_by_id(session, user_id, refresh=True)
    if user is None:
        return None
    return build_session_view(user)


async def _session_response(
    session: AsyncSession, user: User, settings: Settings
) -> tuple[AuthResponse, SessionTokens]:
    tokens = issue_session_tokens(user.id, user.email, list(user.roles), settings)
    view = await get_user_session(session, user.id)
    if view is None:
        raise UserNotFound()
    return AuthResponse(user=view), tokens


async def _schedule_verification_email(
    session: AsyncSession,
    user: User,
    settings: Settings,
    background_tasks: BackgroundTasks,
) -> None:
    record = await issue_verification_token(
        session, user, expire_seconds=settings.email_verify_expire_seconds
    )
    background_tasks.add_task(
        email.send_email_verification,
        user.email,
        user.name,
        email.verification_url(settings, record.token),
        settings,
    )


# ── Signup / login ────────────────────────────────────────────────────────────

async def signup(
    session: AsyncSession,
    body: SignupRequest,
    settings: Settings,
    background_tasks: BackgroundTasks,
) -> tuple[AuthResponse, SessionTokens]:
    user = await register_user(
        session,
        email=body.email,
        password=body.password,
        name=body.name,
        role=body.role,
        phone=body.phone,
    )
    await _schedule_verification_email(session, user, settings, background_tasks)
    return await _session_response(session, user, settings)


async def login(
    session: AsyncSession,
    body: LoginRequest,
    settings: Settings,
) -> tuple[AuthResponse, SessionTokens]:
    user = await authenticate_user(session, body.email, body.password)
    await record_login(session, user)
    return await _session_response(session, user, settings)


# ── Session ───────────────────────────────────────────────────────────────────

async def refresh(
    session: AsyncSession,
    refresh_token: str | None,
    settings: Settings,
) -> tuple[AuthResponse, SessionTokens]:
    """Exchange a refresh cookie for a fresh token pair."""
    identity = verify_token(refresh_token, settings, expected_type=TOKEN_TYPE_REFRESH)
    if identity is None:
        raise SessionExpired()
    user = await get_user_by_id(session, identity.id)
    if user is None:
        raise SessionExpired()
    assert_account_usable(user)
    return await _session_response(session, user, settings)


async def me(session: AsyncSession, current_user: CurrentUser) -> AuthResponse:
    view = await get_user_session(session, current_user.id)
    if view is None:
        raise UserNotFound()
    return AuthResponse(user=view)


async def add_role(
    session: AsyncSession,
    body: AddRoleRequest,
    current_user: CurrentUser,
    settings: Settings,
) -> tuple[AuthResponse, str]:
    """Grant a self-service role; returns the response and a new access token."""
    user = await add_role_to_user(session, current_user.id, body.role)
    view = await get_user_session(session, user.id)
    if view is None:
        raise UserNotFound()
    access_token = create_access_token(user.id, user.email, list(user.roles), settings)
    return AuthResponse(user=view), access_token


# ── Email verification ────────────────────────────────────────────────────────

async def send_verification(
    session: AsyncSession,
    body: SendVerificationRequest | None,
    current_user: CurrentUser | None,
    settings: Settings,
    background_tasks: BackgroundTasks,
) -> MessageResponse:
    """
    Email a fresh verification link.

    A signed-in caller always gets a link for their own account.  Anonymous
    callers get the same response for unknown, verified and unverified
    addresses.
    """
    if current_user is not None:
        user = await get_user_by_id(session, current_user.id)
        if user is None:
            raise UserNotFound()
        if user.is_email_verified:
            return MessageResponse(message="Email is already verified.")
        await _schedule_verification_email(session, user, settings, background_tasks)
        return MessageResponse(message="Verification email sent.")

    if body is None or body.email is None:
        raise EmailRequired()

    user = await get_user_by_email(session, body.email)
    if user is None:
        logger.info("Verification requested for unknown email")
    elif not user.is_email_verified:
        await _schedule_verification_email(session, user, settings, background_tasks)
    return MessageResponse(message=VERIFICATION_SENT_MESSAGE)


async def verify_email(session: AsyncSession, body: VerifyEmailRequest) -> MessageResponse:
    await consume_verification_token(session, body.token)
    return MessageResponse(message="Email verified successfully.")
