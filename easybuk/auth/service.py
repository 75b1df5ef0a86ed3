"""
EasyBuk: pure business logic for authentication and email verification.

Rules:
  - Zero FastAPI imports.
  - Only the AsyncSession passed in is touched; the caller owns the
    transaction (``get_db`` commits on success, rolls back on error).
  - flush() rather than commit() so callers can compose several steps into
    one unit of work.  The single exception is the expired-token purge in
    consume_verification_token.
"""
from __future__ import annotations

import logging
import uuid
from datetime import timedelta

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from easybuk.auth.constants import UserStatus
from easybuk.auth.models import (
    ClientProfile,
    ProviderProfile,
    User,
    VerificationToken,
)
from easybuk.auth.utils import (
    generate_verification_token,
    hash_password,
    verify_password,
)
from easybuk.core.constants import Role
from easybuk.core.database import utcnow
from easybuk.exceptions import (
    AccountBanned,
    AccountSuspended,
    InvalidCredentials,
    InvalidToken,
    RoleAlreadyHeld,
    TokenAlreadyUsed,
    TokenExpired,
    UserAlreadyExists,
    UserNotFound,
)

logger = logging.getLogger(__name__)


# ── User queries ──────────────────────────────────────────────────────────────

async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(
        select(User).where(func.lower(User.email) == email.strip().lower())
    )
    return result.scalar_one_or_none()


async def get_user_by_id(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    refresh: bool = False,
) -> User | None:
    """Load a user with its linked profiles.

    ``refresh`` re-reads a row already in the identity map, so profiles
    created earlier in the same unit of work are picked up.
    """
    stmt = select(User).where(User.id == user_id)
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


def active_role(roles: list[str]) -> Role | None:
    """The role the client app opens in: CLIENT, then PROVIDER, then ADMIN."""
    for candidate in (Role.CLIENT, Role.PROVIDER, Role.ADMIN):
        if candidate.value in roles:
            return candidate
    return Role(roles[0]) if roles else None


def assert_account_usable(user: User) -> None:
    if user.status == UserStatus.BANNED:
        raise AccountBanned()
    if user.status == UserStatus.SUSPENDED:
        raise AccountSuspended()


def _attach_role_profile(user: User, role: Role) -> None:
    if role == Role.CLIENT and user.client_profile is None:
        user.client_profile = ClientProfile()
    elif role == Role.PROVIDER and user.provider_profile is None:
        user.provider_profile = ProviderProfile()


# ── Registration ──────────────────────────────────────────────────────────────

async def register_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    name: str,
    role: Role,
    phone: str | None = None,
) -> User:
    """
    Create a user and the profile that goes with the chosen role.

    Both rows are flushed together so a failure later in the request rolls
    back the pair.
    """
    if await get_user_by_email(session, email) is not None:
        raise UserAlreadyExists()

    user = User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        name=name,
        phone=phone,
        roles=[role.value],
        status=UserStatus.PENDING_VERIFICATION,
        client_profile=None,
        provider_profile=None,
        admin_profile=None,
    )
    _attach_role_profile(user, role)
    session.add(user)
    await session.flush()
    return user


# ── Authentication ────────────────────────────────────────────────────────────

async def authenticate_user(
    session: AsyncSession,
    email: str,
    password: str,
) -> User:
    """
    Verify credentials and return the User.

    Unknown email, passwordless account and wrong password all raise the
    same InvalidCredentials, and all three pay for one hash verification.
    """
    user = await get_user_by_email(session, email)
    password_hash = user.password_hash if user is not None else None
    if not verify_password(password, password_hash) or user is None:
        raise InvalidCredentials()
    assert_account_usable(user)
    return user


async def record_login(session: AsyncSession, user: User) -> None:
    user.last_active_at = utcnow()
    await session.flush()


# ── Roles ─────────────────────────────────────────────────────────────────────

async def add_role_to_user(
    session: AsyncSession,
    user_id: uuid.UUID,
    role: Role,
) -> User:
    user = await get_user_by_id(session, user_id)
    if user is None:
        raise UserNotFound()
    if role.value in user.roles:
        raise RoleAlreadyHeld(role.value)

    user.roles = [*user.roles, role.value]
    _attach_role_profile(user, role)
    await session.flush()
    return user


# ── Email verification tokens ─────────────────────────────────────────────────

async def issue_verification_token(
    session: AsyncSession,
    user: User,
    *,
    expire_seconds: int,
) -> VerificationToken:
    """Persist a fresh token; earlier outstanding tokens stay valid."""
    record = VerificationToken(
        token=generate_verification_token(),
        user_id=user.id,
        identifier=user.email,
        expires_at=utcnow() + timedelta(seconds=expire_seconds),
    )
    session.add(record)
    await session.flush()
    return record


async def get_verification_token(
    session: AsyncSession, token: str
) -> VerificationToken | None:
    result = await session.execute(
        select(VerificationToken).where(VerificationToken.token == token)
    )
    return result.scalar_one_or_none()


async def consume_verification_token(session: AsyncSession, token: str) -> User:
    """
    Redeem a verification token and mark its user's email as verified.

    Expired tokens are deleted, and the deletion committed, before
    TokenExpired propagates.  The ``used`` flag is flipped with a
    conditional UPDATE so that of two concurrent redemptions exactly one
    wins.
    """
    record = await get_verification_token(session, token)
    if record is None:
        raise InvalidToken()

    if record.expires_at < utcnow():
        await session.delete(record)
        await session.commit()
        raise TokenExpired()

    if record.used:
        raise TokenAlreadyUsed()

    result = await session.execute(
        update(VerificationToken)
        .where(VerificationToken.id == record.id, VerificationToken.used.is_(False))
        .values(used=True)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise TokenAlreadyUsed()
    set_committed_value(record, "used", True)

    user = await get_user_by_id(session, record.user_id)
    if user is None:
        raise InvalidToken()
    user.email_verified_at = utcnow()
    await session.flush()
    logger.info("Email verified for user %s", user.id)
    return user
