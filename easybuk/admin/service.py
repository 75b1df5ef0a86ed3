"""
Admin domain: pure business logic (zero FastAPI imports).

Admin status is always read from the database, never from token claims,
so a revoked admin loses access on their next request.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.admin.constants import ADMIN_PERMISSIONS, AdminActionType
from easybuk.admin.models import AdminAction
from easybuk.auth.constants import UserStatus
from easybuk.auth.models import AdminProfile, User
from easybuk.auth.service import get_user_by_email, get_user_by_id
from easybuk.auth.utils import hash_password
from easybuk.core.constants import Role
from easybuk.core.database import utcnow
from easybuk.exceptions import (
    AdminRequired,
    AlreadyAdmin,
    CannotRevokeSelf,
    NotAdmin,
    UserNotFound,
)
from easybuk.notifications.constants import NotificationType
from easybuk.notifications.service import create_notification

logger = logging.getLogger(__name__)


def is_admin(user: User) -> bool:
    return Role.ADMIN.value in user.roles


async def get_admin_actor(session: AsyncSession, actor_id: uuid.UUID) -> User:
    actor = await get_user_by_id(session, actor_id)
    if actor is None or not is_admin(actor):
        raise AdminRequired()
    return actor


def _make_admin(user: User) -> None:
    user.roles = [*user.roles, Role.ADMIN.value]
    user.admin_profile = AdminProfile(permissions=list(ADMIN_PERMISSIONS))


async def log_admin_action(
    session: AsyncSession,
    *,
    admin_id: uuid.UUID | None,
    action: AdminActionType,
    target_id: uuid.UUID,
    reason: str,
) -> AdminAction:
    entry = AdminAction(
        admin_id=admin_id,
        action=action,
        target_id=target_id,
        reason=reason,
    )
    session.add(entry)
    await session.flush()
    return entry


# ── Grants ────────────────────────────────────────────────────────────────────

async def grant_admin(
    session: AsyncSession,
    actor_id: uuid.UUID,
    email: str,
    reason: str | None = None,
) -> User:
    """
    Give ``email`` the ADMIN role and full permission set.

    Role, profile, audit row and the in-app notice are flushed in the
    caller's transaction and commit or roll back together.
    """
    actor = await get_admin_actor(session, actor_id)
    target = await get_user_by_email(session, email)
    if target is None:
        raise UserNotFound()
    if is_admin(target):
        raise AlreadyAdmin()

    _make_admin(target)
    await log_admin_action(
        session,
        admin_id=actor.id,
        action=AdminActionType.GRANT_ADMIN_ROLE,
        target_id=target.id,
        reason=reason or "Admin role granted",
    )
    await create_notification(
        session,
        user_id=target.id,
        type=NotificationType.SYSTEM_ANNOUNCEMENT,
        title="Administrator access granted",
        message="You now have administrator access to EasyBuk.",
    )
    logger.info("Admin role granted to %s by %s", target.id, actor.id)
    return target


async def revoke_admin(
    session: AsyncSession,
    actor_id: uuid.UUID,
    email: str,
    reason: str | None = None,
) -> User:
    actor = await get_admin_actor(session, actor_id)
    target = await get_user_by_email(session, email)
    if target is None:
        raise UserNotFound()
    if not is_admin(target):
        raise NotAdmin()
    if target.id == actor.id:
        raise CannotRevokeSelf()

    target.roles = [r for r in target.roles if r != Role.ADMIN.value]
    target.admin_profile = None
    await log_admin_action(
        session,
        admin_id=actor.id,
        action=AdminActionType.REVOKE_ADMIN_ROLE,
        target_id=target.id,
        reason=reason or "Admin role revoked",
    )
    logger.info("Admin role revoked from %s by %s", target.id, actor.id)
    return target


async def bootstrap_admin(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    name: str,
) -> tuple[User, bool]:
    """
    Create the first admin, or elevate an existing account.

    Used out-of-band where no acting admin exists yet.  Returns
    (user, created).
    """
    user = await get_user_by_email(session, email)
    created = user is None
    if user is None:
        user = User(
            email=email.strip().lower(),
            password_hash=hash_password(password),
            name=name,
            roles=[],
            status=UserStatus.ACTIVE,
            email_verified_at=utcnow(),
            client_profile=None,
            provider_profile=None,
            admin_profile=None,
        )
        session.add(user)
        await session.flush()
    elif is_admin(user):
        return user, False

    _make_admin(user)
    await session.flush()
    await log_admin_action(
        session,
        admin_id=None,
        action=AdminActionType.GRANT_ADMIN_ROLE,
        target_id=user.id,
        reason="Bootstrap admin",
    )
    return user, created
