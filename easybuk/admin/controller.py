"""Admin domain: controller."""
from __future__ import annotations

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.admin import service
from easybuk.admin.schemas import AdminRoleData, AdminRoleRequest, AdminRoleResponse
from easybuk.auth.models import User
from easybuk.config import Settings
from easybuk.core.models.user import CurrentUser
from easybuk.email import send as email


def _role_data(user: User) -> AdminRoleData:
    return AdminRoleData(
        user_id=user.id,
        email=user.email,
        roles=user.roles,
        admin_id=user.admin_profile.id if user.admin_profile is not None else None,
    )


async def grant_admin(
    session: AsyncSession,
    body: AdminRoleRequest,
    current_user: CurrentUser,
    settings: Settings,
    background_tasks: BackgroundTasks,
) -> AdminRoleResponse:
    user = await service.grant_admin(session, current_user.id, body.user_email, body.reason)
    background_tasks.add_task(
        email.send_admin_role_changed, user.email, user.name, True, settings
    )
    return AdminRoleResponse(
        message=f"Admin role successfully granted to {user.email}",
        data=_role_data(user),
    )


async def revoke_admin(
    session: AsyncSession,
    body: AdminRoleRequest,
    current_user: CurrentUser,
    settings: Settings,
    background_tasks: BackgroundTasks,
) -> AdminRoleResponse:
    user = await service.revoke_admin(session, current_user.id, body.user_email, body.reason)
    background_tasks.add_task(
        email.send_admin_role_changed, user.email, user.name, False, settings
    )
    return AdminRoleResponse(
        message=f"Admin role successfully removed from {user.email}",
        data=_role_data(user),
    )
