"""
EasyBuk: notification store.

Every mutation is scoped to the calling user: single-row operations go
through ensure_owned (404 when absent, 403 when foreign), bulk operations
filter on user_id so foreign ids are silently skipped.
"""
from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.core.database import utcnow
from easybuk.core.guards import ensure_owned
from easybuk.exceptions import NotificationForbidden, NotificationNotFound
from easybuk.notifications.constants import DEFAULT_LIST_LIMIT, NotificationType
from easybuk.notifications.models import Notification


def _visible_to(user_id: uuid.UUID):
    return (
        Notification.user_id == user_id,
        or_(Notification.expires_at.is_(None), Notification.expires_at > utcnow()),
    )


# ── Queries ───────────────────────────────────────────────────────────────────

async def list_notifications(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    limit: int = DEFAULT_LIST_LIMIT,
    unread_only: bool = False,
) -> list[Notification]:
    """Unread first, then newest first."""
    stmt = select(Notification).where(*_visible_to(user_id))
    if unread_only:
        stmt = stmt.where(Notification.is_read.is_(False))
    stmt = stmt.order_by(
        Notification.is_read.asc(), Notification.created_at.desc()
    ).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_unread(session: AsyncSession, user_id: uuid.UUID) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(Notification)
        .where(*_visible_to(user_id), Notification.is_read.is_(False))
    )
    return result.scalar_one()


async def get_notification(
    session: AsyncSession, notification_id: uuid.UUID
) -> Notification | None:
    return await session.get(Notification, notification_id)


async def get_owned_notification(
    session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
) -> Notification:
    return ensure_owned(
        await get_notification(session, notification_id),
        user_id,
        not_found=NotificationNotFound,
        forbidden=NotificationForbidden,
    )


# ── Mutations ─────────────────────────────────────────────────────────────────

async def create_notification(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    type: NotificationType,
    title: str,
    message: str,
    data: dict[str, Any] | None = None,
    expires_at: datetime | None = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        data=data,
        expires_at=expires_at,
    )
    session.add(notification)
    await session.flush()
    return notification


async def mark_read(
    session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
) -> Notification:
    notification = await get_owned_notification(session, user_id, notification_id)
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = utcnow()
        await session.flush()
    return notification


async def mark_all_read(session: AsyncSession, user_id: uuid.UUID) -> int:
    """Mark every unread row of the user as read; returns the number changed."""
    result = await session.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        .values(is_read=True, read_at=utcnow())
    )
    return result.rowcount


async def set_read_state(
    session: AsyncSession,
    user_id: uuid.UUID,
    notification_ids: Sequence[uuid.UUID],
    mark_as_read: bool,
) -> int:
    if not notification_ids:
        return 0
    result = await session.execute(
        update(Notification)
        .where(
            Notification.user_id == user_id,
            Notification.id.in_(list(notification_ids)),
        )
        .values(is_read=mark_as_read, read_at=utcnow() if mark_as_read else None)
    )
    return result.rowcount


async def delete_notification(
    session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
) -> None:
    notification = await get_owned_notification(session, user_id, notification_id)
    await session.delete(notification)
    await session.flush()
