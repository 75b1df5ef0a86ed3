"""Notifications controller: service calls in, response models out."""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.core.guards import parse_resource_id
from easybuk.core.schemas import MessageResponse
from easybuk.exceptions import NotificationNotFound
from easybuk.notifications import service
from easybuk.notifications.schemas import (
    BulkReadStateRequest,
    NotificationListResponse,
    NotificationResponse,
    NotificationView,
    UpdatedCountResponse,
)


def _notification_id(raw: str) -> uuid.UUID:
    return parse_resource_id(raw, not_found=NotificationNotFound)


async def list_notifications(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    limit: int,
    unread_only: bool,
) -> NotificationListResponse:
    notifications = await service.list_notifications(
        session, user_id, limit=limit, unread_only=unread_only
    )
    return NotificationListResponse(
        notifications=[NotificationView.model_validate(n) for n in notifications],
        unread_count=await service.count_unread(session, user_id),
        total=len(notifications),
    )


async def set_read_state(
    session: AsyncSession, user_id: uuid.UUID, body: BulkReadStateRequest
) -> UpdatedCountResponse:
    updated = await service.set_read_state(
        session, user_id, body.notification_ids, body.mark_as_read
    )
    return UpdatedCountResponse(updated_count=updated)


async def mark_read(
    session: AsyncSession, user_id: uuid.UUID, notification_id: str
) -> NotificationResponse:
    notification = await service.mark_read(
        session, user_id, _notification_id(notification_id)
    )
    return NotificationResponse(
        notification=NotificationView.model_validate(notification)
    )


async def mark_all_read(
    session: AsyncSession, user_id: uuid.UUID
) -> UpdatedCountResponse:
    return UpdatedCountResponse(
        updated_count=await service.mark_all_read(session, user_id)
    )


async def delete_notification(
    session: AsyncSession, user_id: uuid.UUID, notification_id: str
) -> MessageResponse:
    await service.delete_notification(
        session, user_id, _notification_id(notification_id)
    )
    return MessageResponse(message="Notification deleted successfully.")
