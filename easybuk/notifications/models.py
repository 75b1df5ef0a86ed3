"""
EasyBuk: SQLAlchemy ORM model for in-app notifications.

Tables owned by this module:
  - notifications   Per-user inbox entries; mutated only by their owner
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from easybuk.core.database import Base, JSONType, UTCDateTime, utcnow
from easybuk.notifications.constants import NotificationType


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        sa.Index("ix_notifications_user_unread", "user_id", "is_read"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[NotificationType] = mapped_column(
        sa.Enum(
            NotificationType,
            name="notificationtype",
            native_enum=False,
            values_callable=lambda e: [x.value for x in e],
        ),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    message: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    # Free-form payload for the client, e.g. {"bookingId": "..."}
    data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)

    is_read: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=False)
    read_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    # Hidden from listings once past; rows are not purged automatically.
    expires_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
