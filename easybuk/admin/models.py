"""
EasyBuk: SQLAlchemy ORM model for the admin audit trail.

Tables owned by this module:
  - admin_actions   Append-only log of privileged changes
"""
from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from easybuk.admin.constants import TARGET_TYPE_USER, AdminActionType
from easybuk.core.database import Base, UTCDateTime, utcnow


class AdminAction(Base):
    __tablename__ = "admin_actions"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    # Acting admin; kept after the admin account is removed
    admin_id: Mapped[uuid.UUID | None] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action: Mapped[AdminActionType] = mapped_column(
        sa.Enum(
            AdminActionType,
            name="adminactiontype",
            native_enum=False,
            values_callable=lambda e: [x.value for x in e],
        ),
        nullable=False,
    )
    target_type: Mapped[str] = mapped_column(
        sa.String(50), nullable=False, default=TARGET_TYPE_USER
    )
    target_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid(), nullable=False, index=True)
    reason: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
