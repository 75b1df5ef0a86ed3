"""
EasyBuk: SQLAlchemy ORM model for provider service listings.

Tables owned by this module:
  - services   Offerings published by a provider profile
"""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from easybuk.auth.constants import ServiceCategory
from easybuk.core.database import Base, UTCDateTime, utcnow
from easybuk.provider.constants import DEFAULT_CURRENCY, ServiceStatus


class Service(Base):
    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    provider_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("provider_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    category: Mapped[ServiceCategory | None] = mapped_column(
        sa.Enum(
            ServiceCategory,
            name="servicecategory",
            native_enum=False,
            values_callable=lambda e: [x.value for x in e],
        ),
        nullable=True,
    )
    price: Mapped[Decimal] = mapped_column(sa.Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(
        sa.String(3), nullable=False, default=DEFAULT_CURRENCY
    )
    is_active: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow
    )

    @property
    def status(self) -> ServiceStatus:
        return ServiceStatus.ACTIVE if self.is_active else ServiceStatus.INACTIVE
