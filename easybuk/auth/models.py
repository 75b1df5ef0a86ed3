"""
EasyBuk: SQLAlchemy ORM models for the auth domain.

Tables owned by this module:
  - users                 Core accounts, credentials and multi-valued roles
  - client_profiles       Client side of a user (one per user)
  - provider_profiles     Service-provider side of a user (one per user)
  - admin_profiles        Admin grant with its fixed permission set
  - verification_tokens   Single-use email verification tokens
"""
from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from easybuk.auth.constants import (
    DEFAULT_COUNTRY,
    VERIFICATION_TOKEN_TYPE,
    ProviderVerificationStatus,
    ServiceCategory,
    UserStatus,
)
from easybuk.core.database import Base, JSONType, UTCDateTime, utcnow


def _enum(enum_cls: type, name: str) -> sa.Enum:
    return sa.Enum(
        enum_cls,
        name=name,
        native_enum=False,
        values_callable=lambda e: [x.value for x in e],
    )


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )

    # ── Credentials ───────────────────────────────────────────────────────────
    email: Mapped[str] = mapped_column(
        sa.String(255), unique=True, nullable=False, index=True
    )
    # nullable: accounts created through OAuth have no password
    password_hash: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    google_id: Mapped[str | None] = mapped_column(
        sa.String(255), unique=True, nullable=True
    )

    # ── Profile ───────────────────────────────────────────────────────────────
    name: Mapped[str] = mapped_column(sa.String(150), nullable=False)
    phone: Mapped[str | None] = mapped_column(sa.String(20), nullable=True)
    image: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)

    # Multi-valued: a user can be CLIENT and PROVIDER at once.
    # Reassign the list to persist changes; in-place mutation is not tracked.
    roles: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    status: Mapped[UserStatus] = mapped_column(
        _enum(UserStatus, "userstatus"),
        nullable=False,
        default=UserStatus.PENDING_VERIFICATION,
    )

    # ── Verification ──────────────────────────────────────────────────────────
    # Null until the user presents a valid verification token.
    email_verified_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True
    )
    phone_verified: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, default=False
    )

    # ── Timestamps ────────────────────────────────────────────────────────────
    last_active_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow
    )

    # ── Linked profiles ───────────────────────────────────────────────────────
    client_profile: Mapped[ClientProfile | None] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    provider_profile: Mapped[ProviderProfile | None] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    admin_profile: Mapped[AdminProfile | None] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_email_verified(self) -> bool:
        return self.email_verified_at is not None


class ClientProfile(Base):
    __tablename__ = "client_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    country: Mapped[str] = mapped_column(
        sa.String(50), nullable=False, default=DEFAULT_COUNTRY
    )
    profile_completed: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship(back_populates="client_profile")


class ProviderProfile(Base):
    __tablename__ = "provider_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    country: Mapped[str] = mapped_column(
        sa.String(50), nullable=False, default=DEFAULT_COUNTRY
    )
    category: Mapped[ServiceCategory] = mapped_column(
        _enum(ServiceCategory, "servicecategory"),
        nullable=False,
        default=ServiceCategory.TECHNICAL_SERVICES,
    )
    verification_status: Mapped[ProviderVerificationStatus] = mapped_column(
        _enum(ProviderVerificationStatus, "providerverificationstatus"),
        nullable=False,
        default=ProviderVerificationStatus.PENDING,
    )
    profile_completed: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, default=False
    )
    is_available_for_booking: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship(back_populates="provider_profile")


class AdminProfile(Base):
    __tablename__ = "admin_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    permissions: Mapped[list[str]] = mapped_column(
        JSONType, nullable=False, default=list
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship(back_populates="admin_profile")


class VerificationToken(Base):
    __tablename__ = "verification_tokens"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    token: Mapped[str] = mapped_column(
        sa.String(128), unique=True, nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Email address the token was issued for
    identifier: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    type: Mapped[str] = mapped_column(
        sa.String(50), nullable=False, default=VERIFICATION_TOKEN_TYPE
    )
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    used: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
