"""
EasyBuk: provider service listings.

Every operation resolves the caller's provider profile first; callers
without one get ProviderProfileNotFound.  Services of other providers are
reported as ServiceNotFound so their ids cannot be probed.
"""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.auth.constants import ServiceCategory
from easybuk.auth.models import ProviderProfile
from easybuk.core.guards import ensure_owned
from easybuk.exceptions import ProviderProfileNotFound, ServiceNotFound
from easybuk.provider.constants import DEFAULT_CURRENCY, ServiceStatus
from easybuk.provider.models import Service

_UPDATABLE_FIELDS = frozenset(
    {"title", "description", "category", "price", "currency", "is_active"}
)


async def get_provider_profile(
    session: AsyncSession, user_id: uuid.UUID
) -> ProviderProfile:
    result = await session.execute(
        select(ProviderProfile).where(ProviderProfile.user_id == user_id)
    )
    profile = result.scalar_one_or_none()
    if profile is None:
        raise ProviderProfileNotFound()
    return profile


async def list_services(session: AsyncSession, user_id: uuid.UUID) -> list[Service]:
    profile = await get_provider_profile(session, user_id)
    result = await session.execute(
        select(Service)
        .where(Service.provider_id == profile.id)
        .order_by(Service.created_at.desc())
    )
    return list(result.scalars().all())


async def create_service(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    title: str,
    price: Decimal,
    description: str | None = None,
    category: ServiceCategory | None = None,
    currency: str = DEFAULT_CURRENCY,
    is_active: bool = True,
) -> Service:
    profile = await get_provider_profile(session, user_id)
    service = Service(
        provider_id=profile.id,
        title=title,
        description=description,
        category=category or profile.category,
        price=price,
        currency=currency,
        is_active=is_active,
    )
    session.add(service)
    await session.flush()
    return service


async def get_owned_service(
    session: AsyncSession,
    user_id: uuid.UUID,
    service_id: uuid.UUID,
) -> Service:
    profile = await get_provider_profile(session, user_id)
    return ensure_owned(
        await session.get(Service, service_id),
        profile.id,
        not_found=ServiceNotFound,
        owner_attr="provider_id",
    )


async def update_service(
    session: AsyncSession,
    user_id: uuid.UUID,
    service_id: uuid.UUID,
    changes: dict[str, Any],
) -> Service:
    """Apply a partial update; ``status`` maps onto ``is_active``."""
    service = await get_owned_service(session, user_id, service_id)
    changes = dict(changes)
    status = changes.pop("status", None)
    if status is not None:
        service.is_active = status == ServiceStatus.ACTIVE
    for field, value in changes.items():
        if field not in _UPDATABLE_FIELDS:
            raise ValueError(f"{field} cannot be updated")
        setattr(service, field, value)
    await session.flush()
    return service


async def update_service_status(
    session: AsyncSession,
    user_id: uuid.UUID,
    service_id: uuid.UUID,
    status: ServiceStatus,
) -> Service:
    return await update_service(session, user_id, service_id, {"status": status})


async def delete_service(
    session: AsyncSession,
    user_id: uuid.UUID,
    service_id: uuid.UUID,
) -> None:
    service = await get_owned_service(session, user_id, service_id)
    await session.delete(service)
    await session.flush()
