"""EasyBuk: provider services controller."""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.core.guards import parse_resource_id
from easybuk.core.schemas import MessageResponse
from easybuk.exceptions import ServiceNotFound
from easybuk.provider import service
from easybuk.provider.schemas import (
    CreateServiceRequest,
    ServiceListResponse,
    ServiceResponse,
    ServiceStatusResponse,
    ServiceStatusView,
    ServiceView,
    UpdateServiceRequest,
    UpdateServiceStatusRequest,
)


def _service_id(raw: str) -> uuid.UUID:
    return parse_resource_id(raw, not_found=ServiceNotFound)


async def list_services(session: AsyncSession, user_id: uuid.UUID) -> ServiceListResponse:
    services = await service.list_services(session, user_id)
    return ServiceListResponse(services=[ServiceView.model_validate(s) for s in services])


async def create_service(
    session: AsyncSession, user_id: uuid.UUID, body: CreateServiceRequest
) -> ServiceResponse:
    created = await service.create_service(
        session,
        user_id,
        title=body.title,
        description=body.description,
        category=body.category,
        price=body.price,
        currency=body.currency,
        is_active=body.is_active,
    )
    return ServiceResponse(service=ServiceView.model_validate(created))


async def get_service(
    session: AsyncSession, user_id: uuid.UUID, service_id: str
) -> ServiceResponse:
    found = await service.get_owned_service(session, user_id, _service_id(service_id))
    return ServiceResponse(service=ServiceView.model_validate(found))


async def update_service(
    session: AsyncSession,
    user_id: uuid.UUID,
    service_id: str,
    body: UpdateServiceRequest,
) -> ServiceResponse:
    updated = await service.update_service(
        session,
        user_id,
        _service_id(service_id),
        body.model_dump(exclude_unset=True),
    )
    return ServiceResponse(service=ServiceView.model_validate(updated))


async def update_service_status(
    session: AsyncSession,
    user_id: uuid.UUID,
    service_id: str,
    body: UpdateServiceStatusRequest,
) -> ServiceStatusResponse:
    updated = await service.update_service_status(
        session, user_id, _service_id(service_id), body.status
    )
    return ServiceStatusResponse(service=ServiceStatusView.model_validate(updated))


async def delete_service(
    session: AsyncSession, user_id: uuid.UUID, service_id: str
) -> MessageResponse:
    await service.delete_service(session, user_id, _service_id(service_id))
    return MessageResponse(message="Service deleted successfully.")
