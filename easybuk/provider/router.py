"""
Provider domain: router.

Routes:
  GET     /api/provider/services                  List own services
  POST    /api/provider/services                  Publish a service
  GET     /api/provider/services/{id}             One own service
  PUT     /api/provider/services/{id}             Partial update
  DELETE  /api/provider/services/{id}             Delete
  PATCH   /api/provider/services/{id}/status      Activate / deactivate

All routes require a session and a provider profile.  Unknown, malformed
and foreign ids all answer 404.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.auth.dependencies import get_current_user
from easybuk.core.models.user import CurrentUser
from easybuk.core.schemas import MessageResponse
from easybuk.database import get_db
from easybuk.provider import controller as ctrl
from easybuk.provider.schemas import (
    CreateServiceRequest,
    ServiceListResponse,
    ServiceResponse,
    ServiceStatusResponse,
    UpdateServiceRequest,
    UpdateServiceStatusRequest,
)

router = APIRouter(prefix="/provider", tags=["provider"])


@router.get("/services", response_model=ServiceListResponse, summary="List own services")
async def list_services(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ServiceListResponse:
    return await ctrl.list_services(session, current_user.id)


@router.post(
    "/services",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a new service",
)
async def create_service(
    body: CreateServiceRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ServiceResponse:
    return await ctrl.create_service(session, current_user.id, body)


@router.get(
    "/services/{service_id}",
    response_model=ServiceResponse,
    summary="Get one of your services",
)
async def get_service(
    service_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ServiceResponse:
    return await ctrl.get_service(session, current_user.id, service_id)


@router.put(
    "/services/{service_id}",
    response_model=ServiceResponse,
    summary="Update a service (only the fields sent)",
)
async def update_service(
    service_id: str,
    body: UpdateServiceRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ServiceResponse:
    return await ctrl.update_service(session, current_user.id, service_id, body)


@router.delete(
    "/services/{service_id}",
    response_model=MessageResponse,
    summary="Delete a service",
)
async def delete_service(
    service_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    return await ctrl.delete_service(session, current_user.id, service_id)


@router.patch(
    "/services/{service_id}/status",
    response_model=ServiceStatusResponse,
    summary="Set a service ACTIVE or INACTIVE",
)
async def update_service_status(
    service_id: str,
    body: UpdateServiceStatusRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ServiceStatusResponse:
    return await ctrl.update_service_status(session, current_user.id, service_id, body)
