"""EasyBuk: Pydantic V2 schemas for provider service listings."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import Field, model_validator

from easybuk.auth.constants import ServiceCategory
from easybuk.core.schemas import RequestModel, ResponseModel
from easybuk.provider.constants import DEFAULT_CURRENCY, ServiceStatus


class CreateServiceRequest(RequestModel):
    """Body for POST /provider/services."""

    title: str = Field(min_length=2, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    category: ServiceCategory | None = None
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    currency: str = Field(default=DEFAULT_CURRENCY, pattern=r"^[A-Z]{3}$")
    is_active: bool = True


class UpdateServiceRequest(RequestModel):
    """Body for PUT /provider/services/{id}; only the keys sent are changed."""

    title: str | None = Field(default=None, min_length=2, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    category: ServiceCategory | None = None
    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    currency: str | None = Field(default=None, pattern=r"^[A-Z]{3}$")
    status: ServiceStatus | None = None

    @model_validator(mode="after")
    def check_required_not_null(self) -> UpdateServiceRequest:
        for name in ("title", "price", "currency", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class UpdateServiceStatusRequest(RequestModel):
    status: ServiceStatus


class ServiceView(ResponseModel):
    id: uuid.UUID
    provider_id: uuid.UUID
    title: str
    description: str | None = None
    category: ServiceCategory | None = None
    price: Decimal
    currency: str
    is_active: bool
    status: ServiceStatus
    created_at: datetime
    updated_at: datetime


class ServiceStatusView(ResponseModel):
    id: uuid.UUID
    status: ServiceStatus
    updated_at: datetime


class ServiceListResponse(ResponseModel):
    success: bool = True
    services: list[ServiceView]


class ServiceResponse(ResponseModel):
    success: bool = True
    service: ServiceView


class ServiceStatusResponse(ResponseModel):
    success: bool = True
    service: ServiceStatusView
