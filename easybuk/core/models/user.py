from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from easybuk.core.constants import Role


class CurrentUser(BaseModel):
    """Identity decoded from a verified access token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    email: str
    roles: list[Role] = Field(default_factory=list)
    expires_at: datetime
