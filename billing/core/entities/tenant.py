"""Tenant identity passed explicitly into every core operation."""

from pydantic import BaseModel, ConfigDict, Field


class TenantContext(BaseModel):
    """The authenticated owner on whose behalf an operation runs."""

    model_config = ConfigDict(frozen=True)

    tenant_id: int = Field(..., gt=0)
    username: str | None = None
