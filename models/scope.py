from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------
# SCOPE: tenant / property / unit boundary of a check
# -----------------------------------------------------
class Scope(BaseModel):
    """
    Resource boundary an authorization check is evaluated against.

    Used both for the resource a request targets and for the boundary
    a principal is bound to. Accepts camelCase keys from the web client.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tenant_id: str = Field(..., min_length=1, alias="tenantId")
    property_id: Optional[str] = Field(None, alias="propertyId")
    unit_id: Optional[str] = Field(None, alias="unitId")
