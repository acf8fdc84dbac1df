from typing import Dict, List, Optional

from pydantic import BaseModel

from models.enums import DenialReason
from models.scope import Scope


class AuthorizeRequest(BaseModel):
    # Plain string so unknown values surface as InvalidPermission (400)
    permission: str
    scope: Scope


class DecisionRead(BaseModel):
    allowed: bool
    reason: Optional[DenialReason] = None
    role: str
    permission: str


class RolePermissionsRead(BaseModel):
    role: str
    permissions: List[str]


class GrantTableRead(BaseModel):
    roles: Dict[str, List[str]]


class PermissionCatalogRead(BaseModel):
    permissions: List[str]
    unit_agnostic: List[str]
