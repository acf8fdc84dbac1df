# -------------------------
# Enums
# -------------------------
from .enums import BaseStrEnum, DenialReason

# -------------------------
# Scope
# -------------------------
from .scope import Scope

# -------------------------
# Authorization API Models
# -------------------------
from .authorization import (
    AuthorizeRequest,
    DecisionRead,
    GrantTableRead,
    PermissionCatalogRead,
    RolePermissionsRead,
)

__all__ = [
    # enums
    "BaseStrEnum",
    "DenialReason",

    # scope
    "Scope",

    # authorization
    "AuthorizeRequest",
    "DecisionRead",
    "GrantTableRead",
    "PermissionCatalogRead",
    "RolePermissionsRead",
]
