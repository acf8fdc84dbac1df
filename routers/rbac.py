# routers/rbac.py

from fastapi import APIRouter, Depends

from core.authorization import authorize, permissions_for
from core.permissions import UNIT_AGNOSTIC_PERMISSIONS, Permission, get_grant_table
from core.roles import Role
from dependencies.auth import (
    get_current_user,
    CurrentUser,
    requires_permission,
    requires_role,
)
from models.authorization import (
    AuthorizeRequest,
    DecisionRead,
    GrantTableRead,
    PermissionCatalogRead,
    RolePermissionsRead,
)

router = APIRouter(
    prefix="/rbac",
    tags=["Access Control"],
)


# -----------------------------------------------------
# GET /rbac/permissions
# -----------------------------------------------------
@router.get(
    "/permissions",
    summary="List every permission",
    response_model=PermissionCatalogRead,
)
def list_permissions(current_user: CurrentUser = Depends(get_current_user)):
    return PermissionCatalogRead(
        permissions=Permission.list(),
        unit_agnostic=sorted(p.value for p in UNIT_AGNOSTIC_PERMISSIONS),
    )


# -----------------------------------------------------
# GET /rbac/me/permissions
# Drives menu visibility in the web client. Cosmetic only:
# every protected route still runs requires_permission.
# -----------------------------------------------------
@router.get(
    "/me/permissions",
    summary="Permissions held by the current user's role",
    response_model=RolePermissionsRead,
)
def my_permissions(current_user: CurrentUser = Depends(get_current_user)):
    return RolePermissionsRead(
        role=current_user.role.value,
        permissions=sorted(p.value for p in permissions_for(current_user.role)),
    )


# -----------------------------------------------------
# GET /rbac/roles
# -----------------------------------------------------
@router.get(
    "/roles",
    summary="Full role → permission table",
    response_model=GrantTableRead,
    dependencies=[Depends(requires_role(Role.SUPER_ADMIN, Role.TENANT_OWNER, Role.TENANT_ADMIN))],
)
def list_roles():
    return GrantTableRead(roles=get_grant_table().as_dict())


# -----------------------------------------------------
# POST /rbac/authorize
# Returns the decision instead of enforcing it; a denial is a 200.
# -----------------------------------------------------
@router.post(
    "/authorize",
    summary="Evaluate a permission for the current user",
    response_model=DecisionRead,
)
def check_authorization(
    payload: AuthorizeRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    decision = authorize(
        current_user.role,
        payload.permission,
        payload.scope,
        current_user.scope,
    )

    return DecisionRead(
        allowed=decision.allowed,
        reason=decision.reason,
        role=current_user.role.value,
        permission=payload.permission,
    )


# -----------------------------------------------------
# GET /rbac/tenants/{tenant_id}/units/{unit_id}/tickets/access
# Pre-flight for the ticket form
# -----------------------------------------------------
@router.get(
    "/tenants/{tenant_id}/units/{unit_id}/tickets/access",
    summary="Can the current user open a ticket on this unit",
)
def ticket_access(
    tenant_id: str,
    unit_id: str,
    current_user: CurrentUser = Depends(requires_permission("tickets.create")),
):
    return {
        "tenant_id": tenant_id,
        "unit_id": unit_id,
        "permission": Permission.TICKETS_CREATE.value,
        "allowed": True,
    }
