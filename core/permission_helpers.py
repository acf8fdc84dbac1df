from typing import Mapping

from fastapi import Depends, HTTPException, Request

from core.authorization import Decision, authorize, permissions_for
from core.config import settings
from core.logging_config import audit_logger
from core.permissions import Permission, parse_permission
from dependencies.auth import CurrentUser, get_current_user
from models.scope import Scope


# -----------------------------------------------------
# Unscoped check (menu / control visibility only)
# -----------------------------------------------------
def has_permission(user: CurrentUser, permission: str) -> bool:
    return parse_permission(permission) in permissions_for(user.role)


# -----------------------------------------------------
# Requested scope from route parameters
# -----------------------------------------------------
def requested_scope_from_path(
    path_params: Mapping[str, str],
    user: CurrentUser,
    tenant_param: str = "tenant_id",
    property_param: str = "property_id",
    unit_param: str = "unit_id",
) -> Scope:
    """
    Build the scope a request targets from its path parameters.

    Routes without a tenant parameter act on the principal's own tenant.
    """
    return Scope(
        tenant_id=path_params.get(tenant_param) or user.tenant_id,
        property_id=path_params.get(property_param),
        unit_id=path_params.get(unit_param),
    )


# -----------------------------------------------------
# Denial audit
# -----------------------------------------------------
def log_denial(user: CurrentUser, permission: Permission, requested: Scope, decision: Decision):
    if not settings.RBAC_AUDIT_DENIALS:
        return

    audit_logger.warning(
        f"RBAC deny: user={user.id} role={user.role} permission={permission} "
        f"reason={decision.reason} "
        f"principal_tenant={user.tenant_id} principal_unit={user.unit_id} "
        f"requested_tenant={requested.tenant_id} requested_property={requested.property_id} "
        f"requested_unit={requested.unit_id}"
    )


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(
    permission: str,
    tenant_param: str = "tenant_id",
    property_param: str = "property_id",
    unit_param: str = "unit_id",
):
    """
    Usage:
        @router.post(
            "/tenants/{tenant_id}/units/{unit_id}/tickets",
            dependencies=[Depends(requires_permission("tickets.create"))],
        )

    The permission is validated here, when the route is declared, so a
    misspelled permission fails at import time with InvalidPermission.
    """
    required = parse_permission(permission)

    def dependency(
        request: Request,
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        requested = requested_scope_from_path(
            request.path_params,
            current_user,
            tenant_param=tenant_param,
            property_param=property_param,
            unit_param=unit_param,
        )

        decision = authorize(current_user.role, required, requested, current_user.scope)

        if not decision.allowed:
            log_denial(current_user, required, requested, decision)
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{required}' denied ({decision.reason})",
            )

        return current_user

    return dependency
