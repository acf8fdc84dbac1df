from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from core.config import settings
from core.errors import InvalidRole
from core.logging_config import logger
from core.roles import Role, parse_role, resolve_effective_role
from models.scope import Scope


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (authenticated principal)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
    role: Role

    # Principal scope: the tenant / property / unit this session is bound to
    tenant_id: str
    property_id: Optional[str] = None
    unit_id: Optional[str] = None

    full_name: Optional[str] = None

    @property
    def scope(self) -> Scope:
        return Scope(
            tenant_id=self.tenant_id,
            property_id=self.property_id,
            unit_id=self.unit_id,
        )


# ============================================================
# AUTH DECODING (validates JWT + extracts session claims)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        raise unauthorized

    user_id = payload.get("sub")
    tenant_id = payload.get("tenant_id")

    if not user_id or not tenant_id:
        raise unauthorized

    # ---------------------------------------------------------
    # Role: single "role" claim, or the membership's "roles" list
    # ---------------------------------------------------------
    try:
        if "roles" in payload:
            roles = payload["roles"]
            if not isinstance(roles, list):
                raise InvalidRole(roles)
            role = resolve_effective_role(roles)
        else:
            role = parse_role(payload.get("role"))
    except InvalidRole as e:
        logger.error(f"Token for user {user_id} carries an invalid role: {e}")
        raise unauthorized

    try:
        return CurrentUser(
            id=user_id,
            email=payload.get("email"),
            role=role,
            tenant_id=tenant_id,
            property_id=payload.get("property_id"),
            unit_id=payload.get("unit_id"),
            full_name=payload.get("full_name"),
        )
    except ValidationError as e:
        logger.error(
            f"Token for user {user_id} carries malformed claims: "
            f"{[err['loc'][0] for err in e.errors()]}"
        )
        raise unauthorized


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(*allowed_roles: Role):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_role(Role.SUPER_ADMIN))])
    """

    def checker(current_user: CurrentUser = Depends(get_current_user)):
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {[str(r) for r in allowed_roles]}",
            )
        return current_user

    return checker


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(permission: str, **scope_params):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real RBAC logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(permission, **scope_params)
