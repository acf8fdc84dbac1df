# core/roles.py

from typing import Any, Iterable

from core.errors import InvalidRole
from models.enums import BaseStrEnum


class Role(BaseStrEnum):
    SUPER_ADMIN = "SUPER_ADMIN"
    TENANT_OWNER = "TENANT_OWNER"
    TENANT_ADMIN = "TENANT_ADMIN"
    OPERATOR = "OPERATOR"
    RESIDENT = "RESIDENT"


# Highest wins when a membership holds several roles in one tenant
ROLE_PRIORITY = {
    Role.SUPER_ADMIN: 5,
    Role.TENANT_OWNER: 4,
    Role.TENANT_ADMIN: 3,
    Role.OPERATOR: 2,
    Role.RESIDENT: 1,
}


def parse_role(value: Any) -> Role:
    """
    Validate a role against the closed enumeration.

    Exact match on the wire value only ("RESIDENT", not "resident").
    Raises InvalidRole for anything else; never falls back to a default role.
    """
    if isinstance(value, Role):
        return value

    if not isinstance(value, str):
        raise InvalidRole(value)

    try:
        return Role(value)
    except ValueError:
        raise InvalidRole(value)


def resolve_effective_role(roles: Iterable[Any]) -> Role:
    """
    Collapse the roles a membership holds into the single role used for a check.

    Priority: SUPER_ADMIN > TENANT_OWNER > TENANT_ADMIN > OPERATOR > RESIDENT.
    Every entry is validated, so one unknown role fails the whole list.
    """
    roles = list(roles)
    if not roles:
        raise InvalidRole(roles, "No roles to resolve: membership holds no roles")

    parsed = [parse_role(role) for role in roles]

    return max(parsed, key=lambda role: ROLE_PRIORITY[role])
