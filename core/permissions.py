# core/permissions.py

import json
from threading import Lock
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from core.errors import GrantTableError, InvalidPermission, InvalidRole
from core.logging_config import logger
from core.roles import Role, parse_role
from models.enums import BaseStrEnum


class Permission(BaseStrEnum):
    PROPERTIES_READ = "properties.read"
    PROPERTIES_WRITE = "properties.write"
    UNITS_READ = "units.read"
    UNITS_WRITE = "units.write"
    PAYMENTS_SUBMIT = "payments.submit"
    PAYMENTS_REVIEW = "payments.review"
    EXPENSES_READ = "expenses.read"
    EXPENSES_WRITE = "expenses.write"
    TICKETS_CREATE = "tickets.create"
    TICKETS_MANAGE = "tickets.manage"
    COMMUNICATIONS_READ = "communications.read"
    COMMUNICATIONS_PUBLISH = "communications.publish"


# Building-wide resources a unit-bound principal may read regardless of unit
UNIT_AGNOSTIC_PERMISSIONS: FrozenSet[Permission] = frozenset({
    Permission.COMMUNICATIONS_READ,
    Permission.PROPERTIES_READ,
})


def parse_permission(value: Any) -> Permission:
    """Exact match against the closed enumeration, else InvalidPermission."""
    if isinstance(value, Permission):
        return value

    if not isinstance(value, str):
        raise InvalidPermission(value)

    try:
        return Permission(value)
    except ValueError:
        raise InvalidPermission(value)


# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
ROLE_PERMISSIONS = {

    # =====================================================
    # SUPER ADMIN: every permission, any tenant
    # =====================================================
    "SUPER_ADMIN": [
        "properties.read", "properties.write",
        "units.read", "units.write",
        "payments.submit", "payments.review",
        "expenses.read", "expenses.write",
        "tickets.create", "tickets.manage",
        "communications.read", "communications.publish",
    ],

    # =====================================================
    # TENANT OWNER
    # =====================================================
    "TENANT_OWNER": [
        "properties.read", "properties.write",
        "units.read", "units.write",
        "payments.review",
        "expenses.read", "expenses.write",
        "tickets.manage",
        "communications.read", "communications.publish",
    ],

    # =====================================================
    # TENANT ADMIN: same grants as the owner
    # =====================================================
    "TENANT_ADMIN": [
        "properties.read", "properties.write",
        "units.read", "units.write",
        "payments.review",
        "expenses.read", "expenses.write",
        "tickets.manage",
        "communications.read", "communications.publish",
    ],

    # =====================================================
    # OPERATOR: day-to-day building operations
    # =====================================================
    "OPERATOR": [
        "properties.read",
        "units.read",
        "payments.review",
        "tickets.manage",
        "communications.read",
    ],

    # =====================================================
    # RESIDENT: bound to their own unit
    # =====================================================
    "RESIDENT": [
        "properties.read",
        "units.read",
        "payments.submit",
        "expenses.read",
        "tickets.create",
        "communications.read",
    ],
}


class GrantTable:
    """
    Read-only Role → permission-set mapping.

    Built through load_grant_table(), which enforces that every role has a
    non-empty entry drawn from the Permission enumeration.
    """

    __slots__ = ("_grants",)

    def __init__(self, grants: Mapping[Role, FrozenSet[Permission]]):
        self._grants = MappingProxyType(dict(grants))

    def permissions_for(self, role: Role) -> FrozenSet[Permission]:
        return self._grants[role]

    def is_granted(self, role: Role, permission: Permission) -> bool:
        return permission in self._grants[role]

    def roles(self) -> List[Role]:
        return list(self._grants.keys())

    def as_dict(self) -> Dict[str, List[str]]:
        return {
            role.value: sorted(p.value for p in perms)
            for role, perms in self._grants.items()
        }


def load_grant_table(raw: Mapping[Any, Iterable[Any]]) -> GrantTable:
    """
    Validate a raw role → permissions mapping and freeze it.

    Raises GrantTableError listing every problem found:
      • unknown role keys
      • unknown permission strings
      • roles with no entry or an empty entry
    """
    problems = []
    grants = {}
    seen = set()

    for raw_role, raw_permissions in raw.items():
        try:
            role = parse_role(raw_role)
        except InvalidRole:
            problems.append(f"unknown role {raw_role!r}")
            continue

        seen.add(role)

        if not isinstance(raw_permissions, (list, tuple, set, frozenset)):
            problems.append(
                f"{role.value}: permissions must be a list, got {type(raw_permissions).__name__}"
            )
            continue

        permissions = set()
        for raw_permission in raw_permissions:
            try:
                permissions.add(parse_permission(raw_permission))
            except InvalidPermission:
                problems.append(f"{role.value}: unknown permission {raw_permission!r}")

        if not permissions:
            problems.append(f"{role.value}: no permissions granted")
            continue

        grants[role] = frozenset(permissions)

    for role in Role:
        if role not in seen:
            problems.append(f"{role.value}: missing from grant table")

    if problems:
        raise GrantTableError("Invalid grant table: " + "; ".join(problems))

    return GrantTable(grants)


def load_grant_table_file(path: str) -> GrantTable:
    """Load and validate a grant table from a JSON object of role → [permission]."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, ValueError) as e:
        raise GrantTableError(f"Could not read grant table file {path}: {e}")

    if not isinstance(raw, dict):
        raise GrantTableError(f"Grant table file {path} must contain a JSON object")

    return load_grant_table(raw)


# -----------------------------------------------------
# Process-wide table: loaded once, never written after
# -----------------------------------------------------
_grant_table: Optional[GrantTable] = None
_grant_table_lock = Lock()


def get_grant_table() -> GrantTable:
    """
    Return the process-wide grant table, loading it on first use.

    Source is settings.RBAC_GRANT_TABLE_FILE when set, otherwise
    ROLE_PERMISSIONS. There is no reload path; policy changes ship
    as a redeploy.
    """
    global _grant_table

    if _grant_table is not None:
        return _grant_table

    with _grant_table_lock:
        if _grant_table is None:
            from core.config import settings

            if settings.RBAC_GRANT_TABLE_FILE:
                logger.info(f"Loading grant table from {settings.RBAC_GRANT_TABLE_FILE}")
                _grant_table = load_grant_table_file(settings.RBAC_GRANT_TABLE_FILE)
            else:
                _grant_table = load_grant_table(ROLE_PERMISSIONS)

    return _grant_table
