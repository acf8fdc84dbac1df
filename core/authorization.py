# core/authorization.py

"""
Authorization engine.

authorize() is a pure function of (role, permission, requested scope,
principal scope) and the read-only grant table: no I/O, no logging, no
shared state. Denials come back as ordinary Decision values; only
malformed input (unknown role/permission) raises.
"""

from typing import Any, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from core.permissions import (
    UNIT_AGNOSTIC_PERMISSIONS,
    GrantTable,
    Permission,
    get_grant_table,
    parse_permission,
)
from core.roles import Role, parse_role
from models.enums import DenialReason
from models.scope import Scope


# Input errors are raised, never returned inside a Decision
DECISION_REASONS = frozenset({
    DenialReason.not_granted,
    DenialReason.tenant_mismatch,
    DenialReason.unit_mismatch,
})


class Decision(BaseModel):
    """Outcome of one authorization check: Allow, or Deny(reason)."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[DenialReason] = None

    @model_validator(mode="after")
    def _reason_matches_outcome(self) -> "Decision":
        if self.allowed and self.reason is not None:
            raise ValueError("an Allow decision carries no reason")
        if not self.allowed and self.reason not in DECISION_REASONS:
            raise ValueError(
                f"a Deny decision needs one of {sorted(r.value for r in DECISION_REASONS)}, got {self.reason}"
            )
        return self

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "Decision":
        return cls(allowed=False, reason=reason)


def permissions_for(role: Any, grant_table: Optional[GrantTable] = None) -> FrozenSet[Permission]:
    """
    Full granted set for a role, for menu/visibility decisions.

    Reads the same GrantTable that authorize() consults.
    """
    table = grant_table if grant_table is not None else get_grant_table()
    return table.permissions_for(parse_role(role))


def authorize(
    role: Any,
    permission: Any,
    requested_scope: Scope,
    principal_scope: Scope,
    grant_table: Optional[GrantTable] = None,
) -> Decision:
    """
    Decide whether `role`, bound to `principal_scope`, may perform
    `permission` against `requested_scope`.

    Raises InvalidRole / InvalidPermission for values outside the
    enumerations. Checks, in order:
      1. permission granted to the role          → else NotGranted
      2. same tenant (SUPER_ADMIN exempt)        → else TenantMismatch
      3. same unit when both sides name one,
         unless the permission is unit-agnostic  → else UnitMismatch
    """
    role = parse_role(role)
    permission = parse_permission(permission)
    table = grant_table if grant_table is not None else get_grant_table()

    if not table.is_granted(role, permission):
        return Decision.deny(DenialReason.not_granted)

    if role != Role.SUPER_ADMIN and requested_scope.tenant_id != principal_scope.tenant_id:
        return Decision.deny(DenialReason.tenant_mismatch)

    if (
        principal_scope.unit_id is not None
        and requested_scope.unit_id is not None
        and requested_scope.unit_id != principal_scope.unit_id
        and permission not in UNIT_AGNOSTIC_PERMISSIONS
    ):
        return Decision.deny(DenialReason.unit_mismatch)

    return Decision.allow()
