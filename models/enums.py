from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# DENIAL REASON
# -----------------------------------------------------
class DenialReason(BaseStrEnum):
    """
    Why an authorization check did not end in Allow.

    NotGranted / TenantMismatch / UnitMismatch are returned inside a Decision.
    InvalidRole / InvalidPermission are carried by the raised input errors.
    """

    not_granted = "NotGranted"
    tenant_mismatch = "TenantMismatch"
    unit_mismatch = "UnitMismatch"
    invalid_role = "InvalidRole"
    invalid_permission = "InvalidPermission"
