# core/errors.py

from typing import Any, Optional

from fastapi import HTTPException

from models.enums import DenialReason


class AuthorizationInputError(ValueError):
    """
    The caller asked a nonsensical question (unknown role or permission).

    Distinct from a denial: this is a caller bug and must never be
    turned into a Deny.
    """

    reason: DenialReason

    def __init__(self, value: Any, message: str):
        super().__init__(message)
        self.value = value


class InvalidRole(AuthorizationInputError):
    reason = DenialReason.invalid_role

    def __init__(self, value: Any, message: Optional[str] = None):
        super().__init__(value, message or f"Unknown role: {value!r}")


class InvalidPermission(AuthorizationInputError):
    reason = DenialReason.invalid_permission

    def __init__(self, value: Any):
        super().__init__(value, f"Unknown permission: {value!r}")


class GrantTableError(RuntimeError):
    """Role → permission configuration failed validation."""


def authorization_error_to_http(error: AuthorizationInputError) -> HTTPException:
    """
    Convert an authorization input error into a 400 HTTPException.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.
    """
    from core.logging_config import logger

    logger.error(f"Authorization input error ({error.reason}): {error}")

    return HTTPException(
        status_code=400,
        detail=f"{error.reason}: {error}",
    )
