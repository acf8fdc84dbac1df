# core/config_validator.py

from typing import List
from core.config import settings, DEV_JWT_SECRET
from core.errors import GrantTableError
from core.logging_config import logger
from core.permissions import get_grant_table


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    # The development secret is never acceptable outside development
    if settings.ENV == "production" and settings.JWT_SECRET_KEY == DEV_JWT_SECRET:
        missing.append("JWT_SECRET_KEY")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of missing optional variables (warnings only).
    """
    warnings = []

    if settings.ENV != "production" and settings.JWT_SECRET_KEY == DEV_JWT_SECRET:
        warnings.append("JWT_SECRET_KEY (using development default)")

    if not settings.RBAC_AUDIT_DENIALS:
        warnings.append("RBAC_AUDIT_DENIALS is off; denied requests will not be logged")

    return warnings


def validate_grant_table():
    """
    Load the role → permission table now rather than on the first request.
    Raises GrantTableError if the configured table is invalid.
    """
    try:
        table = get_grant_table()
    except GrantTableError as e:
        logger.error(str(e))
        raise

    logger.info(f"Grant table loaded: {len(table.roles())} roles")
    return table


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError if critical config is missing.
    Logs warnings for optional config.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if missing_optional:
        for warning in missing_optional:
            logger.warning(f"Optional configuration missing: {warning}")

    validate_grant_table()

    logger.info("Configuration validation passed")
