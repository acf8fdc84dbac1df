# core/logging_config.py
import logging
from typing import Optional

from core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "buildingos"


def setup_logger(name: str = LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """
    Application logger. Level comes from settings.LOG_LEVEL unless given;
    an unrecognised level name falls back to INFO with a warning.
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers in dev reload
    if logger.handlers:
        return logger

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    level_name = (level or settings.LOG_LEVEL).upper()
    try:
        logger.setLevel(level_name)
    except ValueError:
        logger.setLevel(logging.INFO)
        logger.warning(f"Unknown LOG_LEVEL {level_name!r}, using INFO")

    return logger


logger = setup_logger()

# RBAC denial trail; propagates to the application logger's handler
audit_logger = logger.getChild("audit")
