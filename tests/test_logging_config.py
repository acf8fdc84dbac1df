# tests/test_logging_config.py

"""
Tests for logger setup.
"""

import logging

from core.config import settings
from core.logging_config import LOGGER_NAME, audit_logger, setup_logger


def test_level_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "LOG_LEVEL", "debug")

    logger = setup_logger("buildingos-test-settings-level")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_explicit_level_and_no_duplicate_handlers():
    logger = setup_logger("buildingos-test-explicit", level="WARNING")
    again = setup_logger("buildingos-test-explicit", level="DEBUG")

    assert again is logger
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_unknown_level_falls_back_to_info():
    logger = setup_logger("buildingos-test-bad-level", level="chatty")
    assert logger.level == logging.INFO


def test_audit_logger_is_child_of_app_logger():
    assert audit_logger.name == f"{LOGGER_NAME}.audit"
    assert audit_logger.parent is logging.getLogger(LOGGER_NAME)
