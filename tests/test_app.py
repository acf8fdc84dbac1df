# tests/test_app.py

"""
Tests for application startup.
"""

import logging

from fastapi.testclient import TestClient


class _PathlessRoute:
    """Stand-in for router entries that expose no .path (included routers)."""

    methods = None


def test_startup_skips_routes_without_path(app, caplog):
    app.router.routes.append(_PathlessRoute())

    with caplog.at_level(logging.INFO, logger="buildingos"):
        with TestClient(app):
            pass

    assert any("Startup complete" in r.message for r in caplog.records)
