# tests/test_grant_table.py

"""
Tests for grant table loading and validation.
"""

import json

import pytest

from core.errors import GrantTableError, InvalidPermission
from core.permissions import (
    ROLE_PERMISSIONS,
    Permission,
    get_grant_table,
    load_grant_table,
    load_grant_table_file,
    parse_permission,
)
from core.roles import Role


def _valid_raw():
    return {role: list(perms) for role, perms in ROLE_PERMISSIONS.items()}


def test_every_role_has_known_permissions():
    table = get_grant_table()
    for role in Role:
        granted = table.permissions_for(role)
        assert granted
        assert granted <= frozenset(Permission)


def test_default_table_matches_literal():
    table = get_grant_table()
    for role, perms in ROLE_PERMISSIONS.items():
        assert table.as_dict()[role] == sorted(perms)


def test_grant_table_is_loaded_once():
    assert get_grant_table() is get_grant_table()


def test_grant_table_cannot_be_mutated():
    table = load_grant_table(_valid_raw())

    with pytest.raises(TypeError):
        table._grants[Role.RESIDENT] = frozenset(Permission)

    with pytest.raises(AttributeError):
        table.permissions_for(Role.RESIDENT).add(Permission.UNITS_WRITE)


def test_grant_table_independent_of_source_dict():
    raw = _valid_raw()
    table = load_grant_table(raw)

    raw["RESIDENT"].append("units.write")

    assert not table.is_granted(Role.RESIDENT, Permission.UNITS_WRITE)


def test_missing_role_rejected():
    raw = _valid_raw()
    del raw["OPERATOR"]

    with pytest.raises(GrantTableError, match="OPERATOR: missing"):
        load_grant_table(raw)


def test_empty_role_rejected():
    raw = _valid_raw()
    raw["RESIDENT"] = []

    with pytest.raises(GrantTableError, match="RESIDENT: no permissions"):
        load_grant_table(raw)


def test_unknown_permission_rejected():
    raw = _valid_raw()
    raw["OPERATOR"] = raw["OPERATOR"] + ["tickets.mange"]

    with pytest.raises(GrantTableError, match="tickets.mange"):
        load_grant_table(raw)


def test_unknown_role_rejected():
    raw = _valid_raw()
    raw["GUEST"] = ["properties.read"]

    with pytest.raises(GrantTableError, match="unknown role 'GUEST'"):
        load_grant_table(raw)


def test_string_instead_of_list_rejected():
    raw = _valid_raw()
    raw["RESIDENT"] = "units.read"

    with pytest.raises(GrantTableError, match="must be a list"):
        load_grant_table(raw)


def test_load_from_file(tmp_path):
    raw = _valid_raw()
    raw["OPERATOR"] = ["units.read"]
    path = tmp_path / "grants.json"
    path.write_text(json.dumps(raw))

    table = load_grant_table_file(str(path))

    assert table.permissions_for(Role.OPERATOR) == frozenset({Permission.UNITS_READ})


def test_load_from_bad_file(tmp_path):
    path = tmp_path / "grants.json"
    path.write_text("[not json")

    with pytest.raises(GrantTableError, match="Could not read"):
        load_grant_table_file(str(path))


def test_load_from_file_requires_object(tmp_path):
    path = tmp_path / "grants.json"
    path.write_text(json.dumps(["RESIDENT"]))

    with pytest.raises(GrantTableError, match="JSON object"):
        load_grant_table_file(str(path))


def test_parse_permission():
    assert parse_permission("tickets.manage") is Permission.TICKETS_MANAGE

    for bad in ["tickets", "TICKETS.MANAGE", "tickets.*", "", None]:
        with pytest.raises(InvalidPermission):
            parse_permission(bad)


@pytest.mark.parametrize("entry", [None, 5, {"units.read": True}])
def test_non_list_entry_rejected(entry):
    raw = _valid_raw()
    raw["RESIDENT"] = entry

    with pytest.raises(GrantTableError, match="RESIDENT: permissions must be a list"):
        load_grant_table(raw)


def test_non_list_entry_in_file_rejected(tmp_path):
    raw = _valid_raw()
    raw["OPERATOR"] = None
    path = tmp_path / "grants.json"
    path.write_text(json.dumps(raw))

    with pytest.raises(GrantTableError, match="OPERATOR: permissions must be a list, got NoneType"):
        load_grant_table_file(str(path))


def test_get_grant_table_reads_configured_file(tmp_path, monkeypatch):
    from core import permissions
    from core.config import settings

    raw = _valid_raw()
    raw["RESIDENT"] = ["communications.read"]
    path = tmp_path / "grants.json"
    path.write_text(json.dumps(raw))

    monkeypatch.setattr(permissions, "_grant_table", None)
    monkeypatch.setattr(settings, "RBAC_GRANT_TABLE_FILE", str(path))

    table = get_grant_table()

    assert table.permissions_for(Role.RESIDENT) == frozenset({Permission.COMMUNICATIONS_READ})
    assert get_grant_table() is table
