"""Unit tests for UIState class."""
from __future__ import annotations

from ddb_explorer.tui.state import QUERY, SCAN, UIState


def test_uistate_initial_state():
    """Test UIState starts with default values."""
    state = UIState()

    assert state.tables == []
    assert state.tables_loaded is False
    assert state.table is None
    assert state.mode == QUERY
    assert state.forms[QUERY] == {"partition_value": "", "sort_value": "", "operator": "=", "sort_value_upper": ""}
    assert state.forms[SCAN] == {}
    assert state.loading is None
    assert state.notice is None
    assert state.running is True


def test_uistate_remember_updates_active_form():
    state = UIState()

    state.remember(partition_value="u1", operator=">=")
    assert state.form["partition_value"] == "u1"
    assert state.form["operator"] == ">="


def test_uistate_remember_ignores_unknown():
    """Test remember() ignores unknown fields."""
    state = UIState()

    # Should not raise an error
    state.remember(unknown_attr="value", partition_value="u1")
    assert state.form["partition_value"] == "u1"
    assert "unknown_attr" not in state.form


def test_uistate_remember_in_scan_mode_is_noop():
    state = UIState()
    state.remember(partition_value="u1")
    state.mode = SCAN

    state.remember(partition_value="other")

    assert state.forms[QUERY]["partition_value"] == "u1"
    assert state.forms[SCAN] == {}


def test_uistate_generations():
    state = UIState()

    first = state.bump("results")
    second = state.bump("results")

    assert second == first + 1
    assert state.is_current("results", second)
    assert not state.is_current("results", first)
    assert state.is_current("tables", 0)


def test_uistate_loading_lifecycle():
    state = UIState()

    generation = state.begin_loading("tables", "Loading Tables...")
    assert state.loading == "Loading Tables..."
    assert state.loading_slot == "tables"
    assert state.is_current("tables", generation)

    state.end_loading()
    assert state.loading is None
    assert state.loading_slot is None


def test_uistate_clear_json_view():
    state = UIState()
    state.json_field = "tags"
    state.json_lines = ["[", "]"]
    state.json_offset = 1

    state.clear_json_view()

    assert state.json_field is None
    assert state.json_lines == []
    assert state.json_offset == 0
