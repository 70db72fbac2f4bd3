"""Unit tests for Router class."""
from __future__ import annotations

import io
import logging
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from conftest import FakeClient, make_record
from ddb_explorer.tui.machine import Back, Dismiss, NavigationStateMachine, Quit, Select
from ddb_explorer.tui.router import SCREENS, Router, register_screen
from ddb_explorer.tui.worker import Completed


class QueueDispatcher:
    """Runs jobs inline; completions wait in a list until drained."""

    def __init__(self):
        self.messages: list[Completed] = []

    def submit(self, slot, generation, kind, job, params=None):
        self.messages.append(Completed(slot, generation, kind, value=job(), params=params))

    def drain(self):
        out, self.messages = self.messages, []
        return out

    def wait(self, timeout):
        return self.messages.pop(0) if self.messages else None


@pytest.fixture
def mock_settings():
    """Create mock settings."""
    settings = MagicMock()
    settings.DDB_EXPLORER_PAGE_SIZE = 15
    return settings


@pytest.fixture
def router_components(mock_settings, users_table):
    """Create router components for testing."""
    console = Console(file=io.StringIO(), width=100)
    dispatcher = QueueDispatcher()
    client = FakeClient([[make_record(id="u1", ts="1")]], tables=[users_table])
    machine = NavigationStateMachine(client, dispatcher)
    router = Router(console=console, settings=mock_settings, machine=machine, dispatcher=dispatcher)
    return router, machine, dispatcher


def test_router_initialization(router_components, mock_settings):
    """Test router initializes with correct components."""
    router, machine, dispatcher = router_components

    assert router.settings == mock_settings
    assert router.machine is machine
    assert router.state is machine.state
    assert router.nav is machine.nav


def test_register_screen_decorator(monkeypatch):
    """Test screen registration decorator."""
    monkeypatch.setattr("ddb_explorer.tui.router.SCREENS", {})
    from ddb_explorer.tui import router as router_module

    @register_screen("test_screen")
    def test_screen_fn(router):
        return Quit()

    assert router_module.SCREENS["test_screen"] is test_screen_fn


def test_router_runs_until_quit(router_components, monkeypatch, caplog):
    router, machine, dispatcher = router_components
    seen = []

    def fake_table_list(r):
        seen.append(list(r.state.tables))
        return Quit()

    monkeypatch.setitem(SCREENS, "table_list", fake_table_list)

    with caplog.at_level(logging.DEBUG, logger="ddb_explorer.tui.router"):
        router.run()

    # The table list was loaded before the first render.
    assert [t.name for t in seen[0]] == ["users"]
    assert machine.state.running is False
    assert "Rendering table_list (depth 1)" in caplog.messages


def test_router_shows_notice_before_screen(router_components, monkeypatch):
    router, machine, dispatcher = router_components
    order = []

    def fake_notice(r):
        order.append("notice")
        return Dismiss()

    def fake_table_list(r):
        order.append("table_list")
        if len(order) == 1:
            r.state.notice = MagicMock()
            return None
        return Quit()

    monkeypatch.setitem(SCREENS, "notice", fake_notice)
    monkeypatch.setitem(SCREENS, "table_list", fake_table_list)

    router.run()

    assert order == ["table_list", "notice", "table_list"]


def test_router_keyboard_interrupt_means_back(router_components, monkeypatch):
    router, machine, dispatcher = router_components
    calls = []

    def fake_table_list(r):
        calls.append("table_list")
        if len(calls) == 1:
            return Select(0)
        return Quit()

    def fake_table_action(r):
        calls.append("table_action")
        raise KeyboardInterrupt

    monkeypatch.setitem(SCREENS, "table_list", fake_table_list)
    monkeypatch.setitem(SCREENS, "table_action", fake_table_action)

    router.run()

    assert calls == ["table_list", "table_action", "table_list"]


def test_router_unknown_screen_returns_home(router_components, monkeypatch):
    router, machine, dispatcher = router_components
    machine.nav.push("nowhere")

    monkeypatch.setitem(SCREENS, "table_list", lambda r: Quit())

    router.run()

    assert machine.nav.current() == "table_list"
    assert "[yellow]" not in router.console.file.getvalue()
    assert "Unknown screen 'nowhere'" in router.console.file.getvalue()


def test_router_wait_applies_completion(router_components):
    router, machine, dispatcher = router_components
    machine.start()
    assert machine.state.loading == "Loading Tables..."

    router._wait_for_completion()

    assert machine.state.loading is None
    assert machine.state.tables_loaded is True


def test_router_wait_interrupted_abandons_request(router_components, monkeypatch):
    router, machine, dispatcher = router_components
    machine.start()
    generation = machine.state.generations["tables"]

    def interrupted(timeout):
        raise KeyboardInterrupt

    monkeypatch.setattr(dispatcher, "wait", interrupted)

    router._wait_for_completion()

    assert machine.state.loading is None
    assert machine.state.generations["tables"] == generation + 1
    # The abandoned completion is still queued and must be ignored.
    router.pump()
    assert machine.state.tables == []
    assert machine.state.tables_error == "Loading cancelled"


def test_back_event_pops(router_components):
    router, machine, dispatcher = router_components
    machine.nav.push("help")
    machine.handle(Back())
    assert machine.nav.current() == "table_list"
