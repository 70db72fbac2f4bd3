"""Unit tests for Navigator class."""
from __future__ import annotations

from ddb_explorer.tui.navigator import Navigator


def test_navigator_initial_state():
    """Test navigator starts at the table list."""
    nav = Navigator()
    assert nav.current() == "table_list"
    assert nav.depth() == 1
    assert nav.breadcrumbs() == "Tables"


def test_navigator_push():
    """Test pushing screens onto the stack."""
    nav = Navigator()

    nav.push("table_action")
    assert nav.current() == "table_action"
    assert nav.depth() == 2
    assert nav.breadcrumbs() == "Tables > Query / Scan"

    nav.push("results")
    assert nav.current() == "results"
    assert nav.depth() == 3
    assert nav.breadcrumbs() == "Tables > Query / Scan > Results"


def test_navigator_push_same_screen_is_noop():
    """Re-pushing the current screen must not duplicate stack entries."""
    nav = Navigator()
    nav.push("table_action")
    nav.push("table_action")
    assert nav.depth() == 2


def test_navigator_pop():
    """Test popping screens from the stack."""
    nav = Navigator()
    nav.push("table_action")
    nav.push("results")

    popped = nav.pop()
    assert popped == "results"
    assert nav.current() == "table_action"

    popped = nav.pop()
    assert popped == "table_action"
    assert nav.current() == "table_list"
    assert nav.depth() == 1


def test_navigator_pop_at_root():
    """Test popping at root returns None and doesn't change state."""
    nav = Navigator()

    popped = nav.pop()
    assert popped is None
    assert nav.current() == "table_list"
    assert nav.depth() == 1


def test_navigator_pop_to():
    nav = Navigator()
    for screen in ("table_action", "results", "item_detail", "json_view"):
        nav.push(screen)

    nav.pop_to("results")
    assert nav.current() == "results"
    assert nav.depth() == 3


def test_navigator_home():
    """Test home resets to the table list."""
    nav = Navigator()
    nav.push("table_action")
    nav.push("results")
    nav.push("item_detail")

    nav.home()
    assert nav.current() == "table_list"
    assert nav.depth() == 1
    assert nav.breadcrumbs() == "Tables"


def test_navigator_unknown_screen():
    """Test unknown screens get generic labels in breadcrumbs."""
    nav = Navigator()
    nav.push("unknown_screen")

    assert nav.current() == "unknown_screen"
    assert nav.breadcrumbs() == "Tables > unknown_screen"


def test_navigator_full_depth_breadcrumbs():
    nav = Navigator()
    for screen in ("table_action", "results", "item_detail", "json_view"):
        nav.push(screen)
    assert nav.breadcrumbs() == "Tables > Query / Scan > Results > Item > JSON"
