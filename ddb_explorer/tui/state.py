"""Session state shared by the state machine and the screens."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..client import Record, TableInfo

QUERY = "query"
SCAN = "scan"


def empty_forms() -> dict[str, dict[str, str]]:
    """Fresh field values for both TableAction sub-modes."""
    return {
        QUERY: {"partition_value": "", "sort_value": "", "operator": "=", "sort_value_upper": ""},
        SCAN: {},
    }


@dataclass
class Notice:
    """A dismissible message shown in place of the current screen."""

    title: str
    message: str
    is_error: bool = True


@dataclass
class UIState:
    """UI session state.

    Owned by the UI loop: only NavigationStateMachine mutates it, and only
    from the loop thread, so nothing here needs a lock.
    """

    profile: str = "dev"

    # Table list (loaded once per session, reloadable)
    tables: list[TableInfo] = field(default_factory=list)
    tables_loaded: bool = False
    tables_error: str | None = None

    # Table action
    table: TableInfo | None = None
    mode: str = QUERY
    forms: dict[str, dict[str, str]] = field(default_factory=empty_forms)

    # Item detail / JSON field view
    record: Record | None = None
    json_field: str | None = None
    json_lines: list[str] = field(default_factory=list)
    json_offset: int = 0

    # Overlays
    loading: str | None = None
    loading_slot: str | None = None
    notice: Notice | None = None

    # One counter per logical operation slot ("tables", "results").
    generations: dict[str, int] = field(default_factory=lambda: {"tables": 0, "results": 0})

    running: bool = True

    def remember(self, **kwargs: Any) -> None:
        """Update form values of the active sub-mode.

        Unknown field names are ignored.

        Example:
            state.remember(partition_value="u1", operator=">=")
        """
        form = self.forms[self.mode]
        for key, value in kwargs.items():
            if key in form:
                form[key] = value

    @property
    def form(self) -> dict[str, str]:
        return self.forms[self.mode]

    def bump(self, slot: str) -> int:
        """Start a new request in `slot`, invalidating any outstanding one."""
        self.generations[slot] += 1
        return self.generations[slot]

    def is_current(self, slot: str, generation: int) -> bool:
        return self.generations.get(slot) == generation

    def begin_loading(self, slot: str, label: str) -> int:
        """Enter the loading sub-state for a new request in `slot`."""
        self.loading = label
        self.loading_slot = slot
        return self.bump(slot)

    def end_loading(self) -> None:
        self.loading = None
        self.loading_slot = None

    def clear_json_view(self) -> None:
        self.json_field = None
        self.json_lines = []
        self.json_offset = 0
