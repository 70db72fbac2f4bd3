"""Navigation state machine.

Screens:

    table_list -> table_action (query | scan) -> results -> item_detail -> json_view

The machine owns the session state, the navigator and the pagination
controller. Screens turn user input into events and call `handle`; the
router feeds background completions to `apply`. Both run on the UI loop
only, so state is never mutated concurrently.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..client import Record, RetrievalClient, TableInfo
from ..conditions import build_key_condition
from ..errors import ConfigError, ExportError
from ..export import Sink, export_item, write_file
from ..pagination import PageState, PaginationController, QueryParams
from .navigator import Navigator
from .state import QUERY, SCAN, Notice, UIState, empty_forms
from .worker import Completed

logger = logging.getLogger(__name__)

# Checked in order against the first item of a page; case-sensitive.
PREVIEW_CANDIDATES = (
    "title", "Title", "name", "Name", "displayName", "description", "Description", "email", "Email",
)
MAX_PREVIEW_COLUMNS = 2


# ═══════════════════════════════════════════════════════════════════════════════
# EVENTS
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Select:
    """Select row `index` (0-based) of the current screen's list."""

    index: int


@dataclass(frozen=True)
class SetField:
    """Set a TableAction field (partition_value, sort_value, operator, sort_value_upper)."""

    name: str
    value: str


@dataclass(frozen=True)
class Scroll:
    """Scroll the JSON view by `lines` (negative = up)."""

    lines: int


@dataclass(frozen=True)
class ScrollPage:
    """Scroll the JSON view down by one screen of `height` lines."""

    height: int


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class ToggleMode:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class NextPage:
    pass


@dataclass(frozen=True)
class PreviousPage:
    pass


@dataclass(frozen=True)
class Export:
    pass


@dataclass(frozen=True)
class Dismiss:
    pass


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class ShowHelp:
    pass


# ═══════════════════════════════════════════════════════════════════════════════
# PURE VIEW HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


def preview_columns(table: TableInfo, records: tuple[Record, ...] | list[Record]) -> list[str]:
    """Pick up to two extra columns from the first record of a page."""
    if not records:
        return []
    first = records[0].display
    picked: list[str] = []
    for name in PREVIEW_CANDIDATES:
        if name in first and name not in (table.partition_key, table.sort_key):
            picked.append(name)
            if len(picked) >= MAX_PREVIEW_COLUMNS:
                break
    return picked


def result_columns(table: TableInfo, records: tuple[Record, ...] | list[Record]) -> list[str]:
    columns = [table.partition_key]
    if table.sort_key:
        columns.append(table.sort_key)
    return columns + preview_columns(table, records)


def detail_rows(table: TableInfo, record: Record) -> list[tuple[str, str]]:
    """(field, display value) rows: schema fields first, then the rest.

    The record is never modified, so the same item renders identically
    every time.
    """
    display = record.display
    placed: set[str] = set()
    rows: list[tuple[str, str]] = []
    for name in table.schema_fields:
        if name in display and name not in placed:
            rows.append((name, display[name]))
            placed.add(name)
    for name in sorted(display):
        if name not in placed:
            rows.append((name, display[name]))
    return rows


def is_structured(record: Record, name: str) -> bool:
    return name in record.containers


# ═══════════════════════════════════════════════════════════════════════════════
# MACHINE
# ═══════════════════════════════════════════════════════════════════════════════


class NavigationStateMachine:
    """Interactive controller for one browsing session."""

    def __init__(
        self,
        client: RetrievalClient,
        dispatcher: Any,
        *,
        state: UIState | None = None,
        nav: Navigator | None = None,
        export_dir: Path = Path("."),
        sink: Sink = write_file,
    ):
        """Wire the machine to its collaborators.

        Args:
            client: Backend facade
            dispatcher: Object with `submit(slot, generation, kind, job, params=None)`
            state: Session state (fresh one if omitted)
            nav: Navigator (fresh one if omitted)
            export_dir: Directory JSON exports are written to
            sink: File writer used by exports
        """
        self.client = client
        self.dispatcher = dispatcher
        self.state = state or UIState()
        self.nav = nav or Navigator()
        self.pager = PaginationController(client)
        self.export_dir = Path(export_dir)
        self.sink = sink

    # ─────────────────────────────────────────────────────────────────────────
    # Read-only views for screens
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def screen(self) -> str:
        return self.nav.current()

    @property
    def page(self) -> PageState | None:
        return self.pager.current

    def page_records(self) -> tuple[Record, ...]:
        page = self.page
        return page.records if page is not None else ()

    def results_title(self) -> str:
        params = self.pager.params
        if params is None or self.page is None:
            return ""
        kind = "Query" if params.mode == QUERY else "Scan"
        return f"{kind} Results for {params.table.name} - Page {self.page.number}"

    def visible_json_lines(self, height: int) -> list[str]:
        start = self.state.json_offset
        return self.state.json_lines[start:start + max(1, height)]

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin the session by loading the table list in the background."""
        self._load_tables()

    def _load_tables(self) -> None:
        generation = self.state.begin_loading("tables", "Loading Tables...")
        self.dispatcher.submit("tables", generation, "tables", self.client.list_tables)

    # ─────────────────────────────────────────────────────────────────────────
    # Completions
    # ─────────────────────────────────────────────────────────────────────────

    def apply(self, message: Completed) -> None:
        """Apply a background completion; stale ones are dropped."""
        if not self.state.is_current(message.slot, message.generation):
            logger.debug("Discarding stale %s result (generation %s)", message.kind, message.generation)
            return
        self.state.end_loading()

        if message.slot == "tables":
            if message.error is not None:
                logger.error("Listing tables failed: %s", message.error)
                self.state.tables_error = str(message.error)
                self.state.tables = []
            else:
                self.state.tables = list(message.value)
                self.state.tables_error = None
            self.state.tables_loaded = True
            return

        if message.error is not None:
            logger.error("%s failed: %s", message.kind, message.error)
            title = "Query error" if message.params is not None and message.params.mode == QUERY else "Scan error"
            self._notify(title, message.error)
            return

        if message.kind == "first":
            self.pager.start(message.params, message.value)
            self.nav.pop_to("table_action")
            self.nav.push("results")
        elif message.kind == "next":
            if message.params is not self.pager.params:
                logger.debug("Discarding next page for a replaced query")
                return
            self.pager.append(message.value)

    # ─────────────────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────────────────

    def handle(self, event: Any) -> None:
        """Apply one user event to the current screen."""
        state = self.state

        if state.loading is not None:
            if isinstance(event, Back):
                # Abandon the outstanding request; its result will be ignored.
                slot = state.loading_slot or "results"
                state.bump(slot)
                state.end_loading()
                if slot == "tables" and not state.tables_loaded:
                    state.tables_loaded = True
                    state.tables_error = "Loading cancelled"
            elif isinstance(event, Submit) and self.screen == "table_action":
                self._submit()
            return

        if state.notice is not None:
            if isinstance(event, (Dismiss, Back)):
                state.notice = None
            return

        if isinstance(event, Home):
            self._leave_json_view()
            self.nav.home()
            return

        handler = getattr(self, f"_on_{self.screen}", None)
        if handler is None:
            if isinstance(event, Back):
                self.nav.pop()
            return
        handler(event)

    def _notify(self, title: str, error: Exception | str, is_error: bool = True) -> None:
        self.state.notice = Notice(title=title, message=str(error), is_error=is_error)

    # table_list ────────────────────────────────────────────────────────────

    def _on_table_list(self, event: Any) -> None:
        state = self.state
        if isinstance(event, (Quit, Back)):
            state.running = False
        elif isinstance(event, Refresh):
            self._load_tables()
        elif isinstance(event, ShowHelp):
            self.nav.push("help")
        elif isinstance(event, Select):
            if not state.tables_loaded or not 0 <= event.index < len(state.tables):
                return
            self._open_table(state.tables[event.index])

    def _open_table(self, table: TableInfo) -> None:
        state = self.state
        if state.table is None or state.table.name != table.name:
            state.forms = empty_forms()
        state.table = table
        state.mode = QUERY if table.sort_key else SCAN
        self.nav.push("table_action")

    # table_action ──────────────────────────────────────────────────────────

    def _on_table_action(self, event: Any) -> None:
        state = self.state
        if isinstance(event, Back):
            self.nav.pop()
        elif isinstance(event, ToggleMode):
            if state.table is not None and state.table.partition_key:
                state.mode = SCAN if state.mode == QUERY else QUERY
        elif isinstance(event, SetField):
            state.remember(**{event.name: event.value})
        elif isinstance(event, Submit):
            self._submit()

    def _params(self) -> QueryParams:
        state = self.state
        table = state.table
        if table is None:
            raise ConfigError("No table selected")
        if state.mode == SCAN:
            return QueryParams(table=table, mode=SCAN)

        form = state.form
        sort_value = form["sort_value"].strip() if table.sort_key else ""
        between = bool(table.sort_key) and form["operator"] == "between"
        sort_value_upper = form["sort_value_upper"].strip() if between else ""
        if between and bool(sort_value) != bool(sort_value_upper):
            raise ConfigError("Condition 'between' needs both a lower and an upper bound")
        params = QueryParams(
            table=table,
            mode=QUERY,
            partition_value=form["partition_value"].strip(),
            sort_value=sort_value,
            operator=form["operator"] if sort_value else "=",
            sort_value_upper=sort_value_upper,
        )
        # Validate before any network call.
        build_key_condition(
            table.partition_key,
            params.partition_value,
            sort_key=table.sort_key or None,
            sort_value=params.sort_value or None,
            operator=params.operator,
            sort_value_upper=params.sort_value_upper or None,
        )
        return params

    def _submit(self) -> None:
        state = self.state
        try:
            params = self._params()
        except ConfigError as e:
            self._notify("Invalid query", e)
            return
        generation = state.begin_loading("results", "Querying..." if params.mode == QUERY else "Scanning...")
        pager = self.pager
        self.dispatcher.submit("results", generation, "first", lambda: pager.fetch(None, params), params=params)

    # results ───────────────────────────────────────────────────────────────

    def _on_results(self, event: Any) -> None:
        state = self.state
        if isinstance(event, Back):
            state.bump("results")
            self.nav.pop()
        elif isinstance(event, PreviousPage):
            self.pager.previous()
        elif isinstance(event, NextPage):
            self._next_page()
        elif isinstance(event, Select):
            records = self.page_records()
            if 0 <= event.index < len(records):
                state.record = records[event.index]
                self.nav.push("item_detail")

    def _next_page(self) -> None:
        pager = self.pager
        if pager.has_cached_next():
            pager.next()
            return
        token = pager.pending_token()
        if token is None:
            return
        params = pager.params
        generation = self.state.begin_loading("results", "Loading next page...")
        self.dispatcher.submit("results", generation, "next", lambda: pager.fetch(token, params), params=params)

    # item_detail ───────────────────────────────────────────────────────────

    def _on_item_detail(self, event: Any) -> None:
        state = self.state
        record = state.record
        if isinstance(event, Back) or record is None or state.table is None:
            state.record = None
            self.nav.pop()
            return
        if isinstance(event, Export):
            self._export(state.table, record)
        elif isinstance(event, Select):
            rows = detail_rows(state.table, record)
            if not 0 <= event.index < len(rows):
                return
            name = rows[event.index][0]
            if is_structured(record, name):
                value = record.raw[name]
                state.json_field = name
                state.json_lines = json.dumps(value, indent=4, ensure_ascii=False).splitlines()
                state.json_offset = 0
                self.nav.push("json_view")

    def _export(self, table: TableInfo, record: Record) -> None:
        try:
            path = export_item(table, record.raw, self.export_dir, self.sink)
        except ExportError as e:
            logger.error("Export failed: %s", e)
            self._notify("Export failed", e)
            return
        self._notify("Saved", f"Saved to: {path}", is_error=False)

    # json_view ─────────────────────────────────────────────────────────────

    def _on_json_view(self, event: Any) -> None:
        state = self.state
        last = max(0, len(state.json_lines) - 1)
        if isinstance(event, Back):
            self._leave_json_view()
            self.nav.pop()
        elif isinstance(event, Scroll):
            state.json_offset = min(last, max(0, state.json_offset + event.lines))
        elif isinstance(event, ScrollPage):
            state.json_offset = min(last, state.json_offset + max(1, event.height - 1))

    def _leave_json_view(self) -> None:
        self.state.clear_json_view()

