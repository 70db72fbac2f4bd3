"""Bidirectional paging over DynamoDB's forward-only cursor.

DynamoDB only answers "give me the page after key K". PageHistory keeps
every page it has fetched so that moving backward (and forward again over
pages already seen) never touches the network and always reproduces the
exact items observed before.

The controller splits each forward move into two halves so the UI loop can
run the network call elsewhere:

    token = controller.pending_token()      # on the UI loop
    result = controller.fetch(token)        # anywhere (pure, no mutation)
    controller.append(result)               # back on the UI loop

`first()` and `next()` chain those halves for synchronous callers.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from .client import ContinuationToken, QueryResult, Record, RetrievalClient, TableInfo
from .errors import ConfigError

logger = logging.getLogger(__name__)

Mode = Literal["query", "scan"]


@dataclass(frozen=True)
class QueryParams:
    """Frozen parameters of one query or scan; a new value means a new history."""

    table: TableInfo
    mode: Mode = "scan"
    partition_value: str = ""
    sort_value: str = ""
    operator: str = "="
    sort_value_upper: str = ""


@dataclass(frozen=True)
class PageState:
    """One fetched page and the token that produces its successor."""

    number: int
    records: tuple[Record, ...]
    continuation_token: ContinuationToken | None

    @property
    def has_more(self) -> bool:
        return self.continuation_token is not None


class PaginationController:
    """Page history for the active query/scan.

    Invariants:
    - pages is append-only while moving forward;
    - moving backward only changes the index;
    - params never change within one history (first() starts a new one).
    """

    def __init__(self, client: RetrievalClient):
        self.client = client
        self.params: QueryParams | None = None
        self.pages: list[PageState] = []
        self.index = 0  # 1-based; 0 = no history yet

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def current(self) -> PageState | None:
        if self.index == 0:
            return None
        return self.pages[self.index - 1]

    def has_cached_next(self) -> bool:
        return 0 < self.index < len(self.pages)

    def can_next(self) -> bool:
        current = self.current
        return current is not None and (self.has_cached_next() or current.has_more)

    def can_previous(self) -> bool:
        return self.index > 1

    def pending_token(self) -> ContinuationToken | None:
        """Token a forward move must fetch with, or None when it needs no fetch."""
        current = self.current
        if current is None or self.has_cached_next():
            return None
        return current.continuation_token

    # ─────────────────────────────────────────────────────────────────────────
    # Fetching (no mutation)
    # ─────────────────────────────────────────────────────────────────────────

    def fetch(self, token: ContinuationToken | None, params: QueryParams | None = None) -> QueryResult:
        """Issue one backend call for `params` (default: the active params)."""
        params = params or self.params
        if params is None:
            raise ConfigError("No query has been started")
        table = params.table
        if params.mode == "scan":
            return self.client.scan(table.name, token)
        sort_key = table.sort_key if params.sort_value else None
        return self.client.query(
            table.name,
            table.partition_key,
            params.partition_value,
            sort_key,
            params.sort_value or None,
            params.operator,
            token,
            sort_value_upper=params.sort_value_upper or None,
            partition_type=table.key_type(table.partition_key),
            sort_type=table.key_type(table.sort_key),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Applying results
    # ─────────────────────────────────────────────────────────────────────────

    def start(self, params: QueryParams, result: QueryResult) -> PageState:
        """Replace the history with a single first page."""
        self.params = params
        self.pages = [PageState(1, result.records, result.last_evaluated_key)]
        self.index = 1
        logger.debug("History started for %s (%s)", params.table.name, params.mode)
        return self.pages[0]

    def append(self, result: QueryResult) -> PageState:
        """Add a freshly fetched successor of the current page and move to it."""
        if self.index == 0:
            raise ConfigError("No query has been started")
        if self.has_cached_next():
            # Already known; keep history immutable.
            self.index += 1
            return self.pages[self.index - 1]
        page = PageState(len(self.pages) + 1, result.records, result.last_evaluated_key)
        self.pages.append(page)
        self.index = page.number
        return page

    def reset(self) -> None:
        self.params = None
        self.pages = []
        self.index = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Synchronous navigation
    # ─────────────────────────────────────────────────────────────────────────

    def first(self, params: QueryParams) -> PageState:
        result = self.fetch(None, params)
        return self.start(params, result)

    def next(self) -> PageState | None:
        if self.has_cached_next():
            self.index += 1
            return self.pages[self.index - 1]
        token = self.pending_token()
        if token is None:
            return None
        return self.append(self.fetch(token))

    def previous(self) -> PageState | None:
        if self.index <= 1:
            return None
        self.index -= 1
        return self.pages[self.index - 1]
