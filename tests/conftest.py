from __future__ import annotations

import os
import sys
from os import environ
from typing import Any

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `ddb_explorer/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()

from ddb_explorer.client import QueryResult, Record, TableInfo  # noqa: E402
from ddb_explorer.tui.worker import Completed  # noqa: E402


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch) -> None:
    monkeypatch.setitem(environ, "AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setitem(environ, "AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setitem(environ, "AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setitem(environ, "AWS_SESSION_TOKEN", "testing")
    monkeypatch.setitem(environ, "AWS_DEFAULT_REGION", "us-east-1")


def make_record(**fields: Any) -> Record:
    """Record whose display values are str() of the raw ones.

    Lists and dicts count as List/Map attributes.
    """
    containers = frozenset(k for k, v in fields.items() if isinstance(v, (list, dict)))
    return Record(display={k: str(v) for k, v in fields.items()}, raw=dict(fields), containers=containers)


class FakeClient:
    """In-memory stand-in for RetrievalClient serving canned pages.

    Page i carries token {"id": {"S": "k<i>"}} unless it is the last page.
    """

    def __init__(self, pages: list[list[Record]], tables: list[TableInfo] | None = None):
        self.pages = pages
        self.tables = tables or []
        self.calls: list[tuple[str, Any]] = []

    def _page(self, token: Any) -> QueryResult:
        index = 0 if token is None else int(token["id"]["S"][1:])
        last = None
        if index + 1 < len(self.pages):
            last = {"id": {"S": f"k{index + 1}"}}
        return QueryResult(records=tuple(self.pages[index]), last_evaluated_key=last)

    def scan(self, table: str, exclusive_start_key: Any = None) -> QueryResult:
        self.calls.append(("scan", exclusive_start_key))
        return self._page(exclusive_start_key)

    def query(self, table: str, partition_key: str, partition_value: str, sort_key=None, sort_value=None,
              operator="=", exclusive_start_key=None, **kwargs: Any) -> QueryResult:
        self.calls.append(("query", exclusive_start_key))
        return self._page(exclusive_start_key)

    def list_tables(self) -> list[TableInfo]:
        self.calls.append(("list_tables", None))
        return list(self.tables)


class InlineDispatcher:
    """Runs jobs immediately but holds completions until `deliver()`."""

    def __init__(self):
        self.pending: list[Completed] = []

    def submit(self, slot, generation, kind, job, params=None) -> None:
        try:
            value = job()
        except Exception as e:  # test double: mirror ThreadDispatcher's error reporting
            self.pending.append(Completed(slot, generation, kind, error=e, params=params))
            return
        self.pending.append(Completed(slot, generation, kind, value=value, params=params))

    def deliver(self, machine) -> None:
        pending, self.pending = self.pending, []
        for message in pending:
            machine.apply(message)


@pytest.fixture
def users_table() -> TableInfo:
    return TableInfo(
        name="users",
        status="ACTIVE",
        item_count=3,
        size_bytes=2048,
        partition_key="id",
        sort_key="ts",
        schema_fields=("id", "ts", "email"),
    )
