"""Thin synchronous DynamoDB facade.

Every Query/Scan call is bounded to one page of `page_size` items. Nothing
here retries: a failed call raises BackendError and the user decides
whether to submit again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .codec import DisplayItem, RawItem, project_item
from .conditions import build_key_condition
from .errors import BackendError
from .settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 15

ContinuationToken = Mapping[str, Any]


@dataclass(frozen=True)
class TableInfo:
    """Metadata for one table, as returned by DescribeTable."""

    name: str
    status: str
    item_count: int
    size_bytes: int
    partition_key: str
    sort_key: str = ""
    # Primary key first, then any secondary index keys; no duplicates.
    schema_fields: tuple[str, ...] = ()
    # Declared attribute types (S/N/B) for key attributes.
    key_types: Mapping[str, str] = field(default_factory=dict)

    def key_type(self, attribute: str) -> str:
        return self.key_types.get(attribute, "S")


@dataclass(frozen=True)
class Record:
    """One item, in both projections, built from the same source."""

    display: DisplayItem
    raw: RawItem
    # Attributes decoded as List or Map; only these open in the JSON view.
    containers: frozenset[str] = frozenset()


@dataclass(frozen=True)
class QueryResult:
    records: tuple[Record, ...] = ()
    # Wire-format LastEvaluatedKey; None means no further pages.
    last_evaluated_key: ContinuationToken | None = None

    @property
    def has_more(self) -> bool:
        return self.last_evaluated_key is not None


def _to_result(response: Mapping[str, Any]) -> QueryResult:
    records = []
    for wire_item in response.get("Items", []):
        display, raw, containers = project_item(wire_item)
        records.append(Record(display=display, raw=raw, containers=containers))
    last_key = response.get("LastEvaluatedKey") or None
    return QueryResult(records=tuple(records), last_evaluated_key=last_key)


def _parse_table(name: str, table: Mapping[str, Any]) -> TableInfo:
    partition_key = ""
    sort_key = ""
    schema_fields: list[str] = []

    def _add(attribute: str) -> None:
        if attribute and attribute not in schema_fields:
            schema_fields.append(attribute)

    for ks in table.get("KeySchema", []):
        attribute = ks.get("AttributeName", "")
        _add(attribute)
        if ks.get("KeyType") == "HASH":
            partition_key = attribute
        elif ks.get("KeyType") == "RANGE":
            sort_key = attribute

    for index_group in ("GlobalSecondaryIndexes", "LocalSecondaryIndexes"):
        for index in table.get(index_group, []) or []:
            for ks in index.get("KeySchema", []):
                _add(ks.get("AttributeName", ""))

    key_types = {
        d["AttributeName"]: d["AttributeType"]
        for d in table.get("AttributeDefinitions", [])
        if "AttributeName" in d and "AttributeType" in d
    }

    return TableInfo(
        name=name,
        status=str(table.get("TableStatus", "")),
        item_count=int(table.get("ItemCount", 0) or 0),
        size_bytes=int(table.get("TableSizeBytes", 0) or 0),
        partition_key=partition_key,
        sort_key=sort_key,
        schema_fields=tuple(schema_fields),
        key_types=key_types,
    )


class RetrievalClient:
    """ListTables / DescribeTable / Query / Scan against one DynamoDB client."""

    def __init__(self, ddb: Any, page_size: int = DEFAULT_PAGE_SIZE):
        """Wrap a low-level boto3 DynamoDB client.

        Args:
            ddb: boto3 client("dynamodb")
            page_size: Items per Query/Scan call
        """
        self.ddb = ddb
        self.page_size = page_size

    @classmethod
    def connect(cls, profile: str, settings: Settings) -> "RetrievalClient":
        """Create a client for a named AWS profile.

        Raises:
            BackendError: The profile or its configuration cannot be loaded.
        """
        try:
            session = boto3.Session(profile_name=profile, region_name=settings.DDB_EXPLORER_REGION)
            ddb = session.client("dynamodb", endpoint_url=settings.DDB_EXPLORER_ENDPOINT_URL)
        except (BotoCoreError, ClientError) as e:
            raise BackendError(f"failed to load AWS config with profile {profile}: {e}") from e
        logger.info("DynamoDB client created (profile=%s, region=%s)", profile, settings.DDB_EXPLORER_REGION)
        return cls(ddb, page_size=settings.DDB_EXPLORER_PAGE_SIZE)

    def _call(self, operation: str, method: str, **kwargs: Any) -> Any:
        logger.debug("%s %s", operation, {k: v for k, v in kwargs.items() if k != "ExpressionAttributeValues"})
        try:
            return getattr(self.ddb, method)(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise BackendError.from_boto(operation, e) from e

    def test_connection(self) -> None:
        """Issue a ListTables call to prove credentials and endpoint work."""
        self._call("ListTables", "list_tables", Limit=1)

    def list_table_names(self) -> list[str]:
        names: list[str] = []
        kwargs: dict[str, Any] = {}
        while True:
            response = self._call("ListTables", "list_tables", **kwargs)
            names.extend(response.get("TableNames", []))
            last = response.get("LastEvaluatedTableName")
            if not last:
                return names
            kwargs["ExclusiveStartTableName"] = last

    def list_tables(self) -> list[TableInfo]:
        """Describe every table, largest item count first.

        A table whose describe call fails is left out of the result.
        """
        tables: list[TableInfo] = []
        for name in self.list_table_names():
            try:
                tables.append(self.describe_table(name))
            except BackendError as e:
                logger.warning("Skipping table %s: %s", name, e)
        # sorted() is stable, so equal counts keep listing order.
        return sorted(tables, key=lambda t: t.item_count, reverse=True)

    def describe_table(self, name: str) -> TableInfo:
        response = self._call("DescribeTable", "describe_table", TableName=name)
        return _parse_table(name, response.get("Table", {}))

    def query(
        self,
        table: str,
        partition_key: str,
        partition_value: str,
        sort_key: str | None = None,
        sort_value: str | None = None,
        operator: str = "=",
        exclusive_start_key: ContinuationToken | None = None,
        *,
        sort_value_upper: str | None = None,
        partition_type: str = "S",
        sort_type: str = "S",
    ) -> QueryResult:
        """Fetch one page of a key-conditioned query.

        Raises:
            ConfigError: The key condition cannot be built.
            BackendError: DynamoDB rejected or failed the request.
        """
        condition = build_key_condition(
            partition_key,
            partition_value,
            sort_key=sort_key,
            sort_value=sort_value,
            operator=operator,
            sort_value_upper=sort_value_upper,
            partition_type=partition_type,
            sort_type=sort_type,
        )
        kwargs: dict[str, Any] = {"TableName": table, "Limit": self.page_size, **condition.as_query_kwargs()}
        if exclusive_start_key is not None:
            kwargs["ExclusiveStartKey"] = dict(exclusive_start_key)
        return _to_result(self._call("Query", "query", **kwargs))

    def scan(self, table: str, exclusive_start_key: ContinuationToken | None = None) -> QueryResult:
        """Fetch one page of a full-table scan."""
        kwargs: dict[str, Any] = {"TableName": table, "Limit": self.page_size}
        if exclusive_start_key is not None:
            kwargs["ExclusiveStartKey"] = dict(exclusive_start_key)
        return _to_result(self._call("Scan", "scan", **kwargs))
