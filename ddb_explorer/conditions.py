"""Key-condition expressions for Query.

Attribute names are always referenced through placeholders (#pk, #sk) so
reserved words such as "name" or "status" never collide with the
expression grammar.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ConfigError

OPERATORS: tuple[str, ...] = ("=", "begins_with", "<", "<=", ">", ">=", "between")

_SORT_FRAGMENTS = {
    "=": "#sk = :sk",
    "begins_with": "begins_with(#sk, :sk)",
    "<": "#sk < :sk",
    "<=": "#sk <= :sk",
    ">": "#sk > :sk",
    ">=": "#sk >= :sk",
    "between": "#sk BETWEEN :sk AND :sk2",
}

_KEY_TYPES = ("S", "N", "B")


@dataclass(frozen=True)
class KeyCondition:
    """Expression plus its placeholder bindings, ready for a Query call."""

    expression: str
    names: dict[str, str] = field(default_factory=dict)
    values: dict[str, dict[str, Any]] = field(default_factory=dict)

    def as_query_kwargs(self) -> dict[str, Any]:
        return {
            "KeyConditionExpression": self.expression,
            "ExpressionAttributeNames": dict(self.names),
            "ExpressionAttributeValues": dict(self.values),
        }


def _bind(value: str, key_type: str) -> dict[str, Any]:
    if key_type == "B":
        return {"B": value.encode("utf-8")}
    if key_type not in _KEY_TYPES:
        key_type = "S"
    return {key_type: value}


def build_key_condition(
    partition_key: str,
    partition_value: str,
    *,
    sort_key: str | None = None,
    sort_value: str | None = None,
    operator: str = "=",
    sort_value_upper: str | None = None,
    partition_type: str = "S",
    sort_type: str = "S",
) -> KeyCondition:
    """Build the key condition for a Query.

    The partition key is always bound with equality. A sort clause is added
    only when both a sort key and a non-empty sort value are given.

    Args:
        partition_key: Partition key attribute name
        partition_value: Value the partition key must equal
        sort_key: Sort key attribute name, if the table has one
        sort_value: Sort key value (lower bound for between)
        operator: One of OPERATORS
        sort_value_upper: Upper bound, required for between
        partition_type: Declared attribute type of the partition key (S/N/B)
        sort_type: Declared attribute type of the sort key (S/N/B)

    Returns:
        KeyCondition

    Raises:
        ConfigError: Missing partition key/value, unknown operator, or
            between with a single bound.
    """
    if not partition_key:
        raise ConfigError("Table has no partition key; use Scan instead")
    if not partition_value:
        raise ConfigError(f"A value for partition key '{partition_key}' is required")

    names = {"#pk": partition_key}
    values = {":pk": _bind(partition_value, partition_type)}
    expression = "#pk = :pk"

    if sort_key and sort_value:
        fragment = _SORT_FRAGMENTS.get(operator)
        if fragment is None:
            raise ConfigError(f"Unknown condition '{operator}'. Expected one of: {', '.join(OPERATORS)}")
        if operator == "between":
            if not sort_value_upper:
                raise ConfigError("Condition 'between' needs both a lower and an upper bound")
            values[":sk2"] = _bind(sort_value_upper, sort_type)
        names["#sk"] = sort_key
        values[":sk"] = _bind(sort_value, sort_type)
        expression = f"{expression} AND {fragment}"

    return KeyCondition(expression=expression, names=names, values=values)
