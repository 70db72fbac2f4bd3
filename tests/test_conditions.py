"""Unit tests for key-condition building."""
from __future__ import annotations

import pytest

from ddb_explorer.conditions import OPERATORS, build_key_condition
from ddb_explorer.errors import ConfigError


def test_partition_key_only():
    cond = build_key_condition("id", "u1")

    assert cond.expression == "#pk = :pk"
    assert cond.names == {"#pk": "id"}
    assert cond.values == {":pk": {"S": "u1"}}


def test_sort_key_without_value_is_ignored():
    cond = build_key_condition("id", "u1", sort_key="ts", sort_value="", operator=">=")
    assert cond.expression == "#pk = :pk"
    assert "#sk" not in cond.names


@pytest.mark.parametrize(
    "operator, fragment",
    [
        ("=", "#sk = :sk"),
        ("begins_with", "begins_with(#sk, :sk)"),
        ("<", "#sk < :sk"),
        ("<=", "#sk <= :sk"),
        (">", "#sk > :sk"),
        (">=", "#sk >= :sk"),
    ],
)
def test_sort_key_operators(operator, fragment):
    cond = build_key_condition("id", "u1", sort_key="ts", sort_value="2024-01-01", operator=operator)

    assert cond.expression == f"#pk = :pk AND {fragment}"
    assert cond.names == {"#pk": "id", "#sk": "ts"}
    assert cond.values[":sk"] == {"S": "2024-01-01"}


def test_between_binds_both_bounds():
    cond = build_key_condition(
        "id", "u1", sort_key="ts", sort_value="2024-01-01", operator="between", sort_value_upper="2024-12-31"
    )

    assert cond.expression == "#pk = :pk AND #sk BETWEEN :sk AND :sk2"
    assert cond.values[":sk"] == {"S": "2024-01-01"}
    assert cond.values[":sk2"] == {"S": "2024-12-31"}


def test_between_with_one_bound_is_config_error():
    with pytest.raises(ConfigError, match="between"):
        build_key_condition("id", "u1", sort_key="ts", sort_value="2024-01-01", operator="between")


def test_unknown_operator_is_config_error():
    with pytest.raises(ConfigError, match="Unknown condition"):
        build_key_condition("id", "u1", sort_key="ts", sort_value="x", operator="contains")


def test_partition_value_required():
    with pytest.raises(ConfigError, match="'id'"):
        build_key_condition("id", "")


def test_typed_bindings():
    cond = build_key_condition(
        "year", "2024", sort_key="seq", sort_value="7", operator=">", partition_type="N", sort_type="N"
    )
    assert cond.values == {":pk": {"N": "2024"}, ":sk": {"N": "7"}}

    cond = build_key_condition("key", "abc", partition_type="B")
    assert cond.values == {":pk": {"B": b"abc"}}


def test_placeholders_avoid_reserved_words():
    cond = build_key_condition("name", "x", sort_key="status", sort_value="ok")
    assert "name" not in cond.expression
    assert "status" not in cond.expression
    assert cond.names == {"#pk": "name", "#sk": "status"}


def test_as_query_kwargs():
    kwargs = build_key_condition("id", "u1").as_query_kwargs()
    assert set(kwargs) == {"KeyConditionExpression", "ExpressionAttributeNames", "ExpressionAttributeValues"}


def test_operator_list():
    assert OPERATORS == ("=", "begins_with", "<", "<=", ">", ">=", "between")
