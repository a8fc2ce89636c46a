# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

import pytest
from clickhouse_node import ValidationError
from clickhouse_node.sql import READ_ONLY_MESSAGE, apply_max_results, ensure_read_only, prepare_query

# ==================== Read-Only Guard Tests ====================


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT 1",
        "select id from product",
        "   \n\tSeLeCt now()",
        "SHOW TABLES",
        "show databases",
        "DESCRIBE TABLE product",
        "desc product",
        "  DESC product  ",
    ],
)
def test_read_only_accepts_allowed_prefixes(sql: str):
    """Test read-only mode returns allowed statements unchanged."""
    assert ensure_read_only(sql) == sql


@pytest.mark.parametrize(
    "sql",
    [
        "INSERT INTO product VALUES (1)",
        "  drop table product",
        "ALTER TABLE product DELETE WHERE 1",
        "WITH x AS (SELECT 1) SELECT * FROM x",
        "-- comment\nSELECT 1",
        "",
        "   ",
    ],
)
def test_read_only_rejects_other_statements(sql: str):
    """Test read-only mode rejects anything not starting with an allowed keyword."""
    with pytest.raises(ValidationError) as excinfo:
        ensure_read_only(sql)
    assert excinfo.value.message == READ_ONLY_MESSAGE


def test_read_only_is_prefix_check_only():
    """Test that a second statement after an allowed prefix is not detected."""
    sql = "SELECT 1; DROP TABLE product"
    assert ensure_read_only(sql) == sql


# ==================== LIMIT Injection Tests ====================


@pytest.mark.parametrize("max_results", [1, 10, 5000])
def test_limit_appended_when_missing(max_results: int):
    """Test LIMIT is appended verbatim when the query has none."""
    sql = "SELECT id FROM product"
    assert apply_max_results(sql, max_results) == f"{sql} LIMIT {max_results}"


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT id FROM product LIMIT 5",
        "select id from product limit 5",
        "SELECT id FROM product LiMiT 1 BY id",
        "SELECT unlimited FROM product",
    ],
)
def test_limit_not_appended_when_present(sql: str):
    """Test any case-insensitive LIMIT substring leaves the query untouched."""
    assert apply_max_results(sql, 100) == sql


@pytest.mark.parametrize("sql", ["SELECT id FROM product", "SELECT 1 LIMIT 3", ""])
def test_zero_max_results_never_appends(sql: str):
    """Test max results of zero disables LIMIT injection."""
    assert apply_max_results(sql, 0) == sql


def test_limit_append_keeps_trailing_semicolon():
    """Test the append is purely textual."""
    assert apply_max_results("SELECT 1;", 2) == "SELECT 1; LIMIT 2"


# ==================== Combined Tests ====================


def test_prepare_query_guards_then_limits():
    """Test read-only validation and LIMIT injection together."""
    assert prepare_query("  select * from product", read_only=True, max_results=7) == "  select * from product LIMIT 7"


def test_prepare_query_rejects_before_limiting():
    """Test rejected statements are not rewritten."""
    with pytest.raises(ValidationError):
        prepare_query("DELETE FROM product", read_only=True, max_results=7)


def test_prepare_query_without_read_only_allows_writes():
    """Test mutating statements pass when read-only mode is off."""
    assert prepare_query("TRUNCATE TABLE product") == "TRUNCATE TABLE product"
