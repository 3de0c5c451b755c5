"""
Unit tests for metadata discovery.

Statements are answered by FakeConnection (see conftest.py).
"""

import itertools
import logging

import pytest

from starrocks_driver import sync
from starrocks_driver.errors import MissingTableError, QueryError
from starrocks_driver.sync import Column, SchemaScan, Table
from starrocks_driver.types import BaseType

SHOW_DATABASES = "SHOW DATABASES"


def show_tables(schema):
    return f"SHOW TABLES FROM `{schema}`"


class TestStatements:
    """Introspection statement text."""

    def test_describe_catalog_sql(self):
        assert sync.describe_catalog_sql() == "SHOW DATABASES"

    def test_describe_schema_sql(self):
        assert sync.describe_schema_sql("sales") == "SHOW TABLES FROM `sales`"

    def test_describe_table_sql(self):
        assert sync.describe_table_sql("sales", "orders") == "DESCRIBE `sales`.`orders`"

    def test_identifiers_escaped(self):
        assert sync.describe_schema_sql("we`ird") == "SHOW TABLES FROM `we``ird`"


class TestGetSchemas:
    """Database enumeration."""

    def test_excludes_system_schemas(self, fake_connection):
        rows = [("sales",), ("information_schema",), ("_statistics_",), ("INFORMATION_SCHEMA",), ("hr",)]
        conn = fake_connection({SHOW_DATABASES: rows})
        assert sync.get_schemas(conn) == ["sales", "hr"]
        assert conn.all_cursors_closed

    @pytest.mark.parametrize(
        "rows",
        list(itertools.permutations([("sales",), ("information_schema",), ("hr",), ("_statistics_",)])),
    )
    def test_order_independent(self, fake_connection, rows):
        conn = fake_connection({SHOW_DATABASES: list(rows)})
        schemas = sync.get_schemas(conn)
        assert sorted(schemas) == ["hr", "sales"]
        assert not set(schemas) & sync.EXCLUDED_SCHEMAS

    def test_failure_is_fatal(self, fake_connection):
        conn = fake_connection({SHOW_DATABASES: QueryError("boom")})
        with pytest.raises(QueryError):
            sync.get_schemas(conn)


class TestSchemaScan:
    """Per-database table listing."""

    def test_success(self, fake_connection):
        conn = fake_connection({show_tables("sales"): [("orders",), ("customers",)]})
        scan = sync.scan_schema(conn, "sales")
        assert scan.ok
        assert scan.tables == {Table("orders", "sales"), Table("customers", "sales")}
        assert conn.all_cursors_closed

    def test_failure_captured(self, fake_connection):
        conn = fake_connection({show_tables("gone"): MissingTableError("Unknown database 'gone'")})
        scan = sync.scan_schema(conn, "gone")
        assert not scan.ok
        assert scan.tables == frozenset()
        assert "gone" in scan.error

    def test_failure_during_iteration_releases_cursor(self, fake_connection, broken_cursor):
        cursor = broken_cursor([("orders",)], RuntimeError("stream reset"))
        conn = fake_connection({show_tables("sales"): cursor})
        scan = sync.scan_schema(conn, "sales")
        assert scan == SchemaScan(schema="sales", error="stream reset")
        assert cursor.closed

    def test_duplicate_rows_deduplicated(self, fake_connection):
        conn = fake_connection({show_tables("sales"): [("orders",), ("orders",)]})
        assert sync.get_tables_in_schema(conn, "sales") == {Table("orders", "sales")}

    def test_get_tables_logs_failure(self, fake_connection, caplog_driver):
        conn = fake_connection({show_tables("gone"): RuntimeError("dropped")})
        assert sync.get_tables_in_schema(conn, "gone") == frozenset()
        assert "Could not get tables from schema gone: dropped" in caplog_driver.text


class TestDescribeDatabase:
    """Full catalog description with per-database fault isolation."""

    def test_failed_schema_contributes_nothing(self, fake_connection, caplog_driver):
        conn = fake_connection(
            {
                SHOW_DATABASES: [("one",), ("two",), ("three",)],
                show_tables("one"): [("a",), ("b",)],
                show_tables("two"): QueryError("schema dropped concurrently"),
                show_tables("three"): [("c",)],
            }
        )
        description = sync.describe_database(conn)
        assert description.tables == {Table("a", "one"), Table("b", "one"), Table("c", "three")}
        assert conn.queries == [SHOW_DATABASES, show_tables("one"), show_tables("two"), show_tables("three")]
        assert conn.all_cursors_closed
        assert [r.levelno for r in caplog_driver.records] == [logging.WARNING]
        assert "two" in caplog_driver.records[0].getMessage()

    def test_excluded_schemas_not_scanned(self, fake_connection):
        conn = fake_connection(
            {
                SHOW_DATABASES: [("information_schema",), ("sales",)],
                show_tables("sales"): [("orders",)],
            }
        )
        assert sync.describe_database(conn).tables == {Table("orders", "sales")}
        assert show_tables("information_schema") not in conn.queries

    def test_same_table_name_in_two_schemas(self, fake_connection):
        conn = fake_connection(
            {
                SHOW_DATABASES: [("a",), ("b",)],
                show_tables("a"): [("t",)],
                show_tables("b"): [("t",)],
            }
        )
        assert sync.describe_database(conn).tables == {Table("t", "a"), Table("t", "b")}

    def test_empty_catalog(self, fake_connection):
        assert sync.describe_database(fake_connection()).tables == frozenset()

    def test_collect_tables(self, caplog_driver):
        scans = [
            SchemaScan("x", frozenset({Table("t1", "x")})),
            SchemaScan("y", error="denied"),
        ]
        assert sync.collect_tables(scans) == {Table("t1", "x")}
        assert "schema y: denied" in caplog_driver.text


class TestDescribeTable:
    """Column discovery."""

    ROWS = [
        {"Field": "zeta", "Type": "bigint(20)", "Null": "NO", "Key": "true", "Default": None, "Extra": ""},
        {"Field": "alpha", "Type": "varchar(65533)", "Null": "YES", "Key": "false", "Default": None, "Extra": ""},
        {"Field": "mid", "Type": "datetime", "Null": "YES", "Key": "false", "Default": None, "Extra": ""},
        {"Field": "tags", "Type": "array<varchar(10)>", "Null": "YES", "Key": "false", "Default": None, "Extra": ""},
    ]

    def test_columns_in_row_order(self, fake_connection):
        conn = fake_connection({"DESCRIBE `sales`.`orders`": self.ROWS})
        description = sync.describe_table(conn, "sales", "orders")
        assert (description.schema, description.name) == ("sales", "orders")
        assert description.fields == (
            Column("zeta", "bigint(20)", BaseType.BIG_INTEGER, 0),
            Column("alpha", "varchar(65533)", BaseType.TEXT, 1),
            Column("mid", "datetime", BaseType.DATETIME, 2),
            Column("tags", "array<varchar(10)>", BaseType.ARRAY, 3),
        )
        assert conn.all_cursors_closed

    def test_positions_ignore_names(self, fake_connection):
        conn = fake_connection({"DESCRIBE `s`.`t`": list(reversed(self.ROWS))})
        fields = sync.describe_table(conn, "s", "t").fields
        assert [f.name for f in fields] == ["tags", "mid", "alpha", "zeta"]
        assert [f.database_position for f in fields] == [0, 1, 2, 3]

    def test_failure_releases_cursor(self, fake_connection, broken_cursor):
        cursor = broken_cursor(self.ROWS[:1], RuntimeError("lost"))
        conn = fake_connection({"DESCRIBE `s`.`t`": cursor})
        with pytest.raises(RuntimeError):
            sync.describe_table(conn, "s", "t")
        assert cursor.closed


class TestUnsupportedMetadata:
    """Entry points answered without touching the connection."""

    @pytest.mark.parametrize("schema, table", [("sales", "orders"), ("", ""), (None, None)])
    def test_foreign_keys(self, fake_connection, schema, table):
        conn = fake_connection()
        assert sync.describe_table_fks(conn, schema, table) is None
        assert conn.queries == []

    @pytest.mark.parametrize("args", [(), ("db",), ("db", "table", "extra")])
    def test_privileges(self, fake_connection, args):
        conn = fake_connection()
        assert sync.current_user_table_privileges(conn, *args) is None
        assert conn.queries == []
