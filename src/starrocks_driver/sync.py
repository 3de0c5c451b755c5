"""
Metadata discovery for StarRocks catalogs.

Databases, tables and columns are listed with StarRocks' own introspection
statements (``SHOW DATABASES``, ``SHOW TABLES FROM``, ``DESCRIBE``) rather than
the MySQL ``information_schema`` queries, which StarRocks only partially supports.
A failure to list the tables of one database is contained to that database so
that a full catalog scan returns everything else it can.
"""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass, field
from typing import Any, Iterable

from .expressions import qualified_name, quote_identifier
from .types import BaseType, database_type_to_base_type

logger = logging.getLogger(__name__.split(".")[0])

# never surfaced to end users
EXCLUDED_SCHEMAS = frozenset({"information_schema", "INFORMATION_SCHEMA", "_statistics_"})


@dataclass(frozen=True)
class Table:
    """A table or view within a database."""

    name: str
    schema: str


@dataclass(frozen=True)
class Column:
    """A column of a described table."""

    name: str
    database_type: str
    base_type: BaseType
    database_position: int


@dataclass(frozen=True)
class TableDescription:
    """A table together with its columns in ordinal order."""

    schema: str
    name: str
    fields: tuple[Column, ...] = ()


@dataclass(frozen=True)
class DatabaseDescription:
    """All tables found in a catalog."""

    tables: frozenset[Table] = frozenset()


@dataclass(frozen=True)
class SchemaScan:
    """Result of listing the tables of one database."""

    schema: str
    tables: frozenset[Table] = frozenset()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# =========================================================================
# Introspection statements
# =========================================================================


def describe_catalog_sql() -> str:
    """Statement listing the databases of the current catalog."""
    return "SHOW DATABASES"


def describe_schema_sql(schema: str) -> str:
    """Statement listing the tables of a database."""
    return f"SHOW TABLES FROM {quote_identifier(schema)}"


def describe_table_sql(schema: str, table: str) -> str:
    """Statement listing the columns of a table."""
    return f"DESCRIBE {qualified_name(schema, table)}"


# =========================================================================
# Discovery
# =========================================================================


def get_schemas(connection: Any) -> list[str]:
    """
    List the databases of the current catalog, without system databases.

    Parameters
    ----------
    connection : Connection
        Open connection; only its ``query`` method is used.

    Returns
    -------
    list[str]
        Database names in the order returned by the server.

    Raises
    ------
    StarRocksDriverError
        If the statement fails. This aborts the surrounding discovery call.
    """
    with closing(connection.query(describe_catalog_sql())) as cursor:
        return [row[0] for row in cursor if row[0] not in EXCLUDED_SCHEMAS]


def scan_schema(connection: Any, schema: str) -> SchemaScan:
    """
    List the tables of one database, capturing failure in the result.

    Parameters
    ----------
    connection : Connection
        Open connection.
    schema : str
        Database name.

    Returns
    -------
    SchemaScan
        Tables on success; no tables and the error text on failure.
    """
    try:
        with closing(connection.query(describe_schema_sql(schema))) as cursor:
            tables = frozenset(Table(name=row[0], schema=schema) for row in cursor)
    except Exception as e:  # isolated per database
        return SchemaScan(schema=schema, error=str(e) or e.__class__.__name__)
    return SchemaScan(schema=schema, tables=tables)


def _log_failure(scan: SchemaScan) -> None:
    logger.warning(f"Could not get tables from schema {scan.schema}: {scan.error}")


def get_tables_in_schema(connection: Any, schema: str) -> frozenset[Table]:
    """List the tables of one database; a failure is logged and yields no tables."""
    scan = scan_schema(connection, schema)
    if not scan.ok:
        _log_failure(scan)
    return scan.tables


def collect_tables(scans: Iterable[SchemaScan]) -> frozenset[Table]:
    """Union the tables of several scans, logging the ones that failed."""
    tables: set[Table] = set()
    for scan in scans:
        if not scan.ok:
            _log_failure(scan)
        tables |= scan.tables
    return frozenset(tables)


def describe_database(connection: Any) -> DatabaseDescription:
    """
    Describe every table of every user database in the current catalog.

    Listing the databases must succeed; listing the tables of any one database
    may fail without affecting the others.
    """
    schemas = get_schemas(connection)
    return DatabaseDescription(tables=collect_tables(scan_schema(connection, schema) for schema in schemas))


def describe_table(connection: Any, schema: str, table: str) -> TableDescription:
    """
    Describe the columns of a table.

    Parameters
    ----------
    connection : Connection
        Open connection.
    schema : str
        Database name.
    table : str
        Table name.

    Returns
    -------
    TableDescription
        Columns classified by type, numbered from 0 in the order ``DESCRIBE``
        returns them.
    """
    with closing(connection.query(describe_table_sql(schema, table), as_dict=True)) as cursor:
        fields = tuple(
            Column(
                name=row["Field"],
                database_type=row["Type"],
                base_type=database_type_to_base_type(row["Type"]),
                database_position=position,
            )
            for position, row in enumerate(cursor)
        )
    return TableDescription(schema=schema, name=table, fields=fields)


def describe_table_fks(connection: Any, schema: str, table: str) -> None:
    """StarRocks exposes no key constraints; nothing is queried."""
    return None


def current_user_table_privileges(connection: Any, *args: Any, **kwargs: Any) -> None:
    """
    Skip privilege discovery.

    StarRocks does not accept ``SHOW GRANTS FOR CURRENT_USER``, so the statement
    is never sent and the host treats every table as readable.
    """
    return None
