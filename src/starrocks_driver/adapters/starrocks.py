"""
StarRocks driver adapter.

StarRocks speaks the MySQL wire protocol but diverges from MySQL in its
metadata statements and adds a catalog level above databases. This adapter
routes around the differences: it targets ``catalog.database`` namespaces,
introspects with ``SHOW``/``DESCRIBE`` statements, never issues
``SHOW GRANTS FOR CURRENT_USER`` and reports no key constraints.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from .. import connection as connection_module
from .. import errors, expressions, sync
from ..details import ConnectionDescriptor, connection_details_to_spec
from ..settings import DEFAULT_PORT
from ..types import BaseType, database_type_to_base_type
from .base import DriverAdapter, Feature

FEATURES = MappingProxyType(
    {
        Feature.SET_TIMEZONE: True,
        Feature.BASIC_AGGREGATIONS: True,
        Feature.STANDARD_DEVIATION_AGGREGATIONS: True,
        Feature.EXPRESSIONS: True,
        Feature.EXPRESSION_AGGREGATIONS: True,
        Feature.NATIVE_PARAMETERS: True,
        Feature.BINNING: True,
        Feature.MULTIPLE_DATABASES: True,
        Feature.TEMPORAL_EXTRACT: True,
        Feature.DATE_ARITHMETICS: True,
        Feature.ADVANCED_MATH_EXPRESSIONS: True,
        Feature.NOW: True,
        Feature.FOREIGN_KEYS: False,
        Feature.NESTED_FIELD_COLUMNS: False,
        Feature.KEY_CONSTRAINTS: False,
    }
)


class StarRocksAdapter(DriverAdapter):
    """StarRocks driver adapter implementation."""

    name = "starrocks"
    features = FEATURES

    # =========================================================================
    # Driver Metadata
    # =========================================================================

    @property
    def display_name(self) -> str:
        return "StarRocks"

    @property
    def default_port(self) -> int:
        """StarRocks frontend query port 9030."""
        return DEFAULT_PORT

    @property
    def start_of_week(self) -> str:
        return "monday"

    # =========================================================================
    # Connection Management
    # =========================================================================

    def connection_details_to_spec(self, **details: Any) -> ConnectionDescriptor:
        """
        Resolve connection details, see ``details.connection_details_to_spec``.

        Unknown keys (e.g. UI-only properties) are ignored.
        """
        known = ("host", "port", "catalog", "dbname", "user", "password", "additional_options")
        return connection_details_to_spec(**{k: v for k, v in details.items() if k in known})

    def connect(self, descriptor: ConnectionDescriptor) -> connection_module.Connection:
        return connection_module.Connection(descriptor)

    def can_connect(self, descriptor: ConnectionDescriptor) -> bool:
        return connection_module.can_connect(descriptor)

    def db_default_timezone(self, connection: Any) -> str:
        return connection_module.db_default_timezone(connection)

    def humanize_connection_error_message(self, message: object) -> str:
        return errors.humanize_connection_error_message(message)

    # =========================================================================
    # Type Mapping
    # =========================================================================

    def database_type_to_base_type(self, database_type: str) -> BaseType:
        return database_type_to_base_type(database_type)

    # =========================================================================
    # Introspection
    # =========================================================================

    def describe_database(self, connection: Any) -> sync.DatabaseDescription:
        return sync.describe_database(connection)

    def describe_table(self, connection: Any, schema: str, table: str) -> sync.TableDescription:
        return sync.describe_table(connection, schema, table)

    def describe_table_fks(self, connection: Any, schema: str, table: str) -> None:
        return sync.describe_table_fks(connection, schema, table)

    def current_user_table_privileges(self, connection: Any) -> None:
        return sync.current_user_table_privileges(connection)

    # =========================================================================
    # SQL Syntax and Expressions
    # =========================================================================

    def quote_identifier(self, name: str) -> str:
        """
        Quote identifier with backticks, as for MySQL.

        Returns
        -------
        str
            Backtick-quoted identifier: `name`
        """
        return expressions.quote_identifier(name)

    def unix_timestamp_to_datetime(self, expr: str, unit: expressions.EpochUnit) -> str:
        return expressions.unix_timestamp_to_datetime(expr, unit)

    def current_datetime(self) -> str:
        return expressions.current_datetime()

    def truncate(self, expr: str, unit: expressions.DateUnit) -> str:
        return expressions.truncate(expr, unit)

    def extract(self, expr: str, unit: expressions.ExtractUnit) -> str:
        return expressions.extract(expr, unit)

    def add_interval(self, expr: str, amount: int, unit: expressions.IntervalUnit) -> str:
        return expressions.add_interval(expr, amount, unit)

    def datetime_diff(self, x: str, y: str, unit: expressions.IntervalUnit) -> str:
        return expressions.datetime_diff(x, y, unit)

    def cast_temporal_string(self, expr: str, coercion: expressions.Coercion) -> str:
        return expressions.cast_temporal_string(expr, coercion)
