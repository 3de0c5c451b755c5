"""
starrocks_driver: a StarRocks dialect adapter for SQL-based BI driver frameworks.

StarRocks is wire-compatible with MySQL but has its own metadata statements and
a multi-catalog namespace. This package resolves catalog-qualified connection
targets, classifies StarRocks column types, discovers databases, tables and
columns with per-database fault isolation, and renders temporal expressions in
the StarRocks dialect.
"""

__all__ = [
    "__version__",
    "config",
    "logger",
    "errors",
    "BaseType",
    "Connection",
    "ConnectionDescriptor",
    "DriverAdapter",
    "Feature",
    "StarRocksAdapter",
    "StarRocksDriverError",
    "can_connect",
    "connection_details_to_spec",
    "database_type_to_base_type",
    "describe_database",
    "describe_table",
    "get_adapter",
    "humanize_connection_error_message",
    "register_adapter",
]

from . import errors
from .adapters import DriverAdapter, Feature, StarRocksAdapter, get_adapter, register_adapter
from .connection import Connection, can_connect
from .details import ConnectionDescriptor, connection_details_to_spec
from .errors import StarRocksDriverError, humanize_connection_error_message
from .logging import logger
from .settings import config
from .sync import describe_database, describe_table
from .types import BaseType, database_type_to_base_type
from .version import __version__
