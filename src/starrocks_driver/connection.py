"""
Database connection management for the StarRocks driver.

This module contains the Connection class that opens a pymysql connection for a
ConnectionDescriptor, along with the connectivity probe and the session timezone
lookup used by the host framework.
"""

from __future__ import annotations

import datetime
import logging
import warnings
from typing import Any, Callable

import pymysql as client
from pymysql.constants import FIELD_TYPE

from . import errors
from .details import ConnectionDescriptor
from .settings import DEFAULT_TIMEZONE, config
from .version import __version__

logger = logging.getLogger(__name__.split(".")[0])

PROBE_QUERY = "SELECT 1"
TIMEZONE_QUERY = "SELECT @@system_time_zone"


def _null_if_invalid(convert: Callable[[Any], Any], valid_type: type) -> Callable[[Any], Any]:
    # pymysql hands back the raw text when a value does not parse (e.g. 0000-00-00)
    def converter(obj: Any) -> Any:
        value = convert(obj)
        return value if isinstance(value, valid_type) else None

    return converter


def conversions(descriptor: ConnectionDescriptor) -> dict:
    """
    Build the pymysql decoder table for a descriptor.

    With ``zeroDateTimeBehavior=convertToNull`` invalid temporal values decode to None.
    """
    conv = dict(client.converters.conversions)
    if descriptor.option("zeroDateTimeBehavior") == "convertToNull":
        conv[FIELD_TYPE.DATETIME] = _null_if_invalid(client.converters.convert_datetime, datetime.date)
        conv[FIELD_TYPE.TIMESTAMP] = _null_if_invalid(client.converters.convert_datetime, datetime.date)
        conv[FIELD_TYPE.DATE] = _null_if_invalid(client.converters.convert_date, datetime.date)
    return conv


def _utc_offset(timezone: str) -> str:
    return "+00:00" if timezone.upper() in ("UTC", "GMT") else timezone


def connect_kwargs(descriptor: ConnectionDescriptor) -> dict[str, Any]:
    """
    Translate a ConnectionDescriptor into pymysql keyword arguments.

    ``serverTimezone`` becomes a ``SET time_zone`` init command, so it sets the
    session time zone and changes what ``now()`` and ``from_unixtime`` return.
    The JDBC option of the same name only tells the client how to read server
    timestamps and leaves the session alone.

    Parameters
    ----------
    descriptor : ConnectionDescriptor
        Resolved connection target and options.

    Returns
    -------
    dict
        Arguments for ``pymysql.connect``.
    """
    conn_info: dict[str, Any] = dict(
        host=descriptor.host,
        port=descriptor.port,
        user=descriptor.user,
        password=descriptor.password or "",
        database=descriptor.namespace,
        conv=conversions(descriptor),
        autocommit=True,
    )
    if descriptor.option("useSSL", "false").lower() != "true":
        conn_info["ssl_disabled"] = True
    timezone = descriptor.option("serverTimezone")
    if timezone:
        conn_info["init_command"] = "SET time_zone = '{}'".format(_utc_offset(timezone))
    return conn_info


class Connection:
    """
    A connection to a StarRocks frontend over the MySQL wire protocol.

    Args:
        descriptor: Resolved connection target, see ``details.connection_details_to_spec``.

    Attributes:
        descriptor: The ConnectionDescriptor this connection was opened with.
        conn_info: Dictionary of pymysql connection parameters.
    """

    def __init__(self, descriptor: ConnectionDescriptor) -> None:
        self.descriptor = descriptor
        self.conn_info = connect_kwargs(descriptor)
        self._conn = None
        self.connect()
        logger.info("starrocks_driver {version} connected to {descriptor!r}".format(version=__version__, descriptor=descriptor))

    def __repr__(self) -> str:
        connected = "connected" if self.is_connected else "disconnected"
        return "StarRocks connection ({connected}) {descriptor!r}".format(connected=connected, descriptor=self.descriptor)

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def connect(self) -> None:
        """Establish connection to the database server."""
        with warnings.catch_warnings():
            warnings.filterwarnings("ignore", ".*deprecated.*")
            try:
                self._conn = client.connect(**self.conn_info)
            except client.err.Error as err:
                raise errors.translate_query_error(err, "")

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None and self._conn.open:
            self._conn.close()

    def ping(self) -> None:
        """Ping the connection; raises an exception if disconnected."""
        self._conn.ping(reconnect=False)

    @property
    def is_connected(self) -> bool:
        """Return True if connected to the database server."""
        try:
            self.ping()
        except Exception:
            return False
        return True

    def query(self, query: str, args: tuple = (), *, as_dict: bool = False) -> Any:
        """
        Execute an SQL statement and return a cursor with the results.

        The caller owns the cursor and must close it.

        Args:
            query: The SQL statement.
            args: Parameters to substitute into the statement.
            as_dict: If True, return rows as dictionaries instead of tuples.

        Returns:
            A pymysql cursor.

        Raises:
            StarRocksDriverError: The translated client error.
        """
        logger.debug("Executing SQL:" + query[: config.query_log_max_length])
        cursor_class = client.cursors.DictCursor if as_dict else client.cursors.Cursor
        cursor = self._conn.cursor(cursor=cursor_class)
        try:
            cursor.execute(query, args or None)
        except client.err.Error as err:
            cursor.close()
            raise errors.translate_query_error(err, query)
        return cursor


def can_connect(descriptor: ConnectionDescriptor) -> bool:
    """
    Check that a connection can be opened and answers a trivial statement.

    Args:
        descriptor: Resolved connection target.

    Returns:
        True on success. Failures are logged and reported as False, never raised.
    """
    try:
        with Connection(descriptor) as connection:
            connection.query(PROBE_QUERY).close()
    except Exception as e:
        logger.error("StarRocks connection failed: {}".format(e))
        return False
    return True


def db_default_timezone(connection: Any) -> str:
    """
    Return the system timezone reported by the server.

    Falls back to UTC when the statement fails or returns nothing.
    """
    try:
        cursor = connection.query(TIMEZONE_QUERY)
        try:
            row = cursor.fetchone()
        finally:
            cursor.close()
    except Exception as e:
        logger.debug("Could not read server timezone: {}".format(e))
        return DEFAULT_TIMEZONE
    return row[0] if row and row[0] else DEFAULT_TIMEZONE
