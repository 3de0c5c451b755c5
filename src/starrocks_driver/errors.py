"""
Exception classes for the StarRocks driver.

This module defines the exception hierarchy, the translation of pymysql client
errors into that hierarchy, and the humanized connection-error messages shown
to end users.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__.split(".")[0])


# --- Top Level ---
class StarRocksDriverError(Exception):
    """Base class for errors raised by the StarRocks driver."""

    def suggest(self, *args: object) -> "StarRocksDriverError":
        """
        Regenerate the exception with additional arguments.

        Parameters
        ----------
        *args : object
            Additional arguments to append to the exception.

        Returns
        -------
        StarRocksDriverError
            A new exception of the same type with the additional arguments.
        """
        return self.__class__(*(self.args + args))


# --- Second Level ---
class LostConnectionError(StarRocksDriverError):
    """Server unreachable or connection lost."""


class QueryError(StarRocksDriverError):
    """Errors arising from statements sent to the server."""


# --- Third Level: QueryErrors ---
class QuerySyntaxError(QueryError):
    """Statement rejected by the server parser."""


class AccessError(QueryError):
    """Authentication failed or privileges are insufficient."""


class MissingTableError(QueryError):
    """Statement refers to a table that does not exist."""


class UnknownDatabaseError(QueryError):
    """Statement or connection target refers to a database that does not exist."""


class UnknownCatalogError(QueryError):
    """Statement or connection target refers to a catalog that does not exist."""


class UnknownAttributeError(QueryError):
    """Statement refers to a column that does not exist."""


_unknown_catalog = re.compile(r"unknown catalog", re.I)

CATALOG_HINT = "Run SHOW CATALOGS to list the catalogs visible to this user."


def translate_query_error(client_error: Exception, query: str = "") -> Exception:
    """
    Translate a pymysql client error into the corresponding driver exception.

    Args:
        client_error: The exception raised by the pymysql client interface.
        query: The SQL statement that caused the error.

    Returns:
        An instance of the appropriate StarRocksDriverError subclass, or the original
        error if no specific translation is available.
    """
    logger.debug("type: {}, args: {}".format(type(client_error), client_error.args))

    if not client_error.args:
        return client_error
    err, *args = client_error.args
    message = args[0] if args else ""

    # Loss of connection errors
    if err in (0, "(0, '')"):
        return LostConnectionError("Server connection lost due to an interface error.", *args)
    if err == 2003:
        return LostConnectionError("Cannot connect to server", *args)
    if err == 2006:
        return LostConnectionError("Connection timed out", *args)
    if err == 2013:
        return LostConnectionError("Server connection lost", *args)
    # Access errors
    if err in (1044, 1045, 1142):
        return AccessError("Access denied.", message, query)
    # Syntax errors
    if err == 1064:
        return QuerySyntaxError(message, query)
    # Existence errors
    if err == 1049:
        return UnknownDatabaseError(message, query)
    if err == 1146:
        return MissingTableError(message, query)
    if err == 1054:
        return UnknownAttributeError(*args)
    if _unknown_catalog.search(str(message)):
        return UnknownCatalogError(message, query).suggest(CATALOG_HINT)
    # all the other errors are re-raised in original form
    return client_error


# Canned end-user messages, first match wins
CONNECTION_ERROR_MESSAGES = (
    (
        re.compile(r"communications link failure|can't connect to mysql server", re.I),
        "Unable to connect to StarRocks. Please check that the host and port are correct.",
    ),
    (
        re.compile(r"access denied", re.I),
        "Access denied. Please check your username and password.",
    ),
    (
        re.compile(r"unknown database", re.I),
        "Database not found. Please check the catalog and database names.",
    ),
    (
        re.compile(r"unknown catalog", re.I),
        "Catalog not found. Please check the catalog name.",
    ),
)


def humanize_connection_error_message(message: object) -> str:
    """
    Map raw driver error text to a short actionable sentence.

    Parameters
    ----------
    message : object
        Error text or exception as reported by the client library.

    Returns
    -------
    str
        One of the canned messages, or the original text when nothing matches.
    """
    msg = message if isinstance(message, str) else str(message)
    return next(
        (humanized for pattern, humanized in CONNECTION_ERROR_MESSAGES if pattern.search(msg)),
        msg,
    )
