"""
Pytest configuration for starrocks_driver tests.

The unit tests run without a StarRocks server: discovery functions are driven by
FakeConnection, which answers statements from a script and records every cursor
it hands out so tests can check that each one was released.
"""

import logging

import pytest

import starrocks_driver


class FakeCursor:
    """Cursor over a fixed list of rows."""

    def __init__(self, rows):
        self.rows = list(rows)
        self.closed = False

    def __iter__(self):
        return iter(self.rows)

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows

    def close(self):
        self.closed = True


class BrokenCursor(FakeCursor):
    """Cursor that fails part-way through iteration."""

    def __init__(self, rows, error):
        super().__init__(rows)
        self.error = error

    def __iter__(self):
        yield from self.rows
        raise self.error


class FakeConnection:
    """
    Connection double answering statements from a script.

    ``results`` maps statement text to a list of rows, an exception to raise,
    or a ready-made cursor. Unknown statements return no rows.
    """

    def __init__(self, results=None):
        self.results = dict(results or {})
        self.queries = []
        self.cursors = []

    def query(self, query, args=(), *, as_dict=False):
        self.queries.append(query)
        result = self.results.get(query, [])
        if isinstance(result, Exception):
            raise result
        cursor = result if isinstance(result, FakeCursor) else FakeCursor(result)
        self.cursors.append(cursor)
        return cursor

    @property
    def all_cursors_closed(self):
        return all(cursor.closed for cursor in self.cursors)


@pytest.fixture
def fake_connection():
    """Factory for FakeConnection instances."""
    return FakeConnection


@pytest.fixture
def adapter():
    """StarRocks adapter instance."""
    return starrocks_driver.get_adapter("starrocks")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SR_* variables so settings fall back to their defaults."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("SR_"):
            monkeypatch.delenv(key)


@pytest.fixture
def restore_log_level():
    """Restore the package log level changed by settings validation."""
    level = starrocks_driver.logger.level
    yield
    starrocks_driver.logger.setLevel(level)


@pytest.fixture
def caplog_driver(caplog):
    """caplog capturing the package logger at WARNING and above."""
    caplog.set_level(logging.WARNING, logger="starrocks_driver")
    return caplog


@pytest.fixture
def broken_cursor():
    """Factory for cursors failing during iteration."""
    return BrokenCursor
