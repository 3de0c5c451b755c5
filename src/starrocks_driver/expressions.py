"""
StarRocks renderings of temporal and arithmetic expressions.

The host statement compiler asks for a native SQL fragment whenever it meets a
temporal node. Every function here is pure and returns SQL text; units are
closed enumerations so an unsupported unit is caught at the call site.
"""

from __future__ import annotations

from enum import Enum


class EpochUnit(str, Enum):
    """Resolution of a numeric unix timestamp."""

    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"


class DateUnit(str, Enum):
    """Calendar units a temporal value can be truncated to."""

    DEFAULT = "default"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class ExtractUnit(str, Enum):
    """Fields that can be extracted from a temporal value."""

    SECOND_OF_MINUTE = "second-of-minute"
    MINUTE_OF_HOUR = "minute-of-hour"
    HOUR_OF_DAY = "hour-of-day"
    DAY_OF_WEEK = "day-of-week"
    DAY_OF_MONTH = "day-of-month"
    DAY_OF_YEAR = "day-of-year"
    WEEK_OF_YEAR = "week-of-year"
    MONTH_OF_YEAR = "month-of-year"
    QUARTER_OF_YEAR = "quarter-of-year"
    YEAR = "year"


class IntervalUnit(str, Enum):
    """Units accepted by interval arithmetic and date differences."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class Coercion(str, Enum):
    """String and byte encodings of temporal values."""

    ISO8601_DATETIME = "iso8601-datetime"
    ISO8601_DATE = "iso8601-date"
    ISO8601_BYTES_DATETIME = "iso8601-bytes-datetime"
    ISO8601_BYTES_DATE = "iso8601-bytes-date"
    YYYYMMDDHHMMSS = "yyyymmddhhmmss"
    YYYYMMDDHHMMSS_BYTES = "yyyymmddhhmmss-bytes"


TRUNCATE_UNITS = frozenset(DateUnit) - {DateUnit.DEFAULT}

EXTRACT_FUNCTIONS = {
    ExtractUnit.SECOND_OF_MINUTE: "second",
    ExtractUnit.MINUTE_OF_HOUR: "minute",
    ExtractUnit.HOUR_OF_DAY: "hour",
    ExtractUnit.DAY_OF_WEEK: "dayofweek",
    ExtractUnit.DAY_OF_MONTH: "dayofmonth",
    ExtractUnit.DAY_OF_YEAR: "dayofyear",
    ExtractUnit.WEEK_OF_YEAR: "week",
    ExtractUnit.MONTH_OF_YEAR: "month",
    ExtractUnit.QUARTER_OF_YEAR: "quarter",
    ExtractUnit.YEAR: "year",
}

CAST_TARGETS = {
    Coercion.ISO8601_DATETIME: "datetime",
    Coercion.ISO8601_DATE: "date",
    Coercion.ISO8601_BYTES_DATETIME: "datetime",
    Coercion.ISO8601_BYTES_DATE: "date",
    Coercion.YYYYMMDDHHMMSS: "datetime",
    Coercion.YYYYMMDDHHMMSS_BYTES: "datetime",
}

assert set(EXTRACT_FUNCTIONS) == set(ExtractUnit)
assert set(CAST_TARGETS) == set(Coercion)


# =========================================================================
# Identifiers
# =========================================================================


def quote_identifier(name: str) -> str:
    """
    Quote identifier with backticks, as MySQL does.

    >>> quote_identifier("order")
    '`order`'
    """
    escaped = str(name).replace("`", "``")
    return f"`{escaped}`"


def qualified_name(*parts: str) -> str:
    """
    Join quoted identifiers with dots.

    >>> qualified_name("sales", "orders")
    '`sales`.`orders`'
    """
    return ".".join(quote_identifier(part) for part in parts)


# =========================================================================
# Temporal expressions
# =========================================================================


def unix_timestamp_to_datetime(expr: str, unit: EpochUnit = EpochUnit.SECONDS) -> str:
    """
    Convert a numeric unix timestamp into a datetime.

    Parameters
    ----------
    expr : str
        SQL expression holding the timestamp.
    unit : EpochUnit
        Resolution of the timestamp.

    Returns
    -------
    str
        ``from_unixtime`` call, dividing milliseconds down to seconds.
    """
    unit = EpochUnit(unit)
    if unit is EpochUnit.MILLISECONDS:
        return f"from_unixtime(({expr} / 1000))"
    return f"from_unixtime({expr})"


def current_datetime() -> str:
    """Current timestamp expression."""
    return "now()"


def truncate(expr: str, unit: DateUnit) -> str:
    """
    Truncate a temporal expression to a calendar unit.

    Parameters
    ----------
    expr : str
        SQL expression to truncate.
    unit : DateUnit
        Target unit. ``DateUnit.DEFAULT`` and unrecognized units leave the
        expression unchanged.

    Returns
    -------
    str
        ``date_trunc('<unit>', expr)`` or ``expr`` itself.
    """
    if unit not in TRUNCATE_UNITS:
        return expr
    return f"date_trunc('{DateUnit(unit).value}', {expr})"


def extract(expr: str, unit: ExtractUnit) -> str:
    """Extract a single field from a temporal expression."""
    return f"{EXTRACT_FUNCTIONS[ExtractUnit(unit)]}({expr})"


def interval_expr(amount: int, unit: IntervalUnit) -> str:
    """
    INTERVAL expression.

    >>> interval_expr(-3, IntervalUnit.MONTH)
    'INTERVAL -3 MONTH'
    """
    return f"INTERVAL {int(amount)} {IntervalUnit(unit).value.upper()}"


def add_interval(expr: str, amount: int, unit: IntervalUnit) -> str:
    """
    Add a signed number of units to a temporal expression.

    >>> add_interval("`created_at`", 2, IntervalUnit.DAY)
    'date_add(`created_at`, INTERVAL 2 DAY)'
    """
    return f"date_add({expr}, {interval_expr(amount, unit)})"


def datetime_diff(x: str, y: str, unit: IntervalUnit) -> str:
    """
    Difference ``y - x`` between two temporal expressions.

    Parameters
    ----------
    x : str
        The earlier value.
    y : str
        The later value.
    unit : IntervalUnit
        Unit in which the difference is counted.

    Returns
    -------
    str
        ``timestampdiff(UNIT, x, y)`` for every unit except days, which use
        ``datediff(y, x)``: datediff subtracts its second argument from its
        first, so the arguments are given in reverse.
    """
    unit = IntervalUnit(unit)
    if unit is IntervalUnit.DAY:
        return f"datediff({y}, {x})"
    return f"timestampdiff({unit.value.upper()}, {x}, {y})"


def cast_temporal_string(expr: str, coercion: Coercion) -> str:
    """
    Cast a text or byte encoding of a temporal value to its native type.

    >>> cast_temporal_string("`day`", Coercion.ISO8601_DATE)
    'CAST(`day` AS date)'
    """
    return f"CAST({expr} AS {CAST_TARGETS[Coercion(coercion)]})"
