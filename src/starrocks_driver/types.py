"""
Classification of StarRocks column types into portable base types.

The native type text reported by ``DESCRIBE`` (e.g. ``"decimal(10,2)"``,
``"array<int>"``) is matched against an ordered list of patterns; the first
matching pattern determines the base type. Patterns are matched against the
whole type string, so ``datetime`` is never captured by the ``date`` pattern
and ``bigint`` is never captured by ``int``.
"""

from __future__ import annotations

import re
from enum import Enum


class BaseType(str, Enum):
    """Portable column-type categories understood by the host framework."""

    BOOLEAN = "type/Boolean"
    INTEGER = "type/Integer"
    BIG_INTEGER = "type/BigInteger"
    FLOAT = "type/Float"
    DECIMAL = "type/Decimal"
    TEXT = "type/Text"
    JSON = "type/JSON"
    DATE = "type/Date"
    DATETIME = "type/DateTime"
    ARRAY = "type/Array"
    DICTIONARY = "type/Dictionary"
    UNCLASSIFIED = "type/*"


# optional display width, e.g. int(11)
_WIDTH = r"(\s*\(\d+\))?"

# (pattern, base type), first match wins
BASE_TYPE_PATTERNS = tuple(
    (re.compile(pattern, re.I | re.S), base_type)
    for pattern, base_type in (
        (r"boolean", BaseType.BOOLEAN),
        (r"tinyint" + _WIDTH, BaseType.INTEGER),
        (r"smallint" + _WIDTH, BaseType.INTEGER),
        (r"int" + _WIDTH, BaseType.INTEGER),
        (r"bigint" + _WIDTH, BaseType.BIG_INTEGER),
        (r"largeint" + _WIDTH, BaseType.BIG_INTEGER),
        (r"float", BaseType.FLOAT),
        (r"double", BaseType.FLOAT),
        (r"decimal.*", BaseType.DECIMAL),
        (r"varchar.*", BaseType.TEXT),
        (r"char.*", BaseType.TEXT),
        (r"string", BaseType.TEXT),
        (r"text", BaseType.TEXT),
        (r"json", BaseType.JSON),
        (r"date", BaseType.DATE),
        (r"datetime", BaseType.DATETIME),
        (r"timestamp", BaseType.DATETIME),
        (r"array.*", BaseType.ARRAY),
        (r"map.*", BaseType.DICTIONARY),
        (r"struct.*", BaseType.UNCLASSIFIED),
        (r"bitmap", BaseType.UNCLASSIFIED),
        (r"hll", BaseType.UNCLASSIFIED),
        (r"percentile", BaseType.UNCLASSIFIED),
        (r".*", BaseType.UNCLASSIFIED),
    )
)


def database_type_to_base_type(database_type: str) -> BaseType:
    """
    Classify a native StarRocks type string.

    Parameters
    ----------
    database_type : str
        Type text as returned in the ``Type`` column of ``DESCRIBE``.

    Returns
    -------
    BaseType
        The base type of the first matching pattern; ``BaseType.UNCLASSIFIED``
        when nothing more specific matches. Never raises.
    """
    type_str = "" if database_type is None else str(database_type).strip()
    return next(base_type for pattern, base_type in BASE_TYPE_PATTERNS if pattern.fullmatch(type_str))
