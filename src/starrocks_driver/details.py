"""
Connection target resolution.

Turns user-supplied connection details into an immutable ConnectionDescriptor:
the catalog-qualified namespace used as the initial connection target, the
options that keep the MySQL wire protocol from misreading StarRocks values, and
any additional ``key=value`` options supplied by the user.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from .settings import DEFAULT_CATALOG, DEFAULT_HOST, DEFAULT_PORT

if TYPE_CHECKING:
    from .settings import DatabaseSettings

# every catalog has it, so it is always a valid connection target
INFORMATION_SCHEMA = "information_schema"

# Options guarding against known wire-protocol mismatches
BASE_OPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "tinyInt1isBit": "false",
        "yearIsDateType": "false",
        "serverTimezone": "UTC",
        "useSSL": "false",
        "allowPublicKeyRetrieval": "true",
        "zeroDateTimeBehavior": "convertToNull",
    }
)

# additional options with these keys replace descriptor fields
FIELD_OPTIONS = ("host", "user", "password")


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Everything needed to open a connection to one StarRocks catalog namespace."""

    host: str
    port: int
    catalog: str
    dbname: str | None
    namespace: str
    user: str | None = None
    password: str | None = None
    options: Mapping[str, str] = field(default_factory=lambda: BASE_OPTIONS, hash=False)

    def option(self, key: str, default: str | None = None) -> str | None:
        """Return the value of a connection option, or ``default`` when absent."""
        return self.options.get(key, default)

    def __repr__(self) -> str:
        return "ConnectionDescriptor({user}@{host}:{port}/{namespace})".format(
            user=self.user, host=self.host, port=self.port, namespace=self.namespace
        )


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def resolve_namespace(catalog: str | None, dbname: str | None) -> str:
    """
    Build the catalog-qualified database used as the connection target.

    Parameters
    ----------
    catalog : str or None
        Catalog name; blank means the default catalog.
    dbname : str or None
        Database name within the catalog; blank means none.

    Returns
    -------
    str
        ``catalog.dbname`` when both are given, ``catalog.information_schema``
        when only the catalog is given, ``default_catalog.information_schema``
        otherwise.
    """
    catalog = None if _is_blank(catalog) else catalog.strip()
    dbname = None if _is_blank(dbname) else dbname.strip()
    if catalog and dbname:
        return f"{catalog}.{dbname}"
    if catalog:
        return f"{catalog}.{INFORMATION_SCHEMA}"
    return f"{DEFAULT_CATALOG}.{INFORMATION_SCHEMA}"


def parse_additional_options(additional_options: str | None) -> dict[str, str]:
    """
    Parse an ampersand-delimited ``key=value`` string.

    Blank pairs are skipped and a key without a value maps to ``""``.
    Later keys override earlier ones. Nothing is rejected.

    >>> parse_additional_options("useSSL=true&foo=bar&key=")
    {'useSSL': 'true', 'foo': 'bar', 'key': ''}
    """
    if _is_blank(additional_options):
        return {}
    options = {}
    for pair in additional_options.split("&"):
        if _is_blank(pair):
            continue
        key, _, value = pair.partition("=")
        options[key] = value
    return options


def connection_details_to_spec(
    host: str | None = None,
    port: int | None = None,
    catalog: str | None = None,
    dbname: str | None = None,
    user: str | None = None,
    password: str | None = None,
    additional_options: str | None = None,
) -> ConnectionDescriptor:
    """
    Resolve connection details into a ConnectionDescriptor.

    Parameters
    ----------
    host : str, optional
        Frontend hostname. Default ``"localhost"``.
    port : int, optional
        MySQL-protocol query port. Default 9030.
    catalog : str, optional
        Catalog name. Default ``"default_catalog"``.
    dbname : str, optional
        Database within the catalog.
    user : str, optional
        Username.
    password : str, optional
        Password.
    additional_options : str, optional
        ``key=value`` pairs joined by ``&``, merged over the base options.

    Returns
    -------
    ConnectionDescriptor
        The resolved descriptor. This function never raises.
    """
    host = DEFAULT_HOST if host is None else host
    port = DEFAULT_PORT if port is None else port
    catalog = DEFAULT_CATALOG if catalog is None else catalog
    descriptor = ConnectionDescriptor(
        host=host,
        port=port,
        catalog=catalog.strip() or DEFAULT_CATALOG,
        dbname=None if _is_blank(dbname) else dbname.strip(),
        namespace=resolve_namespace(catalog, dbname),
        user=user,
        password=password,
    )

    extra = parse_additional_options(additional_options)
    if not extra:
        return descriptor

    overrides: dict[str, Any] = {key: extra[key] for key in FIELD_OPTIONS if key in extra}
    if extra.get("port", "").isdigit():
        overrides["port"] = int(extra["port"])
    return dataclasses.replace(
        descriptor,
        options=MappingProxyType({**BASE_OPTIONS, **extra}),
        **overrides,
    )


def details_from_settings(settings: DatabaseSettings) -> ConnectionDescriptor:
    """Resolve the connection details held by a DatabaseSettings instance."""
    return connection_details_to_spec(**settings.model_dump())
