"""
Abstract base class for driver adapters.

This module defines the interface a dialect adapter exposes to the host BI
framework: a capability table, connection-target resolution, type
classification, metadata discovery and expression rendering.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping


class Feature(str, Enum):
    """Capabilities the host framework asks a driver about."""

    SET_TIMEZONE = "set-timezone"
    BASIC_AGGREGATIONS = "basic-aggregations"
    STANDARD_DEVIATION_AGGREGATIONS = "standard-deviation-aggregations"
    EXPRESSIONS = "expressions"
    EXPRESSION_AGGREGATIONS = "expression-aggregations"
    NATIVE_PARAMETERS = "native-parameters"
    BINNING = "binning"
    MULTIPLE_DATABASES = "connection/multiple-databases"
    TEMPORAL_EXTRACT = "temporal-extract"
    DATE_ARITHMETICS = "date-arithmetics"
    ADVANCED_MATH_EXPRESSIONS = "advanced-math-expressions"
    NOW = "now"
    FOREIGN_KEYS = "foreign-keys"
    NESTED_FIELD_COLUMNS = "nested-field-columns"
    KEY_CONSTRAINTS = "metadata/key-constraints"


class DriverAdapter(ABC):
    """
    Abstract base class for driver adapters.

    Subclasses declare their capabilities in ``features`` and implement the
    dialect-specific operations below.
    """

    #: name under which the adapter is registered
    name: str = ""
    #: generic driver the host falls back to for everything not overridden
    parent: str = "sql-jdbc"
    features: Mapping[Feature, bool] = {}

    def supports(self, feature: Feature | str) -> bool:
        """
        Check a capability.

        Parameters
        ----------
        feature : Feature or str
            Capability to check.

        Returns
        -------
        bool
            The declared value; False for capabilities the adapter does not declare.
        """
        return bool(self.features.get(feature, False))

    # =========================================================================
    # Driver Metadata
    # =========================================================================

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable driver name."""
        ...

    @property
    @abstractmethod
    def default_port(self) -> int:
        """Default query port of the backend."""
        ...

    @property
    @abstractmethod
    def start_of_week(self) -> str:
        """First day of the week as the backend counts it, e.g. ``'monday'``."""
        ...

    # =========================================================================
    # Connection Management
    # =========================================================================

    @abstractmethod
    def connection_details_to_spec(self, **details: Any) -> Any:
        """
        Resolve user connection details into a connection descriptor.

        Parameters
        ----------
        **details : Any
            host, port, catalog, dbname, user, password, additional_options.

        Returns
        -------
        Any
            Backend-specific connection descriptor.
        """
        ...

    @abstractmethod
    def connect(self, descriptor: Any) -> Any:
        """Open a connection for a descriptor."""
        ...

    @abstractmethod
    def can_connect(self, descriptor: Any) -> bool:
        """
        Probe connectivity.

        Returns
        -------
        bool
            True if a trivial statement succeeds; never raises.
        """
        ...

    @abstractmethod
    def db_default_timezone(self, connection: Any) -> str:
        """Timezone reported by the server, with a fixed fallback."""
        ...

    @abstractmethod
    def humanize_connection_error_message(self, message: object) -> str:
        """Turn raw client error text into a short actionable message."""
        ...

    # =========================================================================
    # Type Mapping
    # =========================================================================

    @abstractmethod
    def database_type_to_base_type(self, database_type: str) -> Any:
        """
        Classify a native column type.

        Parameters
        ----------
        database_type : str
            Native type text.

        Returns
        -------
        Any
            Base type; total over all inputs.
        """
        ...

    # =========================================================================
    # Introspection
    # =========================================================================

    @abstractmethod
    def describe_database(self, connection: Any) -> Any:
        """Describe all tables reachable through a connection."""
        ...

    @abstractmethod
    def describe_table(self, connection: Any, schema: str, table: str) -> Any:
        """Describe the columns of a table."""
        ...

    @abstractmethod
    def describe_table_fks(self, connection: Any, schema: str, table: str) -> Any:
        """Describe foreign keys of a table, or None if unsupported."""
        ...

    @abstractmethod
    def current_user_table_privileges(self, connection: Any) -> Any:
        """Privileges of the current user, or None to skip the check."""
        ...

    # =========================================================================
    # SQL Syntax
    # =========================================================================

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote an identifier for this backend."""
        ...
