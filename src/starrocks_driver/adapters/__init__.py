"""
Driver adapter registry.

This module provides the adapter factory function and exports all adapters.
"""

from __future__ import annotations

from .base import DriverAdapter, Feature
from .starrocks import StarRocksAdapter

__all__ = ["DriverAdapter", "Feature", "StarRocksAdapter", "get_adapter", "register_adapter"]

# Adapter registry mapping driver names to adapter classes
ADAPTERS: dict[str, type[DriverAdapter]] = {
    "starrocks": StarRocksAdapter,
}


def register_adapter(name: str, adapter_class: type[DriverAdapter]) -> None:
    """
    Register an adapter class under a driver name.

    Parameters
    ----------
    name : str
        Driver name; lookups are case-insensitive.
    adapter_class : type[DriverAdapter]
        Adapter to instantiate for this name.

    Raises
    ------
    TypeError
        If adapter_class is not a DriverAdapter subclass.
    """
    if not (isinstance(adapter_class, type) and issubclass(adapter_class, DriverAdapter)):
        raise TypeError(f"{adapter_class!r} is not a DriverAdapter subclass")
    ADAPTERS[name.lower()] = adapter_class


def get_adapter(name: str) -> DriverAdapter:
    """
    Get adapter instance for the specified driver.

    Parameters
    ----------
    name : str
        Driver name, e.g. 'starrocks'.

    Returns
    -------
    DriverAdapter
        Adapter instance for the specified driver.

    Raises
    ------
    ValueError
        If the driver is not registered.

    Examples
    --------
    >>> from starrocks_driver.adapters import get_adapter
    >>> get_adapter('starrocks').display_name
    'StarRocks'
    """
    name_lower = name.lower()

    if name_lower not in ADAPTERS:
        supported = sorted(ADAPTERS)
        raise ValueError(f"Unknown driver: {name}. " f"Supported drivers: {', '.join(supported)}")

    return ADAPTERS[name_lower]()
