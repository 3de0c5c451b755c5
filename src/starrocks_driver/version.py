"""
Version information for starrocks-driver.
"""

from __future__ import annotations

__version__ = "1.0.0"
