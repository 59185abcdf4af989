"""Catalog store exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for all catalog store failures."""


class CatalogConfigError(CatalogError):
    """Raised for invalid store construction or runtime configuration."""


class CatalogLoadError(CatalogError):
    """Raised when a record file cannot be parsed into a record."""


class CatalogNotFoundError(CatalogError):
    """Raised when a query names a record type the store does not serve."""


class CatalogQueryError(CatalogError):
    """Raised for invalid query parameters or unsupported filters."""
