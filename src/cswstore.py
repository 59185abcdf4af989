"""Public API surface for the catalog record store.

This module provides a stable import path for store users.
It re-exports the store, query, filter, and record models.
"""

from __future__ import annotations

from core.config import CatalogConfig
from core.errors import (
    CatalogConfigError,
    CatalogError,
    CatalogLoadError,
    CatalogNotFoundError,
    CatalogQueryError,
)
from core.types import (
    ComplexAttribute,
    Envelope,
    Record,
    RecordSchema,
    SimpleAttribute,
    Transaction,
)
from store.catalog_store import CatalogStore
from store.filters import (
    EXCLUDE,
    INCLUDE,
    And,
    BBoxIntersects,
    IdFilter,
    Not,
    Or,
    PropertyEquals,
    PropertyIsLike,
)
from store.query import Query, SortBy
from store.record_collection import RecordCollection, RecordCursor
from store.record_schema import RECORD_SCHEMA

__all__ = [
    "And",
    "BBoxIntersects",
    "CatalogConfig",
    "CatalogConfigError",
    "CatalogError",
    "CatalogLoadError",
    "CatalogNotFoundError",
    "CatalogQueryError",
    "CatalogStore",
    "ComplexAttribute",
    "EXCLUDE",
    "Envelope",
    "INCLUDE",
    "IdFilter",
    "Not",
    "Or",
    "PropertyEquals",
    "PropertyIsLike",
    "Query",
    "RECORD_SCHEMA",
    "Record",
    "RecordCollection",
    "RecordCursor",
    "RecordSchema",
    "SimpleAttribute",
    "SortBy",
    "Transaction",
]
