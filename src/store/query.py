"""Query descriptors for catalog reads.

This module defines the immutable query passed to the catalog store:
which type to read, which filter to apply, and how to page and sort.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from core.constants import RECORD_TYPE_NAME
from core.errors import CatalogQueryError
from store.filters import Filter


@dataclass(frozen=True)
class SortBy:
    """Sort key over an attribute path.

    Attributes:
        path: Slash separated attribute path.
        descending: Reverse order when set.
    """

    path: str
    descending: bool = False


@dataclass(frozen=True)
class Query:
    """Record query.

    Attributes:
        type_name: Record type to read.
        filter: Optional filter; ``None`` matches every record.
        max_results: Optional page size; ``None`` means unbounded.
        start_index: Number of matches to skip.
        sort_by: Sort keys applied before paging; empty keeps load order.
    """

    ALL: ClassVar["Query"]

    type_name: str = RECORD_TYPE_NAME
    filter: Filter | None = None
    max_results: int | None = None
    start_index: int = 0
    sort_by: tuple[SortBy, ...] = ()

    def __post_init__(self) -> None:
        if self.start_index < 0:
            raise CatalogQueryError(
                f"Invalid start index {self.start_index}: expected a value >= 0."
            )
        if self.max_results is not None and self.max_results < 0:
            raise CatalogQueryError(
                f"Invalid max results {self.max_results}: expected a value >= 0 or None."
            )


Query.ALL = Query()
