"""Query result collections.

A collection is an immutable, ordered view over the records a query
selected. Iteration goes through a cursor that is released on every
exit path when used as a context manager.
"""

from __future__ import annotations

from types import TracebackType
from typing import Iterator

from core.errors import CatalogError
from core.types import Record


class RecordCollection:
    """Ordered records produced by one query."""

    def __init__(self, type_name: str, records: tuple[Record, ...]) -> None:
        self._type_name = type_name
        self._records = records

    @property
    def type_name(self) -> str:
        """Record type the collection was read from."""
        return self._type_name

    def size(self) -> int:
        """Return the number of records after filtering and paging."""
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def is_empty(self) -> bool:
        """Return whether the query selected nothing."""
        return not self._records

    def open(self) -> "RecordCursor":
        """Open a forward-only cursor over the records.

        Returns:
            Cursor to use in a ``with`` block.
        """
        return RecordCursor(self._records)

    def to_list(self) -> list[Record]:
        """Materialize the records into a new list."""
        with self.open() as cursor:
            return list(cursor)

    def record_ids(self) -> tuple[str, ...]:
        """Return record identifiers in collection order."""
        return tuple(record.record_id for record in self._records)


class RecordCursor:
    """Forward-only iterator with explicit release."""

    def __init__(self, records: tuple[Record, ...]) -> None:
        self._iterator: Iterator[Record] | None = iter(records)

    def __enter__(self) -> "RecordCursor":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __iter__(self) -> "RecordCursor":
        return self

    def __next__(self) -> Record:
        if self._iterator is None:
            raise CatalogError("Cursor is closed. Open a new cursor from the collection.")
        return next(self._iterator)

    @property
    def closed(self) -> bool:
        """Whether the cursor has been released."""
        return self._iterator is None

    def close(self) -> None:
        """Release the cursor; calling it again has no effect."""
        self._iterator = None
