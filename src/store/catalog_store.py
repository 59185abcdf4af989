"""File-backed catalog record store.

This module owns the loaded record set for one root directory and
answers filtered, sorted, and paged queries over it. The store is
read-only: records are loaded once at construction.
"""

from __future__ import annotations

from pathlib import Path

from core.config import CatalogConfig
from core.errors import CatalogConfigError
from core.logging_config import get_logger
from core.types import Record, RecordSchema, Transaction
from ingest.record_loader import load_records
from store.filter_evaluator import check_filter, evaluate, resolve_path
from store.filters import IdFilter
from store.query import Query, SortBy
from store.record_collection import RecordCollection
from store.record_schema import get_schema, supported_schemas

_LOGGER = get_logger(__name__)


class CatalogStore:
    """Read-only catalog store over a directory of record files.

    Construction validates the root and loads every record eagerly, so
    a constructed store is always fully consistent.
    """

    def __init__(self, root: Path | str, config: CatalogConfig | None = None) -> None:
        """Validate the root directory and load its records.

        Args:
            root: Directory holding the record files.
            config: Optional runtime configuration.

        Raises:
            CatalogConfigError: If ``root`` is missing or not a directory.
            CatalogLoadError: If records cannot be loaded.
        """
        root_path = Path(root).expanduser()
        if not root_path.exists():
            raise CatalogConfigError(
                f"Catalog root {root_path} does not exist. "
                "Point the store at an existing directory of record files."
            )
        if not root_path.is_dir():
            raise CatalogConfigError(
                f"Catalog root {root_path} is not a directory. "
                "Point the store at the directory holding the record files."
            )
        self._root = root_path.resolve()
        self._config = config or CatalogConfig.from_env()
        self._records = load_records(self._root, self._config)

    @property
    def root(self) -> Path:
        """Resolved catalog root directory."""
        return self._root

    @property
    def record_count(self) -> int:
        """Number of loaded records."""
        return len(self._records)

    def get_record_schemas(self) -> tuple[RecordSchema, ...]:
        """Return the schemas of the record types this store serves."""
        return supported_schemas()

    def get_records(
        self,
        query: Query = Query.ALL,
        transaction: Transaction = Transaction.AUTO_COMMIT,
    ) -> RecordCollection:
        """Run a query against the loaded records.

        Matching keeps load order unless ``query.sort_by`` is set; paging
        is applied last and clamps at the end of the match list.

        Args:
            query: Type, filter, sort, and paging options.
            transaction: Isolation token; reads ignore it.

        Returns:
            Collection of the selected records.

        Raises:
            CatalogNotFoundError: If the query type name is unknown.
            CatalogQueryError: If the filter cannot be evaluated.
        """
        schema = get_schema(query.type_name)
        check_filter(query.filter)
        matches = [record for record in self._records if evaluate(record, query.filter)]
        if query.sort_by:
            matches = _sort_records(matches, query.sort_by)
        end_index = None
        if query.max_results is not None:
            end_index = query.start_index + query.max_results
        selected = tuple(matches[query.start_index:end_index])
        _LOGGER.debug(
            "records_queried",
            type_name=schema.type_name,
            transaction=transaction.value,
            match_count=len(matches),
            returned_count=len(selected),
            start_index=query.start_index,
            max_results=query.max_results,
        )
        return RecordCollection(schema.type_name, selected)

    def get_record_by_id(self, record_id: str) -> Record | None:
        """Return the record with ``record_id``, or ``None``."""
        collection = self.get_records(Query(filter=IdFilter.of(record_id), max_results=1))
        with collection.open() as cursor:
            return next(cursor, None)

    def get_domain(self, type_name: str, property_path: str) -> tuple[str, ...]:
        """Return the distinct values a property takes across the catalog.

        Args:
            type_name: Record type name.
            property_path: Slash separated attribute path.

        Returns:
            Sorted distinct literal values.

        Raises:
            CatalogNotFoundError: If the type name is unknown.
        """
        get_schema(type_name)
        values = {
            str(literal)
            for record in self._records
            for literal in resolve_path(record, property_path)
        }
        return tuple(sorted(values))


def _sort_records(records: list[Record], sort_by: tuple[SortBy, ...]) -> list[Record]:
    """Stable multi-key sort; records lacking a key value sort last."""
    ordered = list(records)
    for sort_key in reversed(sort_by):
        present: list[tuple[str, Record]] = []
        missing: list[Record] = []
        for record in ordered:
            literals = resolve_path(record, sort_key.path)
            if literals:
                present.append((str(literals[0]), record))
            else:
                missing.append(record)
        present.sort(key=lambda item: item[0], reverse=sort_key.descending)
        ordered = [record for _, record in present] + missing
    return ordered
