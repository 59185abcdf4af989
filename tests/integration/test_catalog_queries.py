"""Integration tests for catalog queries through the public API."""

from __future__ import annotations

from cswstore import (
    And,
    BBoxIntersects,
    CatalogConfig,
    CatalogStore,
    Not,
    PropertyEquals,
    PropertyIsLike,
    Query,
    SortBy,
)
from tests.fixture_paths import records_root


def test_combined_filter_sort_and_paging_flow() -> None:
    """End-to-end flow should filter, sort, and page records."""
    store = CatalogStore(str(records_root()), CatalogConfig())
    filter_spec = And(
        (
            PropertyIsLike("dc:type", "*Dataset"),
            Not(BBoxIntersects(-10.0, 40.0, 5.0, 55.0)),
        )
    )

    collection = store.get_records(
        Query("Record", filter_spec, max_results=5, sort_by=(SortBy("title"),))
    )

    with collection.open() as cursor:
        titles = [record.simple_literal("title") for record in cursor]
    assert titles == ["Fuscé vitae ligulä", "Ut facilisis justo ut lacus"]


def test_related_record_lookup_flow() -> None:
    """A relation literal should resolve to another record in the catalog."""
    store = CatalogStore(records_root(), CatalogConfig())
    source = store.get_records(
        Query(filter=PropertyEquals("title", "Ut facilisis justo ut lacus"))
    ).to_list()[0]

    related_id = source.simple_literal("relation")
    related = store.get_record_by_id(str(related_id))

    assert related is not None
    assert related.simple_literal("title") == "Mauris et augue"
