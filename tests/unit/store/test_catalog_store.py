"""Unit tests for the file-backed catalog store."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from core.config import CatalogConfig
from core.constants import URN_UUID_PATTERN
from core.errors import CatalogConfigError, CatalogNotFoundError, CatalogQueryError
from core.types import SimpleAttribute, Transaction
from store.catalog_store import CatalogStore
from store.filters import BBoxIntersects, Not, PropertyEquals
from store.query import Query, SortBy
from store.record_schema import RECORD_SCHEMA
from tests.fixture_paths import SERVICE_RECORD_ID, records_root


@pytest.fixture
def store() -> CatalogStore:
    return CatalogStore(records_root(), CatalogConfig())


def test_store_rejects_file_root() -> None:
    """Construction should fail when the root is a regular file."""
    file_root = records_root() / "README.txt"

    with pytest.raises(CatalogConfigError, match="not a directory"):
        CatalogStore(file_root, CatalogConfig())


def test_store_rejects_missing_root(tmp_path: Path) -> None:
    """Construction should fail when the root does not exist."""
    missing_root = tmp_path / "notThere"

    with pytest.raises(CatalogConfigError, match="does not exist"):
        CatalogStore(missing_root, CatalogConfig())

    assert missing_root.exists() is False


def test_get_record_schemas_returns_record_schema(store: CatalogStore) -> None:
    """Store should expose exactly the Record schema."""
    schemas = store.get_record_schemas()

    assert schemas == (RECORD_SCHEMA,)


def test_get_records_reads_all_record_files(store: CatalogStore) -> None:
    """One record should be loaded per file matching the naming convention."""
    file_count = len(list(records_root().glob("Record_*.xml")))

    records = store.get_records(Query.ALL, Transaction.AUTO_COMMIT)

    assert records.size() == file_count
    assert store.record_count == file_count


def test_every_record_id_matches_identifier_literal(store: CatalogStore) -> None:
    """Record identity should be the urn:uuid identifier literal."""
    records = store.get_records(Query.ALL)

    with records.open() as cursor:
        for record in cursor:
            identifier = record.simple_literal("identifier")
            assert isinstance(identifier, str)
            assert re.fullmatch(URN_UUID_PATTERN, identifier)
            assert identifier == record.record_id
            assert record.simple_literal("type")


def test_element_value_filter_selects_single_record(store: CatalogStore) -> None:
    """Equality on identifier/value should select exactly one record."""
    filter_spec = PropertyEquals("dc:identifier/dc:value", SERVICE_RECORD_ID)

    records = store.get_records(Query("Record", filter_spec)).to_list()

    assert len(records) == 1
    record = records[0]
    assert record.simple_literal("identifier") == SERVICE_RECORD_ID
    assert record.simple_literal("type") == "http://purl.org/dc/dcmitype/Service"
    assert record.simple_literal("abstract") == (
        "Proin sit amet justo. In justo. Aenean adipiscing nulla id tellus."
    )


def test_spatial_filter_selects_intersecting_record(store: CatalogStore) -> None:
    """A longitude-first box around northern Sweden should match one record."""
    filter_spec = BBoxIntersects(13.754, 60.042, 17.920, 68.410, "EPSG:4326")

    records = store.get_records(Query("Record", filter_spec))

    assert records.record_ids() == (SERVICE_RECORD_ID,)


def test_spatial_filter_honours_latitude_first_urn(store: CatalogStore) -> None:
    """URN coordinate systems should be read latitude-first."""
    filter_spec = BBoxIntersects(
        60.042, 13.754, 68.410, 17.920, "urn:ogc:def:crs:EPSG::4326"
    )

    records = store.get_records(Query("Record", filter_spec))

    assert records.record_ids() == (SERVICE_RECORD_ID,)


def test_spatial_filter_matches_several_records(store: CatalogStore) -> None:
    """A box over western France should match both overlapping records."""
    filter_spec = BBoxIntersects(-5.0, 46.0, 1.0, 52.0)

    records = store.get_records(Query(filter=filter_spec))

    assert records.record_ids() == (
        "urn:uuid:94bc9c83-97f6-4b40-9eb8-a8e8787a5c63",
        "urn:uuid:9a669547-b69b-469f-a11f-2d875366bbdc",
    )


def test_max_results_limits_page(store: CatalogStore) -> None:
    """Max results should cap the returned record count."""
    records = store.get_records(Query("Record", max_results=2))

    assert records.size() == 2


def test_start_index_and_paging_clamp_at_end(store: CatalogStore) -> None:
    """Offsets should skip matches and short final pages should not fail."""
    size = store.get_records(Query("Record")).size()

    offset_records = store.get_records(Query("Record", start_index=1))
    paged_records = store.get_records(Query("Record", start_index=10, max_results=3))
    past_end = store.get_records(Query("Record", start_index=40, max_results=3))

    assert size == 12
    assert offset_records.size() == size - 1
    assert paged_records.size() == 2
    assert past_end.is_empty()


def test_paging_applies_after_filtering(store: CatalogStore) -> None:
    """Offset and limit should count filtered matches only."""
    filter_spec = PropertyEquals("type", "http://purl.org/dc/dcmitype/Dataset")
    all_datasets = store.get_records(Query(filter=filter_spec)).record_ids()

    page = store.get_records(Query(filter=filter_spec, start_index=1, max_results=2))

    assert len(all_datasets) == 4
    assert page.record_ids() == all_datasets[1:3]


def test_repeated_queries_are_identical(store: CatalogStore) -> None:
    """Identical queries should return identical ordered results."""
    query = Query(filter=PropertyEquals("subject", "Marine sediments"), max_results=5)

    first = store.get_records(query).to_list()
    second = store.get_records(query).to_list()

    assert first == second
    assert len(first) == 2


def test_unknown_type_name_raises(store: CatalogStore) -> None:
    """Queries for unregistered types should fail."""
    with pytest.raises(CatalogNotFoundError):
        store.get_records(Query("SummaryRecord"))


def test_prefixed_type_name_is_accepted(store: CatalogStore) -> None:
    """A namespace prefix on the type name should be ignored."""
    records = store.get_records(Query("csw:Record", max_results=1))

    assert records.type_name == "Record"


def test_sort_by_title_orders_missing_values_last(store: CatalogStore) -> None:
    """Sorting should order by the literal and keep records without it last."""
    records = store.get_records(Query(sort_by=(SortBy("title"),))).to_list()

    titles = [record.simple_literal("title") for record in records]
    assert titles[0] == "Aliquam fermentum purus quis arcu"
    assert titles[-1] is None
    assert records[-1].record_id == SERVICE_RECORD_ID


def test_sort_descending_is_stable_and_paged(store: CatalogStore) -> None:
    """Descending sort should keep load order among equal keys before paging."""
    query = Query(sort_by=(SortBy("dc:title", descending=True),), max_results=2)

    records = store.get_records(query)

    assert records.record_ids() == (
        "urn:uuid:829babb0-b2f1-49e1-8cd5-7b489fe71a1e",
        "urn:uuid:ab42a8c4-95e8-4630-bf79-33e59241605a",
    )


def test_get_record_by_id(store: CatalogStore) -> None:
    """Identifier lookup should return the record or None."""
    record = store.get_record_by_id(SERVICE_RECORD_ID)

    assert record is not None
    assert len(record.extents) == 1
    assert store.get_record_by_id("urn:uuid:00000000-0000-0000-0000-000000000000") is None


def test_get_domain_lists_distinct_types(store: CatalogStore) -> None:
    """Domain values should be distinct and sorted."""
    domain = store.get_domain("Record", "dc:type")

    assert domain == (
        "http://purl.org/dc/dcmitype/Dataset",
        "http://purl.org/dc/dcmitype/Image",
        "http://purl.org/dc/dcmitype/Service",
        "http://purl.org/dc/dcmitype/Text",
    )


def test_get_domain_reads_nested_scheme(store: CatalogStore) -> None:
    """Domain lookups should follow nested attribute paths."""
    domain = store.get_domain("Record", "subject/scheme")

    assert domain == ("http://www.digest.org/2.1",)


def test_get_domain_unknown_type_raises(store: CatalogStore) -> None:
    """Domain lookups should validate the type name."""
    with pytest.raises(CatalogNotFoundError):
        store.get_domain("Brief", "title")


def test_records_expose_simple_literal_structure(store: CatalogStore) -> None:
    """Dublin Core elements should be complex attributes with a value literal."""
    record = store.get_record_by_id(SERVICE_RECORD_ID)

    assert record is not None
    subject = record.get("subject")
    assert subject is not None
    assert subject.get("value") == SimpleAttribute("value", "Physiography-Landforms")


def _write_catalog(directory: Path, record_id: str, boxes: str = "") -> Path:
    directory.mkdir()
    (directory / "Record_sample.xml").write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<csw:Record xmlns:csw="http://www.opengis.net/cat/csw/2.0.2" '
        'xmlns:dc="http://purl.org/dc/elements/1.1/" '
        'xmlns:ows="http://www.opengis.net/ows">'
        f"<dc:identifier>{record_id}</dc:identifier>{boxes}</csw:Record>\n",
        encoding="utf-8",
    )
    return directory


def test_spatial_filter_matches_any_record_box(tmp_path: Path) -> None:
    """A query touching only a later bounding box should still match."""
    record_id = "urn:uuid:5a6b7c8d-9e0f-4a1b-8c2d-3e4f5a6b7c8d"
    root = _write_catalog(
        tmp_path / "catalog",
        record_id,
        "<ows:WGS84BoundingBox><ows:LowerCorner>0 0</ows:LowerCorner>"
        "<ows:UpperCorner>1 1</ows:UpperCorner></ows:WGS84BoundingBox>"
        "<ows:WGS84BoundingBox><ows:LowerCorner>50 50</ows:LowerCorner>"
        "<ows:UpperCorner>51 51</ows:UpperCorner></ows:WGS84BoundingBox>",
    )
    store = CatalogStore(root, CatalogConfig())

    records = store.get_records(Query(filter=BBoxIntersects(50.2, 50.2, 50.8, 50.8)))

    assert records.record_ids() == (record_id,)


def test_unsupported_crs_fails_without_extents(tmp_path: Path) -> None:
    """An unsupported CRS should fail even when no record has an extent."""
    root = _write_catalog(
        tmp_path / "catalog", "urn:uuid:6b7c8d9e-0f1a-4b2c-9d3e-4f5a6b7c8d9e"
    )
    store = CatalogStore(root, CatalogConfig())

    with pytest.raises(CatalogQueryError, match="EPSG:3857"):
        store.get_records(Query(filter=BBoxIntersects(0.0, 0.0, 1.0, 1.0, "EPSG:3857")))


def test_invalid_filter_fails_on_empty_store(tmp_path: Path) -> None:
    """Filters should be validated before any record is matched."""
    store = CatalogStore(tmp_path, CatalogConfig())
    filter_spec = Not(BBoxIntersects(5.0, 0.0, 1.0, 1.0))

    with pytest.raises(CatalogQueryError, match="Inverted bounding box"):
        store.get_records(Query(filter=filter_spec))
