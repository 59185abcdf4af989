"""Unit tests for CRS axis order normalization."""

from __future__ import annotations

import pytest

from core.errors import CatalogQueryError
from core.types import Envelope
from store.axis_order import is_longitude_first, normalized_envelope


@pytest.mark.parametrize(
    ("crs", "longitude_first", "expected"),
    [
        ("EPSG:4326", True, True),
        ("EPSG:4326", False, False),
        ("urn:ogc:def:crs:EPSG::4326", True, False),
        ("urn:x-ogc:def:crs:EPSG:6.11:4326", True, False),
        ("http://www.opengis.net/def/crs/EPSG/0/4326", True, False),
        ("CRS:84", False, True),
        ("urn:ogc:def:crs:OGC:1.3:CRS84", False, True),
    ],
)
def test_is_longitude_first(crs: str, longitude_first: bool, expected: bool) -> None:
    """Axis order should follow the CRS form and the caller flag."""
    assert is_longitude_first(crs, longitude_first) is expected


def test_is_longitude_first_rejects_other_crs() -> None:
    """Projected systems are not supported."""
    with pytest.raises(CatalogQueryError, match="EPSG:32633"):
        is_longitude_first("EPSG:32633", True)


def test_normalized_envelope_swaps_latitude_first() -> None:
    """Latitude-first ordinates should be swapped into x=longitude order."""
    envelope = normalized_envelope(60.042, 13.754, 68.410, 17.920, "urn:ogc:def:crs:EPSG::4326", True)

    assert envelope == Envelope(13.754, 60.042, 17.920, 68.410, "CRS:84")


def test_normalized_envelope_rejects_inverted_box() -> None:
    """Antimeridian-crossing or inverted boxes should be rejected."""
    with pytest.raises(CatalogQueryError, match="Inverted bounding box"):
        normalized_envelope(170.0, 0.0, -170.0, 1.0, "CRS:84", True)
