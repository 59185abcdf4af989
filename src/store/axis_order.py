"""Coordinate reference and axis order handling.

Record files and bounding-box filters both name a CRS. Only WGS84
geographic systems are supported, and every box is normalized to
longitude-first order before comparison.
"""

from __future__ import annotations

from core.errors import CatalogQueryError
from core.types import Envelope

NORMALIZED_CRS = "CRS:84"

_LONGITUDE_FIRST_CODES = (
    "crs:84",
    "urn:ogc:def:crs:ogc:1.3:crs84",
    "urn:ogc:def:crs:ogc::crs84",
    "http://www.opengis.net/def/crs/ogc/1.3/crs84",
)
_AUTHORITY_CODES = (
    "urn:ogc:def:crs:epsg::4326",
    "urn:ogc:def:crs:epsg:4326",
    "urn:x-ogc:def:crs:epsg:4326",
    "urn:x-ogc:def:crs:epsg:6.11:4326",
    "urn:ogc:def:crs:epsg:6.11:4326",
    "http://www.opengis.net/def/crs/epsg/0/4326",
)
_BARE_CODES = ("epsg:4326", "4326", "")


def is_longitude_first(crs: str, longitude_first: bool) -> bool:
    """Decide the axis order of coordinates expressed in ``crs``.

    Bare ``EPSG:4326`` codes follow the caller's ``longitude_first`` flag.
    URN and HTTP forms always use the authority (latitude-first) order.

    Args:
        crs: CRS identifier as written by the caller or record file.
        longitude_first: Order to assume for bare EPSG codes.

    Returns:
        ``True`` when the first ordinate is longitude.

    Raises:
        CatalogQueryError: If the CRS is not a supported WGS84 system.
    """
    code = crs.strip().lower()
    if code in _LONGITUDE_FIRST_CODES:
        return True
    if code in _AUTHORITY_CODES:
        return False
    if code in _BARE_CODES:
        return longitude_first
    raise CatalogQueryError(
        f"Unsupported coordinate reference system '{crs}'. "
        "Only WGS84 (EPSG:4326 or CRS:84) bounding boxes are supported."
    )


def normalized_envelope(
    first_min: float,
    second_min: float,
    first_max: float,
    second_max: float,
    crs: str,
    longitude_first: bool,
) -> Envelope:
    """Build a longitude-first envelope from ordinates in ``crs`` order.

    Args:
        first_min: Lower corner, first ordinate.
        second_min: Lower corner, second ordinate.
        first_max: Upper corner, first ordinate.
        second_max: Upper corner, second ordinate.
        crs: CRS the ordinates are expressed in.
        longitude_first: Order to assume for bare EPSG codes.

    Returns:
        Envelope with x as longitude.

    Raises:
        CatalogQueryError: If the CRS is unsupported or a lower corner
            ordinate exceeds the upper one. Boxes crossing the antimeridian
            are not supported.
    """
    if is_longitude_first(crs, longitude_first):
        envelope = Envelope(first_min, second_min, first_max, second_max, NORMALIZED_CRS)
    else:
        envelope = Envelope(second_min, first_min, second_max, first_max, NORMALIZED_CRS)
    if envelope.min_x > envelope.max_x or envelope.min_y > envelope.max_y:
        raise CatalogQueryError(
            f"Inverted bounding box ({first_min} {second_min}, {first_max} {second_max}) "
            f"in {crs}: lower corner must not exceed upper corner. "
            "Boxes crossing the antimeridian are not supported."
        )
    return envelope
