"""Record file loading for the catalog store.

This module enumerates record files under a root directory and parses
each Dublin Core ``csw:Record`` document into a typed record.
"""

from __future__ import annotations

import re
from pathlib import Path
from xml.etree import ElementTree

from core.config import CatalogConfig
from core.constants import (
    CSW_NAMESPACE,
    DC_NAMESPACE,
    DCT_NAMESPACE,
    DEFAULT_CRS,
    LOAD_POLICY_ABORT,
    OWS_NAMESPACE,
    SIMPLE_LITERAL_SCHEME,
    SIMPLE_LITERAL_VALUE,
    URN_UUID_PATTERN,
)
from core.errors import CatalogError, CatalogLoadError
from core.logging_config import get_logger
from core.types import Attribute, ComplexAttribute, Envelope, Record, RecordSchema, SimpleAttribute
from store.axis_order import NORMALIZED_CRS, normalized_envelope
from store.record_schema import RECORD_SCHEMA

_LOGGER = get_logger(__name__)
_IDENTIFIER_RE = re.compile(URN_UUID_PATTERN)
_BOUNDING_BOX_ELEMENTS = {"BoundingBox": DEFAULT_CRS, "WGS84BoundingBox": NORMALIZED_CRS}


def list_record_files(root: Path, pattern: str) -> list[Path]:
    """List record files directly under ``root``.

    Args:
        root: Catalog root directory.
        pattern: Glob pattern for record file names.

    Returns:
        Matching regular files sorted by name.
    """
    return sorted(path for path in root.glob(pattern) if path.is_file())


def load_records(root: Path, config: CatalogConfig) -> tuple[Record, ...]:
    """Load every record file under ``root``.

    Args:
        root: Catalog root directory.
        config: Runtime configuration with pattern and load policy.

    Returns:
        Records in file name order.

    Raises:
        CatalogLoadError: If a file fails under the ``abort`` policy, or
            two files declare the same identifier.
    """
    records: list[Record] = []
    seen: dict[str, Path] = {}
    for file_path in list_record_files(root, config.record_file_pattern):
        try:
            record = parse_record_file(file_path, longitude_first=config.longitude_first)
        except CatalogLoadError as error:
            if config.load_policy == LOAD_POLICY_ABORT:
                raise
            _LOGGER.warning("record_file_skipped", path=str(file_path), reason=str(error))
            continue
        if record.record_id in seen:
            raise CatalogLoadError(
                f"Duplicate record identifier {record.record_id} in {file_path}, "
                f"already loaded from {seen[record.record_id]}. "
                "Each record file must carry a unique identifier."
            )
        seen[record.record_id] = file_path
        records.append(record)
    _LOGGER.info("records_loaded", root=str(root), record_count=len(records))
    return tuple(records)


def parse_record_file(
    file_path: Path,
    schema: RecordSchema = RECORD_SCHEMA,
    longitude_first: bool = True,
) -> Record:
    """Parse one ``csw:Record`` XML document.

    Args:
        file_path: Record file path.
        schema: Schema the record elements must belong to.
        longitude_first: Axis order for bare ``EPSG:4326`` bounding boxes.

    Returns:
        Parsed record.

    Raises:
        CatalogLoadError: If the file is unreadable or does not conform.
    """
    try:
        document = ElementTree.parse(file_path)
    except (ElementTree.ParseError, OSError) as error:
        raise CatalogLoadError(
            f"Failed to parse record file {file_path}: {error}. "
            "Fix or remove the file and reload the catalog."
        ) from error
    root_element = document.getroot()
    if root_element.tag != f"{{{schema.namespace}}}{schema.type_name}":
        raise CatalogLoadError(
            f"Invalid record file {file_path}: expected root element "
            f"csw:{schema.type_name}, got {root_element.tag}."
        )
    attributes: list[Attribute] = []
    extents: list[Envelope] = []
    for element in root_element:
        namespace, local_name = _split_tag(element.tag)
        if namespace == OWS_NAMESPACE and local_name in _BOUNDING_BOX_ELEMENTS:
            extents.append(_parse_bounding_box(file_path, element, local_name, longitude_first))
            continue
        attributes.append(_parse_literal(file_path, schema, element, namespace, local_name))
    _check_occurrences(file_path, schema, attributes)
    record_id = _extract_identifier(file_path, attributes)
    return Record(
        record_id=record_id,
        attributes=tuple(attributes),
        extents=tuple(extents),
        source_path=str(file_path),
    )


def _split_tag(tag: str) -> tuple[str, str]:
    if tag.startswith("{"):
        namespace, _, local_name = tag[1:].partition("}")
        return namespace, local_name
    return "", tag


def _parse_literal(
    file_path: Path,
    schema: RecordSchema,
    element: ElementTree.Element,
    namespace: str,
    local_name: str,
) -> ComplexAttribute:
    """Convert a Dublin Core element into a simple-literal attribute.

    Raises:
        CatalogLoadError: If the element is not declared by the schema.
    """
    descriptor = schema.descriptor(local_name)
    if namespace not in (DC_NAMESPACE, DCT_NAMESPACE) or descriptor is None:
        raise CatalogLoadError(
            f"Invalid record file {file_path}: element {element.tag} is not part "
            f"of the {schema.type_name} schema."
        )
    if descriptor.namespace != namespace:
        raise CatalogLoadError(
            f"Invalid record file {file_path}: element {local_name} must use "
            f"namespace {descriptor.namespace}."
        )
    properties: list[Attribute] = [
        SimpleAttribute(SIMPLE_LITERAL_VALUE, (element.text or "").strip())
    ]
    scheme = element.get(SIMPLE_LITERAL_SCHEME)
    if scheme is not None:
        properties.append(SimpleAttribute(SIMPLE_LITERAL_SCHEME, scheme))
    return ComplexAttribute(local_name, tuple(properties))


def _parse_bounding_box(
    file_path: Path,
    element: ElementTree.Element,
    local_name: str,
    longitude_first: bool,
) -> Envelope:
    """Read an OWS bounding box into a longitude-first envelope.

    Raises:
        CatalogLoadError: If corners are missing, malformed, or the CRS
            is not supported.
    """
    crs = element.get("crs", _BOUNDING_BOX_ELEMENTS[local_name])
    lower = _parse_corner(file_path, element, "LowerCorner")
    upper = _parse_corner(file_path, element, "UpperCorner")
    try:
        return normalized_envelope(lower[0], lower[1], upper[0], upper[1], crs, longitude_first)
    except CatalogError as error:
        raise CatalogLoadError(f"Invalid bounding box in {file_path}: {error}") from error


def _parse_corner(
    file_path: Path,
    element: ElementTree.Element,
    corner_name: str,
) -> tuple[float, float]:
    corner = element.find(f"{{{OWS_NAMESPACE}}}{corner_name}")
    if corner is None or not corner.text:
        raise CatalogLoadError(
            f"Invalid bounding box in {file_path}: missing ows:{corner_name}."
        )
    ordinates = corner.text.split()
    try:
        values = [float(ordinate) for ordinate in ordinates]
    except ValueError as error:
        raise CatalogLoadError(
            f"Invalid bounding box in {file_path}: ows:{corner_name} "
            f"'{corner.text.strip()}' is not numeric."
        ) from error
    if len(values) != 2:
        raise CatalogLoadError(
            f"Invalid bounding box in {file_path}: ows:{corner_name} "
            f"expected 2 ordinates, got {len(values)}."
        )
    return values[0], values[1]


def _check_occurrences(
    file_path: Path,
    schema: RecordSchema,
    attributes: list[Attribute],
) -> None:
    counts: dict[str, int] = {}
    for attribute in attributes:
        counts[attribute.name] = counts.get(attribute.name, 0) + 1
    for name, count in counts.items():
        descriptor = schema.descriptor(name)
        if descriptor is not None and descriptor.max_occurs is not None:
            if count > descriptor.max_occurs:
                raise CatalogLoadError(
                    f"Invalid record file {file_path}: element {name} occurs "
                    f"{count} times, at most {descriptor.max_occurs} allowed."
                )


def _extract_identifier(file_path: Path, attributes: list[Attribute]) -> str:
    """Return the ``identifier/value`` literal of a parsed record.

    Raises:
        CatalogLoadError: If the identifier is missing or not a URN UUID.
    """
    draft = Record(record_id="", attributes=tuple(attributes))
    identifier = draft.simple_literal("identifier")
    if not isinstance(identifier, str) or not identifier:
        raise CatalogLoadError(
            f"Invalid record file {file_path}: missing dc:identifier. "
            "Every record needs a urn:uuid identifier."
        )
    if _IDENTIFIER_RE.fullmatch(identifier) is None:
        raise CatalogLoadError(
            f"Invalid record file {file_path}: identifier '{identifier}' "
            "is not a urn:uuid value."
        )
    return identifier
