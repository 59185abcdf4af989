"""Record schema registry.

This module declares the fixed Dublin Core ``Record`` schema served by
the store and resolves type names used in queries.
"""

from __future__ import annotations

from core.constants import (
    CSW_NAMESPACE,
    DC_NAMESPACE,
    DCT_NAMESPACE,
    RECORD_TYPE_NAME,
    SIMPLE_LITERAL_SCHEME,
    SIMPLE_LITERAL_VALUE,
)
from core.errors import CatalogNotFoundError
from core.types import AttributeDescriptor, RecordSchema

_DC_ELEMENTS = (
    "identifier",
    "title",
    "type",
    "subject",
    "format",
    "creator",
    "contributor",
    "publisher",
    "date",
    "language",
    "relation",
    "rights",
    "source",
    "coverage",
    "description",
)
_DCT_ELEMENTS = (
    "abstract",
    "alternative",
    "created",
    "modified",
    "references",
    "spatial",
)
_SINGLE_VALUED = ("identifier",)


def _literal_descriptor(name: str, namespace: str) -> AttributeDescriptor:
    return AttributeDescriptor(
        name=name,
        namespace=namespace,
        sub_properties=(SIMPLE_LITERAL_VALUE, SIMPLE_LITERAL_SCHEME),
        max_occurs=1 if name in _SINGLE_VALUED else None,
    )


RECORD_SCHEMA = RecordSchema(
    type_name=RECORD_TYPE_NAME,
    namespace=CSW_NAMESPACE,
    descriptors=tuple(_literal_descriptor(name, DC_NAMESPACE) for name in _DC_ELEMENTS)
    + tuple(_literal_descriptor(name, DCT_NAMESPACE) for name in _DCT_ELEMENTS),
)

_SCHEMAS = {RECORD_SCHEMA.type_name: RECORD_SCHEMA}


def supported_schemas() -> tuple[RecordSchema, ...]:
    """Return every schema the store serves, in registration order."""
    return tuple(_SCHEMAS.values())


def get_schema(type_name: str) -> RecordSchema:
    """Resolve a schema by type name.

    Namespace prefixes such as ``csw:Record`` are accepted.

    Args:
        type_name: Query type name.

    Returns:
        Matching schema.

    Raises:
        CatalogNotFoundError: If no schema is registered under the name.
    """
    local_name = type_name.rsplit(":", 1)[-1]
    schema = _SCHEMAS.get(local_name)
    if schema is None:
        raise CatalogNotFoundError(
            f"Unknown record type '{type_name}'. "
            f"Supported types: {', '.join(_SCHEMAS)}."
        )
    return schema
