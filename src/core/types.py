"""Shared typed models.

This module defines immutable data models used by the loader, filter
evaluator, and store layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from core.constants import DEFAULT_CRS, SIMPLE_LITERAL_VALUE


@dataclass(frozen=True)
class SimpleAttribute:
    """Named scalar literal.

    Attributes:
        name: Local attribute name.
        value: Literal value.
    """

    name: str
    value: object


@dataclass(frozen=True)
class ComplexAttribute:
    """Named attribute holding nested attributes.

    Attributes:
        name: Local attribute name.
        properties: Ordered nested attributes.
    """

    name: str
    properties: tuple["Attribute", ...] = ()

    def get(self, name: str) -> "Attribute | None":
        """Return the first nested attribute called ``name``."""
        for attribute in self.properties:
            if attribute.name == name:
                return attribute
        return None


Attribute = Union[SimpleAttribute, ComplexAttribute]


@dataclass(frozen=True)
class Envelope:
    """Axis-aligned bounding box, x is longitude.

    Attributes:
        min_x: West bound.
        min_y: South bound.
        max_x: East bound.
        max_y: North bound.
        crs: Coordinate reference identifier.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    crs: str = DEFAULT_CRS

    def intersects(self, other: "Envelope") -> bool:
        """Return whether two envelopes share at least one point."""
        return (
            self.min_x <= other.max_x
            and other.min_x <= self.max_x
            and self.min_y <= other.max_y
            and other.min_y <= self.max_y
        )


@dataclass(frozen=True)
class Record:
    """One catalog entry.

    Attributes:
        record_id: Stable URN identifier, equal to ``identifier/value``.
        attributes: Ordered top-level attributes; names may repeat.
        extents: Longitude-first spatial extents, one per bounding box.
        source_path: File the record was loaded from.
    """

    record_id: str
    attributes: tuple[Attribute, ...]
    extents: tuple[Envelope, ...] = ()
    source_path: str = ""

    def get(self, name: str) -> Attribute | None:
        """Return the first top-level attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def get_all(self, name: str) -> tuple[Attribute, ...]:
        """Return every top-level attribute called ``name``."""
        return tuple(attribute for attribute in self.attributes if attribute.name == name)

    def simple_literal(self, name: str) -> object | None:
        """Return the ``value`` literal of a simple-literal element.

        Args:
            name: Top-level element name, such as ``identifier``.

        Returns:
            Literal value, or ``None`` when the element is absent.
        """
        attribute = self.get(name)
        if isinstance(attribute, ComplexAttribute):
            attribute = attribute.get(SIMPLE_LITERAL_VALUE)
        if isinstance(attribute, SimpleAttribute):
            return attribute.value
        return None


@dataclass(frozen=True)
class AttributeDescriptor:
    """Schema entry for one attribute.

    Attributes:
        name: Local attribute name.
        namespace: XML namespace the element lives in.
        sub_properties: Nested property names for complex attributes.
        max_occurs: Maximum occurrences, ``None`` for unbounded.
    """

    name: str
    namespace: str
    sub_properties: tuple[str, ...] = ()
    max_occurs: int | None = None

    @property
    def is_complex(self) -> bool:
        """Whether the attribute carries nested sub-properties."""
        return bool(self.sub_properties)


@dataclass(frozen=True)
class RecordSchema:
    """Typed attribute shape for a record type.

    Attributes:
        type_name: Public type name used in queries.
        namespace: Namespace of the record root element.
        descriptors: Ordered attribute descriptors.
    """

    type_name: str
    namespace: str
    descriptors: tuple[AttributeDescriptor, ...] = field(default_factory=tuple)

    def descriptor(self, name: str) -> AttributeDescriptor | None:
        """Return the descriptor for ``name`` if the schema declares it."""
        for descriptor in self.descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    @property
    def attribute_names(self) -> tuple[str, ...]:
        """Ordered attribute names."""
        return tuple(descriptor.name for descriptor in self.descriptors)


class Transaction(Enum):
    """Isolation token accepted by store reads."""

    AUTO_COMMIT = "auto_commit"
