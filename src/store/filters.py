"""Declarative record filters.

This module defines the closed set of filter variants the evaluator
understands. Filters are immutable and carry no evaluation logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.constants import DEFAULT_CRS
from core.types import Envelope
from store.axis_order import normalized_envelope


@dataclass(frozen=True)
class IncludeFilter:
    """Matches every record."""


@dataclass(frozen=True)
class ExcludeFilter:
    """Matches no record."""


INCLUDE = IncludeFilter()
EXCLUDE = ExcludeFilter()


@dataclass(frozen=True)
class PropertyEquals:
    """Equality between the literal at ``path`` and ``value``.

    Attributes:
        path: Slash separated attribute path, e.g. ``dc:identifier/dc:value``.
        value: Constant to compare against.
        match_case: Whether string comparison is case sensitive.
    """

    path: str
    value: object
    match_case: bool = True


@dataclass(frozen=True)
class PropertyIsLike:
    """Wildcard pattern match on the literal at ``path``.

    Attributes:
        path: Slash separated attribute path.
        pattern: Pattern using ``wildcard`` and ``single_char`` markers.
        wildcard: Marker matching any run of characters.
        single_char: Marker matching exactly one character.
        escape: Marker making the next character literal.
        match_case: Whether matching is case sensitive.
    """

    path: str
    pattern: str
    wildcard: str = "*"
    single_char: str = "."
    escape: str = "\\"
    match_case: bool = True


@dataclass(frozen=True)
class BBoxIntersects:
    """Intersection between a record extent and a target box.

    Ordinates are given in the axis order of ``crs``; ``longitude_first``
    decides that order for a bare ``EPSG:4326`` code.

    Attributes:
        min_x: Lower corner, first ordinate.
        min_y: Lower corner, second ordinate.
        max_x: Upper corner, first ordinate.
        max_y: Upper corner, second ordinate.
        crs: Coordinate reference identifier.
        longitude_first: Axis order for bare EPSG codes.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    crs: str = DEFAULT_CRS
    longitude_first: bool = True

    def envelope(self) -> Envelope:
        """Return the target box in longitude-first order."""
        return normalized_envelope(
            self.min_x,
            self.min_y,
            self.max_x,
            self.max_y,
            self.crs,
            self.longitude_first,
        )


@dataclass(frozen=True)
class IdFilter:
    """Membership of the record identifier in ``record_ids``."""

    record_ids: frozenset[str]

    @classmethod
    def of(cls, *record_ids: str) -> "IdFilter":
        """Build an id filter from positional identifiers."""
        return cls(frozenset(record_ids))


@dataclass(frozen=True)
class And:
    """Conjunction; an empty conjunction matches everything."""

    filters: tuple["Filter", ...]


@dataclass(frozen=True)
class Or:
    """Disjunction; an empty disjunction matches nothing."""

    filters: tuple["Filter", ...]


@dataclass(frozen=True)
class Not:
    """Negation of a nested filter."""

    filter: "Filter"


Filter = Union[
    IncludeFilter,
    ExcludeFilter,
    PropertyEquals,
    PropertyIsLike,
    BBoxIntersects,
    IdFilter,
    And,
    Or,
    Not,
]


def parse_property_path(path: str) -> tuple[str, ...]:
    """Split an attribute path into local segment names.

    Namespace prefixes are dropped, so ``dc:identifier/dc:value`` and
    ``identifier/value`` address the same literal.

    Args:
        path: Slash separated path.

    Returns:
        Non-empty local names in order.
    """
    segments = []
    for segment in path.strip().strip("/").split("/"):
        local_name = segment.rsplit(":", 1)[-1].strip()
        if local_name:
            segments.append(local_name)
    return tuple(segments)
