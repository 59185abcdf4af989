"""Filter evaluation against loaded records.

This module resolves attribute paths through nested attributes and
dispatches each filter variant to its predicate. Evaluation is pure:
it never mutates records and never touches the filesystem.
"""

from __future__ import annotations

import re

from core.constants import SIMPLE_LITERAL_VALUE
from core.errors import CatalogQueryError
from core.types import Attribute, ComplexAttribute, Record, SimpleAttribute
from store.filters import (
    And,
    BBoxIntersects,
    ExcludeFilter,
    Filter,
    IdFilter,
    IncludeFilter,
    Not,
    Or,
    PropertyEquals,
    PropertyIsLike,
    parse_property_path,
)


def evaluate(record: Record, filter_spec: Filter | None) -> bool:
    """Return whether ``record`` satisfies ``filter_spec``.

    Args:
        record: Record under test.
        filter_spec: Filter to apply; ``None`` matches everything.

    Returns:
        Match result.

    Raises:
        CatalogQueryError: If the filter variant is not supported.
    """
    if filter_spec is None or isinstance(filter_spec, IncludeFilter):
        return True
    if isinstance(filter_spec, ExcludeFilter):
        return False
    if isinstance(filter_spec, PropertyEquals):
        return _evaluate_equals(record, filter_spec)
    if isinstance(filter_spec, PropertyIsLike):
        return _evaluate_like(record, filter_spec)
    if isinstance(filter_spec, BBoxIntersects):
        target = filter_spec.envelope()
        return any(extent.intersects(target) for extent in record.extents)
    if isinstance(filter_spec, IdFilter):
        return record.record_id in filter_spec.record_ids
    if isinstance(filter_spec, And):
        return all(evaluate(record, child) for child in filter_spec.filters)
    if isinstance(filter_spec, Or):
        return any(evaluate(record, child) for child in filter_spec.filters)
    if isinstance(filter_spec, Not):
        return not evaluate(record, filter_spec.filter)
    raise _unsupported_filter(filter_spec)


def check_filter(filter_spec: Filter | None) -> None:
    """Validate a filter tree before it is evaluated against any record.

    Bounding boxes are normalized here so an unsupported or inverted box
    fails the query even when no record carries an extent.

    Args:
        filter_spec: Filter to validate; ``None`` is always valid.

    Raises:
        CatalogQueryError: If a variant, CRS, or box is not supported.
    """
    if filter_spec is None:
        return
    if isinstance(filter_spec, BBoxIntersects):
        filter_spec.envelope()
    elif isinstance(filter_spec, (And, Or)):
        for child in filter_spec.filters:
            check_filter(child)
    elif isinstance(filter_spec, Not):
        check_filter(filter_spec.filter)
    elif not isinstance(
        filter_spec,
        (IncludeFilter, ExcludeFilter, PropertyEquals, PropertyIsLike, IdFilter),
    ):
        raise _unsupported_filter(filter_spec)


def _unsupported_filter(filter_spec: object) -> CatalogQueryError:
    return CatalogQueryError(
        f"Unsupported filter type {type(filter_spec).__name__}. "
        "Build filters from the variants in store.filters."
    )


def resolve_path(record: Record, path: str) -> tuple[object, ...]:
    """Resolve every literal reachable through ``path``.

    Repeated attributes fan out, so a path can yield several literals.
    A path ending on a complex attribute yields its ``value`` literal.
    Missing segments yield nothing.

    Args:
        record: Record to navigate.
        path: Slash separated attribute path.

    Returns:
        Literals in document order.
    """
    segments = parse_property_path(path)
    if not segments:
        return ()
    current: tuple[Attribute, ...] = record.get_all(segments[0])
    for segment in segments[1:]:
        current = tuple(
            child
            for attribute in current
            if isinstance(attribute, ComplexAttribute)
            for child in attribute.properties
            if child.name == segment
        )
    literals = []
    for attribute in current:
        if isinstance(attribute, ComplexAttribute):
            attribute = attribute.get(SIMPLE_LITERAL_VALUE)
        if isinstance(attribute, SimpleAttribute) and attribute.value is not None:
            literals.append(attribute.value)
    return tuple(literals)


def _evaluate_equals(record: Record, filter_spec: PropertyEquals) -> bool:
    expected = _comparable(filter_spec.value, filter_spec.match_case)
    return any(
        _comparable(literal, filter_spec.match_case) == expected
        for literal in resolve_path(record, filter_spec.path)
    )


def _evaluate_like(record: Record, filter_spec: PropertyIsLike) -> bool:
    pattern = _like_pattern_to_regex(filter_spec)
    return any(
        pattern.fullmatch(str(literal)) is not None
        for literal in resolve_path(record, filter_spec.path)
    )


def _comparable(value: object, match_case: bool) -> str:
    text = str(value)
    return text if match_case else text.casefold()


def _like_pattern_to_regex(filter_spec: PropertyIsLike) -> re.Pattern[str]:
    """Compile a like pattern into an anchored regular expression.

    Args:
        filter_spec: Like filter carrying the pattern and markers.

    Returns:
        Compiled expression to use with ``fullmatch``.
    """
    parts: list[str] = []
    escaped = False
    for char in filter_spec.pattern:
        if escaped:
            parts.append(re.escape(char))
            escaped = False
        elif char == filter_spec.escape:
            escaped = True
        elif char == filter_spec.wildcard:
            parts.append(".*")
        elif char == filter_spec.single_char:
            parts.append(".")
        else:
            parts.append(re.escape(char))
    if escaped:
        parts.append(re.escape(filter_spec.escape))
    flags = re.DOTALL if filter_spec.match_case else re.DOTALL | re.IGNORECASE
    return re.compile("".join(parts), flags)
