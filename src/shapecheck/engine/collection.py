"""
shapecheck — collection spec.

File: src/shapecheck/engine/collection.py
Last updated: 2026-10-19

Purpose
- Positional/keyed composition of heterogeneous sub-schemas: walk element
  descriptors left to right over the items of a collection and either rebuild
  the collection or aggregate per-element errors.

What should be included in this file
- ``CollectionSpec`` and its checker/predicate walks.
- Element descriptor order validation.
- Sequence and map parsers returning ``(consumed, rest)``.

Functional requirements
- Descriptor order is REQUIRED* OPTIONAL* REMAINING?; anything else is a
  schema definition error.
- Leftover items after the last descriptor make the value invalid; the
  ``on_error`` callback decides how they are reported.
- Sub-errors are never dropped: every element result is handed to
  ``on_error``, which must return a non-None payload.
- One interpreter frame per collection level: the walk calls sub-checkers
  directly.

Non-functional requirements
- The input is never mutated; ``unpack`` must return a private working copy
  when parsers consume destructively.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapecheck.engine.core import Checker, Element, ElementKind, Precondition, Predicate, error_payload
from shapecheck.errors import ErrorContainer, SchemaDefinitionError

if TYPE_CHECKING:
    from shapecheck.engine.compiler import CompileParams

OnError = Callable[[object, list[object], object], object]

_KIND_ORDER = {
    ElementKind.REQUIRED: 0,
    ElementKind.OPTIONAL: 1,
    ElementKind.REMAINING: 2,
}


@dataclass(frozen=True, slots=True)
class CollectionSpec:
    pre: Precondition
    unpack: Callable[[object], object]
    constructor: Callable[[list[object]], object]
    elements: tuple[Element, ...]
    on_error: OnError

    def __post_init__(self) -> None:
        validate_element_order(self.elements)

    def pre_predicate(self, value: object) -> bool:
        return self.pre.holds(value)

    def subschemas(self) -> tuple[object, ...]:
        return tuple(element.schema for element in self.elements)

    def checker(self, params: CompileParams) -> Checker:
        walkers = [(element.parser, params.sub_checker(element.schema)) for element in self.elements]
        pre = self.pre
        unpack = self.unpack
        on_error = self.on_error
        constructor = self.constructor if params.return_walked else None

        def check(value: object) -> object:
            error = pre(value)
            if error is not None:
                return error
            results: list[object] = []
            failed = False
            remaining = unpack(value)
            for parser, sub in walkers:
                consumed, remaining = parser(remaining)
                for item in consumed:
                    result = item if isinstance(item, ErrorContainer) else sub(item)
                    failed = failed or isinstance(result, ErrorContainer)
                    results.append(result)
            if remaining or failed:
                return error_payload(on_error(value, results, remaining), on_error)
            if constructor is None:
                return value
            return constructor(results)

        return check

    def predicate(self, params: CompileParams) -> Predicate:
        tests = [(element.parser, params.sub_predicate(element.schema)) for element in self.elements]
        pre = self.pre
        unpack = self.unpack

        def test(value: object) -> bool:
            if not pre.holds(value):
                return False
            remaining = unpack(value)
            for parser, sub in tests:
                consumed, remaining = parser(remaining)
                for item in consumed:
                    if isinstance(item, ErrorContainer) or not sub(item):
                        return False
            return not remaining

        return test


def validate_element_order(elements: tuple[Element, ...]) -> None:
    """Reject descriptor lists that break REQUIRED* OPTIONAL* REMAINING?."""

    previous = ElementKind.REQUIRED
    for index, element in enumerate(elements):
        if element.kind is ElementKind.REMAINING and index != len(elements) - 1:
            raise SchemaDefinitionError("a remaining element must be the last element")
        if _KIND_ORDER[element.kind] < _KIND_ORDER[previous]:
            raise SchemaDefinitionError(
                f"{element.kind.value} element cannot follow a {previous.value} element"
            )
        previous = element.kind


# Sequence parsers: ``remaining`` is a tuple of the not yet consumed items.


def required_item(schema: object, missing: Callable[[], ErrorContainer]) -> Element:
    def parse(remaining: object) -> tuple[list[object], object]:
        items = _as_tuple(remaining)
        if not items:
            return [missing()], items
        return [items[0]], items[1:]

    return Element(ElementKind.REQUIRED, schema, parse)


def optional_item(schema: object) -> Element:
    def parse(remaining: object) -> tuple[list[object], object]:
        items = _as_tuple(remaining)
        if not items:
            return [], items
        return [items[0]], items[1:]

    return Element(ElementKind.OPTIONAL, schema, parse)


def remaining_items(schema: object) -> Element:
    def parse(remaining: object) -> tuple[list[object], object]:
        return list(_as_tuple(remaining)), ()

    return Element(ElementKind.REMAINING, schema, parse)


# Map parsers: ``remaining`` is a private dict of not yet consumed entries;
# consumed items are ``(key, value)`` pairs.


def map_entry(
    key: object,
    entry_schema: object,
    *,
    required: bool,
    missing: Callable[[], ErrorContainer] | None = None,
) -> Element:
    def parse(remaining: object) -> tuple[list[object], object]:
        entries = _as_dict(remaining)
        if key in entries:
            return [(key, entries.pop(key))], entries
        if required and missing is not None:
            return [missing()], entries
        return [], entries

    kind = ElementKind.REQUIRED if required else ElementKind.OPTIONAL
    return Element(kind, entry_schema, parse)


def remaining_entries(entry_schema: object) -> Element:
    def parse(remaining: object) -> tuple[list[object], object]:
        return list(_as_dict(remaining).items()), {}

    return Element(ElementKind.REMAINING, entry_schema, parse)


def _as_tuple(remaining: object) -> tuple[object, ...]:
    if isinstance(remaining, tuple):
        return remaining
    return tuple(remaining)  # type: ignore[call-overload]


def _as_dict(remaining: object) -> dict[object, object]:
    if isinstance(remaining, dict):
        return remaining
    if isinstance(remaining, Mapping):
        return dict(remaining)
    raise TypeError(f"expected a mapping of remaining entries, got {type(remaining).__name__}")


__all__ = [
    "CollectionSpec",
    "OnError",
    "map_entry",
    "optional_item",
    "remaining_entries",
    "remaining_items",
    "required_item",
    "validate_element_order",
]
