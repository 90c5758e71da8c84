"""
shapecheck — sequence, set, queue and atom schemas.

File: src/shapecheck/schemas/sequences.py
Last updated: 2026-10-19

Purpose
- Positional schemas of the form ``[one(...)*, optional(...)*, rest?]`` and
  homogeneous sets, queues and atom (``Cell``) contents.

What should be included in this file
- Sequence layout parsing and ``SequenceSchema``.
- Set, deque and ``Cell`` content schemas.

Functional requirements
- Required positions precede optional positions, which precede at most one
  trailing rest schema; any other layout is a schema definition error.
- Missing required positions report ``(not (present? <name>))``; unmatched
  excess items report a trailing ``(has-extra-elts? ...)`` marker.
- Sequence errors are a list aligned with the input positions, ``None`` where
  the item was valid.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence, Set
from dataclasses import dataclass
from functools import partial

from shapecheck.engine.collection import CollectionSpec, optional_item, remaining_items, required_item
from shapecheck.engine.compiler import explain_of
from shapecheck.engine.core import Element, precondition
from shapecheck.errors import (
    MISSING,
    ErrorContainer,
    ExtraElements,
    SchemaDefinitionError,
    error_val,
    validation_error,
)
from shapecheck.forms import symbol
from shapecheck.schemas.base import Schema
from shapecheck.schemas.recursion import Cell


@dataclass(frozen=True)
class One:
    """A required sequence position."""

    schema: object
    name: str


@dataclass(frozen=True)
class OptionalElement:
    """A sequence position that may be absent at the end of the value."""

    schema: object
    name: str


def one(schema: object, name: str) -> One:
    return One(schema, name)


def optional(schema: object, name: str) -> OptionalElement:
    return OptionalElement(schema, name)


@dataclass(frozen=True)
class SequenceSchema(Schema):
    items: tuple[object, ...]
    as_tuple: bool = False

    def __post_init__(self) -> None:
        parse_sequence(self.items)

    def spec(self) -> CollectionSpec:
        ones, optionals, rest = parse_sequence(self.items)
        elements: list[Element] = [
            required_item(item.schema, partial(_missing_position, self, item.name)) for item in ones
        ]
        elements.extend(optional_item(item.schema) for item in optionals)
        if rest:
            elements.append(remaining_items(rest[0]))
        return CollectionSpec(
            pre=precondition(self, _is_sequence, lambda value: (symbol("sequential?"), value)),
            unpack=tuple,
            constructor=tuple if self.as_tuple else list,
            elements=tuple(elements),
            on_error=sequence_error,
        )

    def explain(self) -> object:
        explained: list[object] = []
        for item in self.items:
            if isinstance(item, One):
                explained.append((symbol("one"), explain_of(item.schema), item.name))
            elif isinstance(item, OptionalElement):
                explained.append((symbol("optional"), explain_of(item.schema), item.name))
            else:
                explained.append(explain_of(item))
        return explained


def parse_sequence(
    items: tuple[object, ...],
) -> tuple[list[One], list[OptionalElement], list[object]]:
    """Split sequence items into required, optional and rest positions."""

    ones: list[One] = []
    optionals: list[OptionalElement] = []
    rest: list[object] = []
    for item in items:
        if rest:
            raise SchemaDefinitionError(
                "sequence schema must match [one* optional* rest?]: "
                f"{item!r} follows the rest schema"
            )
        if isinstance(item, One):
            if optionals:
                raise SchemaDefinitionError(
                    f"required element {item.name!r} cannot follow an optional element"
                )
            ones.append(item)
        elif isinstance(item, OptionalElement):
            optionals.append(item)
        else:
            rest.append(item)
    return ones, optionals, rest


def sequence_error(value: object, results: list[object], remaining: object) -> list[object]:
    errors = [error_val(result) for result in results]
    if remaining:
        errors.append(ExtraElements(tuple(remaining)))  # type: ignore[call-overload]
    return errors


@dataclass(frozen=True)
class SetSchema(Schema):
    element: object

    def spec(self) -> CollectionSpec:
        return CollectionSpec(
            pre=precondition(self, _is_set, lambda value: (symbol("set?"), value)),
            unpack=tuple,
            constructor=set,
            elements=(remaining_items(self.element),),
            on_error=_collected_errors,
        )

    def explain(self) -> object:
        return (symbol("set-of"), explain_of(self.element))


@dataclass(frozen=True)
class QueueSchema(Schema):
    """``collections.deque`` whose items all match ``element``."""

    element: object

    def spec(self) -> CollectionSpec:
        return CollectionSpec(
            pre=precondition(self, _is_queue, lambda value: (symbol("queue?"), value)),
            unpack=tuple,
            constructor=deque,
            elements=(remaining_items(self.element),),
            on_error=sequence_error,
        )

    def explain(self) -> object:
        return (symbol("queue"), explain_of(self.element))


@dataclass(frozen=True)
class AtomSchema(Schema):
    """``Cell`` whose current contents match ``schema``."""

    schema: object

    def spec(self) -> CollectionSpec:
        return CollectionSpec(
            pre=precondition(self, _is_cell, lambda value: (symbol("atom?"), value)),
            unpack=_cell_contents,
            constructor=_new_cell,
            elements=(required_item(self.schema, partial(_missing_position, self, "contents")),),
            on_error=_atom_error,
        )

    def explain(self) -> object:
        return (symbol("atom"), explain_of(self.schema))


def _missing_position(owner: object, name: str) -> ErrorContainer:
    return validation_error(owner, MISSING, lambda: (symbol("present?"), symbol(name)))


def _collected_errors(value: object, results: list[object], remaining: object) -> list[object]:
    return [result.error for result in results if isinstance(result, ErrorContainer)]


def _atom_error(value: object, results: list[object], remaining: object) -> Cell[object]:
    return Cell(error_val(results[0]))


def _cell_contents(value: object) -> tuple[object, ...]:
    return (value.deref(),)  # type: ignore[attr-defined]


def _new_cell(results: list[object]) -> Cell[object]:
    return Cell(results[0])


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_set(value: object) -> bool:
    return isinstance(value, Set)


def _is_queue(value: object) -> bool:
    return isinstance(value, deque)


def _is_cell(value: object) -> bool:
    return isinstance(value, Cell)


def sequence_schema(items: Sequence[object], *, as_tuple: bool = False) -> SequenceSchema:
    return SequenceSchema(tuple(items), as_tuple)


def set_of(element: object) -> SetSchema:
    return SetSchema(element)


def queue_of(element: object) -> QueueSchema:
    return QueueSchema(element)


def atom(schema: object) -> AtomSchema:
    return AtomSchema(schema)


__all__ = [
    "AtomSchema",
    "One",
    "OptionalElement",
    "QueueSchema",
    "SequenceSchema",
    "SetSchema",
    "atom",
    "one",
    "optional",
    "parse_sequence",
    "queue_of",
    "sequence_error",
    "sequence_schema",
    "set_of",
]
