"""
shapecheck — leaf schemas.

File: src/shapecheck/schemas/leaves.py
Last updated: 2026-10-19

Purpose
- Atomic schemas compiled to a ``LeafSpec``: anything, equality, enumeration,
  user predicates, instance checks, regular expressions and the common
  scalar types.

What should be included in this file
- Any, Eq, Enum, Pred, InstanceOf and Regex leaves.
- The ``Int``/``Num``/``Str``/``Bool`` constants.

Functional requirements
- Failure forms read like ``(not (integer? 'a'))``.
- ``bool`` is not accepted by ``Int`` or ``Num``.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Callable
from dataclasses import dataclass

from shapecheck.engine.core import precondition
from shapecheck.engine.leaf import LeafSpec
from shapecheck.errors import SchemaDefinitionError
from shapecheck.forms import Symbol, quote, symbol
from shapecheck.schemas.base import Schema


@dataclass(frozen=True)
class AnySchema(Schema):
    """Accepts every value, ``None`` included."""

    def spec(self) -> LeafSpec:
        return LeafSpec(precondition(self, _always, _anything_form))

    def explain(self) -> object:
        return symbol("Any")


@dataclass(frozen=True)
class EqSchema(Schema):
    value: object

    def spec(self) -> LeafSpec:
        expected = self.value
        return LeafSpec(
            precondition(
                self,
                lambda candidate: candidate == expected,
                lambda candidate: (symbol("="), quote(expected), candidate),
            )
        )

    def explain(self) -> object:
        return (symbol("eq"), quote(self.value))


@dataclass(frozen=True)
class EnumSchema(Schema):
    values: tuple[object, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise SchemaDefinitionError("enum schema needs at least one value")

    def spec(self) -> LeafSpec:
        values = self.values
        return LeafSpec(
            precondition(
                self,
                lambda candidate: candidate in values,
                lambda candidate: (symbol("member?"), candidate, [quote(value) for value in values]),
            )
        )

    def explain(self) -> object:
        return (symbol("enum"), *(quote(value) for value in self.values))


@dataclass(frozen=True)
class PredicateSchema(Schema):
    """Leaf backed by a user predicate.

    ``label`` replaces the ``(pred <name>)`` explanation, which is how the
    built-in scalar schemas explain themselves as ``Int``, ``Str`` and so on.
    """

    test: Callable[[object], object]
    name: str
    label: str | None = None

    def spec(self) -> LeafSpec:
        name = symbol(self.name)
        return LeafSpec(precondition(self, self.test, lambda candidate: (name, candidate)))

    def explain(self) -> object:
        if self.label is not None:
            return symbol(self.label)
        return (symbol("pred"), symbol(self.name))


@dataclass(frozen=True)
class InstanceOf(Schema):
    cls: type

    def __post_init__(self) -> None:
        if not isinstance(self.cls, type):
            raise SchemaDefinitionError(f"instance_of expects a class, got {self.cls!r}")

    def spec(self) -> LeafSpec:
        cls = self.cls
        name = _class_symbol(cls)
        return LeafSpec(
            precondition(
                self,
                lambda candidate: isinstance(candidate, cls),
                lambda candidate: (symbol("instance?"), name, candidate),
            )
        )

    def explain(self) -> object:
        return _class_symbol(self.cls)


@dataclass(frozen=True)
class RegexSchema(Schema):
    """Matches strings on which ``pattern.search`` succeeds."""

    pattern: re.Pattern[str]

    def spec(self) -> LeafSpec:
        pattern = self.pattern
        return LeafSpec(
            precondition(
                self,
                lambda candidate: isinstance(candidate, str) and pattern.search(candidate),
                lambda candidate: (symbol("re-find"), pattern.pattern, candidate),
            )
        )

    def explain(self) -> object:
        return (symbol("regex"), self.pattern.pattern)


def _always(value: object) -> bool:
    return True


def _anything_form(value: object) -> object:
    return (symbol("anything?"), value)


def _class_symbol(cls: type) -> Symbol:
    return symbol(cls.__qualname__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _is_str(value: object) -> bool:
    return isinstance(value, str)


def _is_bool(value: object) -> bool:
    return isinstance(value, bool)


def eq(value: object) -> EqSchema:
    return EqSchema(value)


def enum(*values: object) -> EnumSchema:
    return EnumSchema(tuple(values))


def pred(test: Callable[[object], object], name: str | None = None) -> PredicateSchema:
    if not callable(test):
        raise SchemaDefinitionError(f"pred expects a callable, got {test!r}")
    label = name if name is not None else getattr(test, "__name__", repr(test))
    return PredicateSchema(test, label)


def instance_of(cls: type) -> InstanceOf:
    return InstanceOf(cls)


def regex(pattern: str | re.Pattern[str]) -> RegexSchema:
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return RegexSchema(compiled)


Any = AnySchema()
Int = PredicateSchema(_is_int, "integer?", label="Int")
Num = PredicateSchema(_is_number, "number?", label="Num")
Str = PredicateSchema(_is_str, "string?", label="Str")
Bool = PredicateSchema(_is_bool, "boolean?", label="Bool")

__all__ = [
    "Any",
    "AnySchema",
    "Bool",
    "EnumSchema",
    "EqSchema",
    "InstanceOf",
    "Int",
    "Num",
    "PredicateSchema",
    "RegexSchema",
    "Str",
    "enum",
    "eq",
    "instance_of",
    "pred",
    "regex",
]
