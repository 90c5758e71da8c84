"""
shapecheck — spec building blocks.

File: src/shapecheck/engine/core.py
Last updated: 2026-10-19

Purpose
- Define the vocabulary shared by the three spec shapes (Leaf, Variant,
  Collection): preconditions, variant options, collection element descriptors
  and the ``Spec`` protocol the compiler consumes.

What should be included in this file
- ``Precondition``, ``Option``, ``Element``, ``Deferred`` and the ``Spec``
  protocol.
- ``error_payload``, the single place error payloads are boxed for specs.

Functional requirements
- A precondition yields ``None`` when its test holds, otherwise an
  ``ErrorContainer`` around a ``ValidationError`` whose explanation is built
  lazily.
- A predicate that raises is reported as a ``throws?`` failure.

Non-functional requirements
- Nothing here holds mutable state; every object is safe to share between
  threads.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from functools import partial
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from shapecheck.errors import ErrorContainer, SchemaDefinitionError, validation_error
from shapecheck.forms import quote

if TYPE_CHECKING:
    from shapecheck.engine.compiler import CompileParams

Checker = Callable[[object], object]
Predicate = Callable[[object], bool]
Parser = Callable[[object], tuple[list[object], object]]


@dataclass(frozen=True, slots=True)
class Precondition:
    """Value test owned by ``schema`` with a lazily built failure form.

    ``expectation`` receives the offending value wrapped in ``forms.Value`` so
    the form renders it as data.
    """

    schema: object
    test: Callable[[object], object]
    expectation: Callable[[object], object]

    def holds(self, value: object) -> bool:
        try:
            return bool(self.test(value))
        except RecursionError:
            raise
        except Exception:  # noqa: BLE001
            return False

    def __call__(self, value: object) -> ErrorContainer | None:
        try:
            if self.test(value):
                return None
            reason = "not"
        except RecursionError:
            raise
        except Exception:  # noqa: BLE001
            reason = "throws?"
        return validation_error(self.schema, value, partial(self.expectation, quote(value)), reason)


def precondition(
    schema: object,
    test: Callable[[object], object],
    expectation: Callable[[object], object],
) -> Precondition:
    return Precondition(schema=schema, test=test, expectation=expectation)


def error_payload(payload: object, source: object) -> ErrorContainer:
    """Wrap an error payload built by ``source`` (an ``on_error`` or ``error_wrap``).

    ``None`` is rejected: at the top level it would read as "valid".
    """

    if payload is None:
        raise SchemaDefinitionError(
            f"{getattr(source, '__qualname__', source)!r} returned None as an error payload"
        )
    return ErrorContainer(payload)


@dataclass(frozen=True, slots=True)
class Deferred:
    """Indirection to a schema that is resolved on every check."""

    resolve: Callable[[], object]
    name: str


@dataclass(frozen=True, slots=True)
class Option:
    """One alternative of a variant spec.

    ``guard`` sees the raw input. An option without a guard always applies.
    ``error_wrap`` maps the selected schema's error payload to a new, non-None
    payload.
    """

    schema: object
    guard: Callable[[object], object] | None = None
    error_wrap: Callable[[object], object] | None = None


class ElementKind(StrEnum):
    """How many items a collection element descriptor consumes."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    REMAINING = "remaining"


@dataclass(frozen=True, slots=True)
class Element:
    """Collection element descriptor.

    ``parser(remaining)`` returns ``(consumed, rest)``: the consumed item(s),
    or a ready-made ``ErrorContainer`` for a missing item, and what is left of
    the collection.
    """

    kind: ElementKind
    schema: object
    parser: Parser


@runtime_checkable
class Spec(Protocol):
    """Compiled, checkable form of a schema."""

    def pre_predicate(self, value: object) -> bool: ...

    def subschemas(self) -> tuple[object, ...]: ...

    def checker(self, params: CompileParams) -> Checker: ...

    def predicate(self, params: CompileParams) -> Predicate: ...


__all__ = [
    "Checker",
    "Deferred",
    "Element",
    "ElementKind",
    "Option",
    "Parser",
    "Precondition",
    "Predicate",
    "Spec",
    "error_payload",
    "precondition",
]
