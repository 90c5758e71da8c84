"""
shapecheck — recursive schemas.

File: src/shapecheck/schemas/recursion.py
Last updated: 2026-10-19

Purpose
- Support self- and mutually-recursive schemas through a dereferenceable
  handle (``SchemaRef`` or any ``Cell``) that is read on every check.

What should be included in this file
- ``Cell``, ``SchemaRef`` and the ``Recursive`` schema.

Functional requirements
- Rebinding a reference is observed by later checks of schemas that were
  compiled before the rebind.
- ``explain`` never follows the reference, so recursive explanations are
  finite.
- Checking through an unbound reference raises ``UnboundReferenceError``.

Non-functional requirements
- Checking is recursive in Python. A map nesting a sequence of recursive
  references costs four frames per level, so the default recursion limit of
  1000 supports about 200 levels. Deeper data raises ``RecursionError`` (never
  a data error); raise ``sys.setrecursionlimit`` for deeper documents.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, Protocol, TypeVar

from shapecheck.engine.core import Deferred, Option
from shapecheck.engine.variant import VariantSpec
from shapecheck.errors import UnboundReferenceError
from shapecheck.forms import symbol
from shapecheck.schemas.base import Schema

T = TypeVar("T")

_UNBOUND: Final[object] = object()


class Dereferenceable(Protocol):
    def deref(self) -> object: ...


class Cell(Generic[T]):
    """Small thread-safe mutable reference."""

    __slots__ = ("__weakref__", "_lock", "_value")

    def __init__(self, value: T) -> None:
        self._lock = threading.Lock()
        self._value = value

    def deref(self) -> T:
        return self._value

    def reset(self, value: T) -> T:
        with self._lock:
            self._value = value
        return value

    def swap(self, update: Callable[[T], T]) -> T:
        with self._lock:
            self._value = update(self._value)
            return self._value

    def __repr__(self) -> str:
        return f"Cell({self._value!r})"


class SchemaRef:
    """Named forward declaration of a schema, bound later with ``bind``."""

    __slots__ = ("__weakref__", "_cell", "name")

    def __init__(self, name: str, schema: object = _UNBOUND) -> None:
        self.name = name
        self._cell: Cell[object] = Cell(schema)

    @property
    def is_bound(self) -> bool:
        return self._cell.deref() is not _UNBOUND

    def bind(self, schema: object) -> SchemaRef:
        self._cell.reset(schema)
        return self

    def deref(self) -> object:
        schema = self._cell.deref()
        if schema is _UNBOUND:
            raise UnboundReferenceError(f"schema reference {self.name!r} is not bound")
        return schema

    def __repr__(self) -> str:
        state = "bound" if self.is_bound else "unbound"
        return f"SchemaRef({self.name!r}, {state})"


@dataclass(frozen=True, eq=False)
class Recursive(Schema):
    """Defers to whatever schema ``ref`` currently holds."""

    ref: Dereferenceable

    def spec(self) -> VariantSpec:
        return VariantSpec(self, (Option(Deferred(self.ref.deref, self.ref_name)),))

    def explain(self) -> object:
        return (symbol("recursive"), symbol(self.ref_name))

    @property
    def ref_name(self) -> str:
        name = getattr(self.ref, "name", None)
        if isinstance(name, str):
            return name
        return type(self.ref).__name__.lower()


def recursive(ref: Dereferenceable) -> Recursive:
    return Recursive(ref)


__all__ = ["Cell", "Dereferenceable", "Recursive", "SchemaRef", "recursive"]
