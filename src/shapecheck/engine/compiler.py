"""
shapecheck — checker and predicate compiler.

File: src/shapecheck/engine/compiler.py
Last updated: 2026-10-19

Purpose
- Turn a schema into its Spec (through the compilation cache) and recursively
  into a checker closure or a boolean predicate closing over sub-checkers.

What should be included in this file
- ``CompileParams`` with the per-compile identity memo.
- Literal coercion hook and the ``compile_checker``/``compile_predicate``
  helpers.

Functional requirements
- Sub-schemas shared inside one compile are compiled once (identity memo).
- ``Deferred`` options are resolved on every call, so rebinding a recursive
  reference is observed without recompiling callers.
- In walked mode collection constructors rebuild the value; otherwise the
  original value is returned on success.

Non-functional requirements
- The identity memo is only an optimisation: concurrent population may
  compile the same sub-schema twice and keep either result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shapecheck.cache import DEFAULT_CACHE
from shapecheck.config import DEFAULT_CONTEXT, CheckContext
from shapecheck.engine.core import Checker, Deferred, Predicate, error_payload
from shapecheck.errors import ErrorContainer
from shapecheck.schemas.base import Schema

if TYPE_CHECKING:
    from collections.abc import Callable

    from shapecheck.engine.core import Spec


class CompileParams:
    """State threaded through one top-level compile."""

    __slots__ = ("_checkers", "_predicates", "context", "return_walked")

    def __init__(self, *, return_walked: bool = False, context: CheckContext | None = None) -> None:
        self.return_walked = return_walked
        self.context = context if context is not None else DEFAULT_CONTEXT
        self._checkers: dict[int, tuple[object, Checker]] = {}
        self._predicates: dict[int, tuple[object, Predicate]] = {}

    def compile(self, schema: object) -> Checker:
        entry = self._checkers.get(id(schema))
        if entry is not None and entry[0] is schema:
            return entry[1]
        checker = spec_of(schema).checker(self)
        self._checkers[id(schema)] = (schema, checker)
        return checker

    def compile_predicate(self, schema: object) -> Predicate:
        entry = self._predicates.get(id(schema))
        if entry is not None and entry[0] is schema:
            return entry[1]
        test = spec_of(schema).predicate(self)
        self._predicates[id(schema)] = (schema, test)
        return test

    def sub_checker(
        self,
        schema: object,
        error_wrap: Callable[[object], object] | None = None,
    ) -> Checker:
        if isinstance(schema, Deferred):
            base = self._deferred_checker(schema)
        else:
            base = self.compile(schema)
        if error_wrap is None:
            return base

        def wrapped(value: object) -> object:
            result = base(value)
            if isinstance(result, ErrorContainer):
                return error_payload(error_wrap(result.error), error_wrap)
            return result

        return wrapped

    def sub_predicate(self, schema: object) -> Predicate:
        if isinstance(schema, Deferred):
            resolve = schema.resolve

            def deferred_test(value: object) -> bool:
                return self.compile_predicate(resolve())(value)

            return deferred_test
        return self.compile_predicate(schema)

    def _deferred_checker(self, deferred: Deferred) -> Checker:
        resolve = deferred.resolve

        def deferred_check(value: object) -> object:
            return self.compile(resolve())(value)

        return deferred_check


def as_schema(value: object) -> Schema:
    """Return ``value`` itself when it is a Schema, else its literal coercion."""

    if isinstance(value, Schema):
        return value
    from shapecheck.schemas.coerce import coerce_literal

    return coerce_literal(value)


def spec_of(schema: object) -> Spec:
    return DEFAULT_CACHE.spec(as_schema(schema))


def explain_of(schema: object) -> object:
    return DEFAULT_CACHE.explain(as_schema(schema))


def pre_predicate_of(schema: object) -> Predicate:
    return spec_of(schema).pre_predicate


def compile_checker(
    schema: object,
    *,
    return_walked: bool = False,
    context: CheckContext | None = None,
) -> Checker:
    return CompileParams(return_walked=return_walked, context=context).compile(schema)


def compile_predicate(schema: object, *, context: CheckContext | None = None) -> Predicate:
    return CompileParams(context=context).compile_predicate(schema)


__all__ = [
    "CompileParams",
    "as_schema",
    "compile_checker",
    "compile_predicate",
    "explain_of",
    "pre_predicate_of",
    "spec_of",
]
