"""
shapecheck — alternation schemas built on the variant spec.

File: src/shapecheck/schemas/alternation.py
Last updated: 2026-10-19

Purpose
- ``maybe``, ``named``, ``conditional``, ``cond_pre``, ``either``, ``both``
  and ``constrained``.

What should be included in this file
- ``maybe``, ``named``, ``conditional``/``ELSE``, ``cond_pre``, ``either``,
  ``both`` and ``constrained``.

Functional requirements
- ``conditional`` guards are user predicates applied to the raw value in the
  order given; ``ELSE`` is only allowed as the final guard.
- ``cond_pre`` guards are the candidates' own pre-predicates; when two of them
  overlap the first declared candidate wins.
- ``either`` fully checks each candidate in order and reports the last
  candidate's error when none match. It is the only backtracking policy and
  is kept for compatibility; prefer ``cond_pre`` or ``conditional``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from shapecheck.engine.compiler import compile_predicate, explain_of, pre_predicate_of
from shapecheck.engine.core import Option, precondition
from shapecheck.engine.variant import VariantSpec
from shapecheck.errors import NamedError, SchemaDefinitionError
from shapecheck.forms import Value, symbol
from shapecheck.schemas.base import Schema
from shapecheck.schemas.leaves import EqSchema

_NONE_SCHEMA = EqSchema(None)


class _Else:
    """Catch-all guard for the last ``conditional`` branch."""

    __slots__ = ()

    def __call__(self, value: object) -> bool:
        return True

    def __repr__(self) -> str:
        return "ELSE"


ELSE = _Else()


def _is_none(value: object) -> bool:
    return value is None


@dataclass(frozen=True)
class Maybe(Schema):
    """``None`` or a value matching ``schema``."""

    schema: object

    def spec(self) -> VariantSpec:
        return VariantSpec(
            self,
            (Option(_NONE_SCHEMA, guard=_is_none), Option(self.schema)),
        )

    def explain(self) -> object:
        return (symbol("maybe"), explain_of(self.schema))


@dataclass(frozen=True)
class Named(Schema):
    """Labels errors produced by ``schema`` with ``name``."""

    schema: object
    name: object

    def spec(self) -> VariantSpec:
        return VariantSpec(self, (Option(self.schema, error_wrap=partial(NamedError, self.name)),))

    def explain(self) -> object:
        return (symbol("named"), explain_of(self.schema), self.name)


@dataclass(frozen=True)
class Conditional(Schema):
    branches: tuple[tuple[Callable[[object], object], object], ...]
    error_symbol: str | None = None

    def __post_init__(self) -> None:
        if not self.branches:
            raise SchemaDefinitionError("conditional needs at least one branch")
        for index, (guard, _) in enumerate(self.branches):
            if not callable(guard):
                raise SchemaDefinitionError(f"conditional guard {index} is not callable: {guard!r}")
            if guard is ELSE and index != len(self.branches) - 1:
                raise SchemaDefinitionError("ELSE is only allowed as the last conditional branch")

    def spec(self) -> VariantSpec:
        options = tuple(
            Option(schema, guard=None if guard is ELSE else guard) for guard, schema in self.branches
        )
        if self.error_symbol is None:
            return VariantSpec(self, options)
        name = symbol(self.error_symbol)
        return VariantSpec(self, options, no_match_form=lambda value: (name, value))

    def explain(self) -> object:
        parts: list[object] = [symbol("conditional")]
        for guard, schema in self.branches:
            parts.append(_guard_symbol(guard))
            parts.append(explain_of(schema))
        if self.error_symbol is not None:
            parts.append(symbol(self.error_symbol))
        return tuple(parts)


@dataclass(frozen=True)
class CondPre(Schema):
    schemas: tuple[object, ...]

    def __post_init__(self) -> None:
        if not self.schemas:
            raise SchemaDefinitionError("cond_pre needs at least one schema")

    def spec(self) -> VariantSpec:
        options = tuple(Option(schema, guard=pre_predicate_of(schema)) for schema in self.schemas)
        return VariantSpec(self, options, exclusive=True)

    def explain(self) -> object:
        return (symbol("cond-pre"), *(explain_of(schema) for schema in self.schemas))


@dataclass(frozen=True)
class Either(Schema):
    schemas: tuple[object, ...]

    def __post_init__(self) -> None:
        if not self.schemas:
            raise SchemaDefinitionError("either needs at least one schema")

    def spec(self) -> VariantSpec:
        *guarded, last = self.schemas
        options = [Option(schema, guard=compile_predicate(schema)) for schema in guarded]
        options.append(Option(last))
        return VariantSpec(self, tuple(options))

    def explain(self) -> object:
        return (symbol("either"), *(explain_of(schema) for schema in self.schemas))


@dataclass(frozen=True)
class Both(Schema):
    """Value must match every schema; the first one is checked in full."""

    schemas: tuple[object, ...]

    def __post_init__(self) -> None:
        if not self.schemas:
            raise SchemaDefinitionError("both needs at least one schema")

    def spec(self) -> VariantSpec:
        first, *rest = self.schemas
        if not rest:
            return VariantSpec(self, (Option(first),))
        tests = [(schema, compile_predicate(schema)) for schema in rest]

        def all_match(value: object) -> bool:
            return all(test(value) for _, test in tests)

        def first_mismatch(quoted: Value) -> object:
            for schema, test in tests:
                if not test(quoted.value):
                    return (explain_of(schema), quoted)
            return (symbol("both"), quoted)

        return VariantSpec(
            self,
            (Option(first),),
            post=precondition(self, all_match, first_mismatch),
        )

    def explain(self) -> object:
        return (symbol("both"), *(explain_of(schema) for schema in self.schemas))


@dataclass(frozen=True)
class Constrained(Schema):
    """``schema`` plus a post-condition checked only once ``schema`` matched."""

    schema: object
    post: Callable[[object], object]
    post_name: str

    def spec(self) -> VariantSpec:
        name = symbol(self.post_name)
        return VariantSpec(
            self,
            (Option(self.schema),),
            post=precondition(self, self.post, lambda value: (name, value)),
        )

    def explain(self) -> object:
        return (symbol("constrained"), explain_of(self.schema), symbol(self.post_name))


def _guard_symbol(guard: Callable[[object], object]) -> object:
    if guard is ELSE:
        return symbol("else")
    return symbol(getattr(guard, "__name__", repr(guard)))


def maybe(schema: object) -> Maybe:
    return Maybe(schema)


def named(schema: object, name: object) -> Named:
    return Named(schema, name)


def conditional(*preds_and_schemas: object, error_symbol: str | None = None) -> Conditional:
    """Build ``conditional(pred1, schema1, pred2, schema2, ...)``."""

    if len(preds_and_schemas) % 2:
        raise SchemaDefinitionError(
            "conditional expects an even number of arguments "
            f"(pred/schema pairs), got {len(preds_and_schemas)}"
        )
    pairs = tuple(
        (preds_and_schemas[index], preds_and_schemas[index + 1])
        for index in range(0, len(preds_and_schemas), 2)
    )
    return Conditional(pairs, error_symbol)  # type: ignore[arg-type]


def cond_pre(*schemas: object) -> CondPre:
    return CondPre(tuple(schemas))


def either(*schemas: object) -> Either:
    return Either(tuple(schemas))


def both(*schemas: object) -> Both:
    return Both(tuple(schemas))


def constrained(
    schema: object,
    post: Callable[[object], object],
    post_name: str | None = None,
) -> Constrained:
    if not callable(post):
        raise SchemaDefinitionError(f"constrained post-condition is not callable: {post!r}")
    label = post_name if post_name is not None else getattr(post, "__name__", repr(post))
    return Constrained(schema, post, label)


__all__ = [
    "ELSE",
    "Both",
    "CondPre",
    "Conditional",
    "Constrained",
    "Either",
    "Maybe",
    "Named",
    "both",
    "cond_pre",
    "conditional",
    "constrained",
    "either",
    "maybe",
    "named",
]
