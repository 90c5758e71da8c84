"""Function schemas: callables described by an output and input arities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from shapecheck.engine.compiler import explain_of
from shapecheck.engine.core import precondition
from shapecheck.engine.leaf import LeafSpec
from shapecheck.errors import SchemaDefinitionError
from shapecheck.forms import symbol
from shapecheck.schemas.base import Schema


@dataclass(frozen=True)
class FnSchema(Schema):
    """A callable returning ``output`` for any of the ``inputs`` arities.

    Checking a value only verifies that it is callable; argument and return
    values are checked by ``shapecheck.instrument.validated``.
    """

    output: object
    inputs: tuple[tuple[object, ...], ...]

    def __post_init__(self) -> None:
        if not self.inputs:
            raise SchemaDefinitionError("function schema needs at least one input arity")

    def spec(self) -> LeafSpec:
        return LeafSpec(precondition(self, callable, lambda value: (symbol("ifn?"), value)))

    def explain(self) -> object:
        arities = [[explain_of(schema) for schema in arity] for arity in self.inputs]
        return (symbol("=>"), explain_of(self.output), *arities)


def make_fn_schema(output: object, inputs: Sequence[Sequence[object]]) -> FnSchema:
    return FnSchema(output, tuple(tuple(arity) for arity in inputs))


def fn_schema(output: object, *inputs: object) -> FnSchema:
    """Single-arity shorthand: ``fn_schema(Int, Str, Str)``."""

    return FnSchema(output, (tuple(inputs),))


__all__ = ["FnSchema", "fn_schema", "make_fn_schema"]
