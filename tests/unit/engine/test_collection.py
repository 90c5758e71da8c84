"""
shapecheck — unit tests for the engine building blocks

File: tests/unit/engine/test_collection.py
Last updated: 2026-10-19

What this test file should cover
- Element descriptor ordering rules.
- Precondition results for holding, failing and raising tests.
- Identity memoisation of shared sub-schemas within one compile.
- Parsers hand back consumed items; error payloads of ``None`` are rejected.
"""

from __future__ import annotations

import pytest

from shapecheck import Int, SchemaDefinitionError, Str, check, maybe, spec
from shapecheck.engine.collection import (
    CollectionSpec,
    map_entry,
    optional_item,
    remaining_items,
    required_item,
    validate_element_order,
)
from shapecheck.engine.compiler import CompileParams, explain_of
from shapecheck.engine.core import Checker, Option, precondition
from shapecheck.engine.leaf import LeafSpec
from shapecheck.engine.variant import VariantSpec
from shapecheck.errors import ErrorContainer, ValidationError, make_error
from shapecheck.forms import symbol
from shapecheck.schemas.base import Schema


def _missing() -> ErrorContainer:
    return make_error("missing")


def test_element_order_accepts_required_optional_remaining() -> None:
    validate_element_order(
        (required_item(Int, _missing), optional_item(Int), remaining_items(Int))
    )


@pytest.mark.parametrize(
    "elements",
    [
        (optional_item(Int), required_item(Int, _missing)),
        (remaining_items(Int), optional_item(Int)),
        (remaining_items(Int), remaining_items(Int)),
    ],
)
def test_element_order_rejects_bad_layouts(elements: tuple[object, ...]) -> None:
    with pytest.raises(SchemaDefinitionError):
        validate_element_order(elements)  # type: ignore[arg-type]


def test_precondition_results() -> None:
    def explode(value: object) -> bool:
        raise RuntimeError("boom")

    holds = precondition(Int, lambda value: True, lambda value: (symbol("x?"), value))
    fails = precondition(Int, lambda value: False, lambda value: (symbol("x?"), value))
    raises = precondition(Int, explode, lambda value: (symbol("x?"), value))

    assert holds(1) is None
    failure = fails(1)
    assert isinstance(failure, ErrorContainer)
    assert isinstance(failure.error, ValidationError)
    assert repr(failure.error) == "(not (x? 1))"
    assert repr(raises(1).error) == "(throws? (x? 1))"  # type: ignore[union-attr]
    assert raises.holds(1) is False


def test_shared_subschemas_compile_once_per_compile() -> None:
    params = CompileParams()

    assert params.compile(Str) is params.compile(Str)
    assert params.compile_predicate(Int) is params.compile_predicate(Int)
    assert CompileParams().compile(Str) is not params.compile(Str)


def test_walked_mode_is_threaded_through_params() -> None:
    assert CompileParams(return_walked=True).compile([Int])((1, 2)) == [1, 2]
    value = (1, 2)
    assert CompileParams().compile([Int])(value) is value


def test_subschemas_list_direct_children() -> None:
    assert spec(maybe(Int)).subschemas()[1] is Int
    assert spec(Int).subschemas() == ()


def test_precondition_lets_recursion_errors_through() -> None:
    def overflow(value: object) -> bool:
        raise RecursionError("maximum recursion depth exceeded")

    guarded = precondition(Int, overflow, lambda value: (symbol("x?"), value))

    with pytest.raises(RecursionError):
        guarded(1)
    with pytest.raises(RecursionError):
        guarded.holds(1)


def test_parsers_return_consumed_items_and_the_rest() -> None:
    assert required_item(Int, _missing).parser((1, 2)) == ([1], (2,))
    consumed, rest = required_item(Int, _missing).parser(())
    assert isinstance(consumed[0], ErrorContainer)
    assert rest == ()
    assert optional_item(Int).parser(()) == ([], ())
    assert remaining_items(Int).parser((1, 2)) == ([1, 2], ())
    entries = {"a": 1, "b": 2}
    assert map_entry("a", Int, required=False).parser(entries) == ([("a", 1)], {"b": 2})
    assert map_entry("z", Int, required=False).parser({"b": 2}) == ([], {"b": 2})


class _ForgetfulList(Schema):
    def spec(self) -> CollectionSpec:
        return CollectionSpec(
            pre=precondition(self, lambda value: isinstance(value, list), lambda value: value),
            unpack=tuple,
            constructor=list,
            elements=(remaining_items(Int),),
            on_error=lambda value, results, remaining: None,
        )

    def explain(self) -> object:
        return symbol("forgetful-list")


class _SilencedOption(Schema):
    def spec(self) -> VariantSpec:
        return VariantSpec(self, (Option(Int, error_wrap=lambda error: None),))

    def explain(self) -> object:
        return (symbol("silenced"), explain_of(Int))


class _NoneErrorLeaf(Schema):
    def spec(self) -> LeafSpec:
        return _NoneErrorSpec(precondition(self, lambda value: True, lambda value: value))

    def explain(self) -> object:
        return symbol("none-error")


class _NoneErrorSpec(LeafSpec):
    __slots__ = ()

    def checker(self, params: CompileParams) -> Checker:
        return lambda value: ErrorContainer(None)


@pytest.mark.parametrize("schema", [_ForgetfulList(), _SilencedOption(), _NoneErrorLeaf()])
def test_none_error_payload_is_a_definition_error(schema: Schema) -> None:
    with pytest.raises(SchemaDefinitionError, match="None"):
        check(schema, ["x"])


def test_collection_without_errors_never_calls_on_error() -> None:
    assert check(_ForgetfulList(), [1, 2]) is None
