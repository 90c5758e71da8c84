"""
shapecheck — unit tests for recursive schemas

File: tests/unit/schemas/test_recursion.py
Last updated: 2026-10-19

What this test file should cover
- Self-recursive schemas through ``SchemaRef`` and ``Cell`` handles.
- Rebinding observed by checkers compiled earlier.
- Unbound references raise instead of reporting a data error.
- Finite explanations.
- Nesting a couple of hundred levels deep, and a loud RecursionError past the
  interpreter stack.
"""

from __future__ import annotations

import pytest

from shapecheck import (
    Cell,
    Int,
    SchemaRef,
    Str,
    UnboundReferenceError,
    check,
    checker,
    explain,
    maybe,
    pre_predicate,
    recursive,
    render_form,
)


def _linked_list() -> object:
    ref = SchemaRef("node")
    node = {"value": Int, "next": maybe(recursive(ref))}
    ref.bind(node)
    return node


def test_recursive_schema_checks_nested_values() -> None:
    node = _linked_list()

    assert check(node, {"value": 1, "next": {"value": 2, "next": None}}) is None
    error = check(node, {"value": 1, "next": {"value": "x", "next": None}})
    assert repr(error["next"]["value"]) == "(not (integer? 'x'))"  # type: ignore[index]


def test_rebinding_is_observed_without_recompiling() -> None:
    ref = SchemaRef("slot", Int)
    check_value = checker(recursive(ref))

    assert check_value(1) is None
    ref.bind(Str)
    assert repr(check_value(1)) == "(not (string? 1))"
    assert check_value("a") is None


def test_cell_handles_work_as_references() -> None:
    cell: Cell[object] = Cell(Int)
    schema = recursive(cell)

    assert check(schema, 1) is None
    cell.reset(Str)
    assert check(schema, "a") is None


def test_unbound_reference_raises() -> None:
    ref = SchemaRef("later")

    assert not ref.is_bound
    with pytest.raises(UnboundReferenceError, match="later"):
        check(recursive(ref), 1)


def test_pre_predicate_follows_the_reference() -> None:
    ref = SchemaRef("r", [Int])

    assert pre_predicate(recursive(ref))([1]) is True
    assert pre_predicate(recursive(ref))("s") is False


def test_explanation_does_not_follow_the_reference() -> None:
    node = _linked_list()

    assert render_form(explain(node)) == "{'value' Int, 'next' (maybe (recursive node))}"
    assert repr(SchemaRef("x")) == "SchemaRef('x', unbound)"


def _tree() -> object:
    ref = SchemaRef("tree")
    tree = {"value": Int, "children": [recursive(ref)]}
    ref.bind(tree)
    return tree


def _nested(depth: int, leaf: object) -> dict[str, object]:
    node: dict[str, object] = {"value": leaf, "children": []}
    for level in range(depth):
        node = {"value": level, "children": [node]}
    return node


def test_recursive_schema_accepts_deep_nesting() -> None:
    assert check(_tree(), _nested(200, 0)) is None


def test_deep_bad_leaf_is_reported_at_its_path() -> None:
    error = check(_tree(), _nested(200, "x"))

    for _ in range(200):
        assert list(error) == ["children"]  # type: ignore[call-overload]
        error = error["children"][0]  # type: ignore[index]
    assert repr(error["value"]) == "(not (integer? 'x'))"  # type: ignore[index]


def test_exhausting_the_stack_raises_instead_of_reporting_bad_data() -> None:
    with pytest.raises(RecursionError):
        check(_tree(), _nested(5000, 0))
