"""
shapecheck — unit tests for record and function schemas

File: tests/unit/schemas/test_records.py
Last updated: 2026-10-19

What this test file should cover
- Records over dataclasses and plain objects, field errors and rebuilding.
- Function schemas: callable check and ``(=> ...)`` explanation.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from shapecheck import (
    DISALLOWED_KEY,
    MISSING_REQUIRED_KEY,
    Int,
    SchemaDefinitionError,
    Str,
    check,
    explain,
    fn_schema,
    make_fn_schema,
    record,
    render_form,
    walker,
)


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class Account:
    def __init__(self, owner: str, balance: int) -> None:
        self.owner = owner
        self.balance = balance


POINT = record(Point, {"x": Int, "y": Int})


def test_record_checks_each_field() -> None:
    assert check(POINT, Point(1, 2)) is None
    error = check(POINT, Point(1, "a"))  # type: ignore[arg-type]
    assert list(error) == ["y"]  # type: ignore[call-overload]
    assert repr(error["y"]) == "(not (integer? 'a'))"  # type: ignore[index]


def test_record_requires_an_instance() -> None:
    assert repr(check(POINT, (1, 2))) == "(not (instance? Point (1, 2)))"


def test_record_walker_rebuilds_the_instance() -> None:
    walked = walker(POINT)(Point(3, 4))

    assert walked == Point(3, 4)


def test_plain_object_fields_come_from_vars() -> None:
    schema = record(Account, {"owner": Str})

    assert check(schema, Account("a", 1)) == {"balance": DISALLOWED_KEY}
    assert check(record(Account, {"owner": Str, "balance": Int, "id": Int}), Account("a", 1)) == {
        "id": MISSING_REQUIRED_KEY
    }


def test_record_rejects_non_class() -> None:
    with pytest.raises(SchemaDefinitionError):
        record("Point", {"x": Int})  # type: ignore[arg-type]


def test_record_explanation() -> None:
    assert render_form(explain(POINT)) == "(record Point {'x' Int, 'y' Int})"


def test_fn_schema_checks_callability_and_explains_arities() -> None:
    schema = make_fn_schema(Int, [[Str], [Str, Int]])

    assert check(schema, len) is None
    assert repr(check(schema, 1)) == "(not (ifn? 1))"
    assert render_form(explain(schema)) == "(=> Int [Str] [Str Int])"
    assert render_form(explain(fn_schema(Str, Int, Int))) == "(=> Str [Int Int])"


def test_fn_schema_needs_an_arity() -> None:
    with pytest.raises(SchemaDefinitionError):
        make_fn_schema(Int, [])
