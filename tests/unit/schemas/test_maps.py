"""
shapecheck — unit tests for map schemas

File: tests/unit/schemas/test_maps.py
Last updated: 2026-10-19

What this test file should cover
- Required, optional and wildcard keys and their error markers.
- Construction-time rejection of duplicate keys and multiple wildcards.
- Walked values rebuilt through nested schemas.
"""

from __future__ import annotations

import pytest

from shapecheck import (
    DISALLOWED_KEY,
    MISSING_REQUIRED_KEY,
    Int,
    InvalidKey,
    Num,
    SchemaDefinitionError,
    Str,
    check,
    explain,
    map_schema,
    optional_key,
    render_form,
    required_key,
    walker,
)

FOO_BAR = {"foo": Str, "bar": [Num]}


def test_missing_required_key_is_reported() -> None:
    assert check(FOO_BAR, {"bar": [1, 2]}) == {"foo": MISSING_REQUIRED_KEY}


def test_wrong_value_reports_leaf_failure() -> None:
    error = check(FOO_BAR, {"foo": 1, "bar": []})

    assert isinstance(error, dict)
    assert list(error) == ["foo"]
    assert repr(error["foo"]) == "(not (string? 1))"


def test_undeclared_key_is_disallowed() -> None:
    assert check(FOO_BAR, {"foo": "x", "bar": [], "baz": 1}) == {"baz": DISALLOWED_KEY}


def test_valid_map_returns_none() -> None:
    assert check(FOO_BAR, {"foo": "x", "bar": [1, 2.5]}) is None


def test_non_mapping_fails_precondition() -> None:
    assert repr(check(FOO_BAR, [("foo", "x")])) == "(not (map? [('foo', 'x')]))"


def test_optional_key_may_be_absent_but_is_checked_when_present() -> None:
    schema = {optional_key("a"): Int, required_key("b"): Str}

    assert check(schema, {"b": "x"}) is None
    error = check(schema, {"a": "nope", "b": "x"})
    assert repr(error["a"]) == "(not (integer? 'nope'))"  # type: ignore[index]
    assert check(schema, {"a": 1}) == {"b": MISSING_REQUIRED_KEY}


def test_wildcard_checks_keys_and_values() -> None:
    schema = {Str: Int}

    assert check(schema, {"a": 1, "b": 2}) is None
    value_error = check(schema, {"a": "x"})
    assert repr(value_error["a"]) == "(not (integer? 'x'))"  # type: ignore[index]

    key_error = check(schema, {2: 3})
    assert isinstance(key_error[2], InvalidKey)  # type: ignore[index]
    assert repr(key_error[2]) == "(invalid-key (not (string? 2)))"  # type: ignore[index]


def test_explicit_keys_are_consumed_before_wildcard() -> None:
    schema = {"id": Int, Str: Str}

    assert check(schema, {"id": 1, "name": "x"}) is None
    assert repr(check(schema, {"id": "1"})["id"]) == "(not (integer? '1'))"  # type: ignore[index]


def test_type_keys_act_as_wildcards() -> None:
    assert check({str: int}, {"a": 1}) is None
    assert repr(check({str: int}, {1: 1})[1]) == "(invalid-key (not (instance? str 1)))"  # type: ignore[index]


def test_duplicate_explicit_keys_are_rejected() -> None:
    with pytest.raises(SchemaDefinitionError, match="more than once"):
        map_schema({"a": Int, required_key("a"): Str})


def test_two_wildcards_are_rejected() -> None:
    with pytest.raises(SchemaDefinitionError, match="at most one wildcard"):
        map_schema({Str: Int, int: Int})


def test_explain_renders_keys_and_schemas() -> None:
    schema = map_schema({"a": Int, optional_key("b"): [Str]})

    assert render_form(explain(schema)) == "{'a' Int, (optional-key 'b') [Str]}"


def test_walker_rebuilds_nested_sequences() -> None:
    walk = walker({"a": [Int]})

    assert walk({"a": (1, 2)}) == {"a": [1, 2]}
