"""
shapecheck — property tests for checkers and predicates

File: tests/unit/checking/test_properties.py
Last updated: 2026-10-19

What this test file should cover
- The compiled predicate agrees with "the checker found no error".
- The pre-predicate never rejects a value the predicate accepts.
- Checking is deterministic and never mutates its input.
"""

from __future__ import annotations

import copy

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from shapecheck import (
    Int,
    Num,
    Str,
    check,
    cond_pre,
    either,
    maybe,
    one,
    optional,
    optional_key,
    pre_predicate,
    predicate,
)

SCHEMAS: tuple[object, ...] = (
    Int,
    maybe(Str),
    [Int],
    [one(Str, "name"), optional(Int, "age")],
    {"a": Int, optional_key("b"): [Str]},
    {Str: Num},
    cond_pre({"a": Int}, [Int], Str),
    either(Int, [Str]),
)

_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-5, max_value=5),
    st.floats(allow_nan=False, allow_infinity=False, width=16),
    st.sampled_from(["", "a", "b", "name"]),
)

VALUES = st.recursive(
    _scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.tuples(children, children),
        st.dictionaries(st.sampled_from(["a", "b", "c", 1]), children, max_size=3),
    ),
    max_leaves=8,
)


@pytest.mark.parametrize("schema", SCHEMAS)
@settings(max_examples=40, deadline=None)
@given(value=VALUES)
def test_predicate_agrees_with_checker(schema: object, value: object) -> None:
    assert predicate(schema)(value) == (check(schema, value) is None)


@pytest.mark.parametrize("schema", SCHEMAS)
@settings(max_examples=40, deadline=None)
@given(value=VALUES)
def test_pre_predicate_is_weaker_than_predicate(schema: object, value: object) -> None:
    if predicate(schema)(value):
        assert pre_predicate(schema)(value)


@pytest.mark.parametrize("schema", SCHEMAS)
@settings(max_examples=20, deadline=None)
@given(value=VALUES)
def test_checking_is_deterministic_and_pure(schema: object, value: object) -> None:
    snapshot = copy.deepcopy(value)

    first = check(schema, value)
    second = check(schema, value)

    assert repr(first) == repr(second)
    assert value == snapshot
