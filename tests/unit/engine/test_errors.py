"""
shapecheck — unit tests for the error model

File: tests/unit/engine/test_errors.py
Last updated: 2026-10-19

What this test file should cover
- Display forms of error values.
- Flattening nested errors into dotted-path issues.
- The ``InvalidValueError`` message layout.
"""

from __future__ import annotations

from shapecheck import (
    DISALLOWED_KEY,
    MISSING_REQUIRED_KEY,
    ErrorIssue,
    ExtraElements,
    InvalidValueError,
    NamedError,
    Str,
    error_issues,
    error_val,
    is_error,
    make_error,
    render_form,
)
from shapecheck.forms import quote, symbol


def test_markers_render_bare() -> None:
    assert repr(MISSING_REQUIRED_KEY) == "missing-required-key"
    assert repr({"a": DISALLOWED_KEY}) == "{'a': disallowed-key}"
    assert MISSING_REQUIRED_KEY == "missing-required-key"


def test_error_container_helpers() -> None:
    boxed = make_error(None)

    assert is_error(boxed)
    assert error_val(boxed) is None
    assert not is_error(3)
    assert error_val(3) is None


def test_render_form_nests_tuples_lists_and_maps() -> None:
    form = (symbol("not"), (symbol("x?"), ["a", 1], {"k": symbol("Int")}))

    assert render_form(form) == "(not (x? ['a' 1] {'k' Int}))"


def test_quoted_values_render_as_data() -> None:
    form = (symbol("not"), (symbol("x?"), quote((1, "a")), quote({"k": [1]})))

    assert render_form(form) == "(not (x? (1, 'a') {'k': [1]}))"
    assert quote(quote(1)) == quote(1)
    assert repr(ExtraElements(((1, 2), {"a": 1}))) == "(has-extra-elts? [(1, 2) {'a': 1}])"


def test_long_values_are_abbreviated() -> None:
    rendered = render_form((symbol("not"), (symbol("x?"), "a" * 500)))

    assert len(rendered) < 100
    assert "..." in rendered


def test_error_issues_use_dotted_paths_and_indices() -> None:
    error = {
        "user": {"name": MISSING_REQUIRED_KEY, "tags": [None, "bad", ExtraElements((3,))]},
        "extra": DISALLOWED_KEY,
        "age": NamedError("years", "nope"),
    }

    assert error_issues(error) == (
        ErrorIssue("user.name", "missing-required-key"),
        ErrorIssue("user.tags[1]", "'bad'"),
        ErrorIssue("user.tags", "(has-extra-elts? [3])"),
        ErrorIssue("extra", "disallowed-key"),
        ErrorIssue("age.years", "'nope'"),
    )


def test_invalid_value_error_message_lists_issues() -> None:
    exc = InvalidValueError(Str, {"a": 1}, {"a": MISSING_REQUIRED_KEY, "b": DISALLOWED_KEY})

    assert str(exc) == (
        "value does not match schema:\n- a: missing-required-key\n- b: disallowed-key"
    )
    assert isinstance(exc, ValueError)
    assert exc.value == {"a": 1}


def test_invalid_value_error_for_leaf_error_uses_root_path() -> None:
    exc = InvalidValueError(Str, 1, "oops", context="bad input")

    assert str(exc) == "bad input:\n- <root>: 'oops'"
