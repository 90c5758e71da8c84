"""
shapecheck — error model.

File: src/shapecheck/errors.py
Last updated: 2026-10-19

Purpose
- Represent "valid" vs "invalid" results of a checker as plain data.
- Define the raised exception types for schema-definition faults and for
  ``validate``-style entry points.

What should be included in this file
- The error-as-data types returned by checkers (``ErrorContainer``,
  ``ValidationError``, markers, named/invalid-key/extra-elements wrappers).
- The exception hierarchy rooted at ``ShapecheckError``.
- ``error_issues`` flattening of nested errors into dotted-path issues.

Functional requirements
- ``None`` always means valid; any other value is an error payload.
- ``ErrorContainer`` distinguishes an error (even a ``None``-valued one) from
  a successfully walked value inside the engine.
- Errors nest structurally: maps of per-key errors, lists of per-position
  errors, named wrappers around inner errors.

Non-functional requirements
- Error explanations are computed lazily; the success path never builds them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from shapecheck.forms import Symbol, quote, render_form, symbol, value_repr


class ErrorMarker(StrEnum):
    """Leaf markers placed where a keyed entry is missing or not allowed."""

    MISSING_REQUIRED_KEY = "missing-required-key"
    DISALLOWED_KEY = "disallowed-key"

    def __repr__(self) -> str:
        return self.value


MISSING_REQUIRED_KEY: Final[ErrorMarker] = ErrorMarker.MISSING_REQUIRED_KEY
DISALLOWED_KEY: Final[ErrorMarker] = ErrorMarker.DISALLOWED_KEY


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


# Stand-in value for a required sequence position that has no item.
MISSING: Final[_Missing] = _Missing()


@dataclass(frozen=True, slots=True)
class ErrorContainer:
    """Marks ``error`` as a failed result, even when ``error`` is ``None``."""

    error: object


def make_error(error: object) -> ErrorContainer:
    return ErrorContainer(error)


def is_error(result: object) -> bool:
    return isinstance(result, ErrorContainer)


def error_val(result: object) -> object | None:
    """Return the error payload of ``result`` or ``None`` for a valid result."""

    if isinstance(result, ErrorContainer):
        return result.error
    return None


@dataclass(frozen=True, eq=False, slots=True)
class ValidationError:
    """A leaf failure: ``value`` did not satisfy ``schema``.

    ``expectation`` is a thunk producing a display form such as
    ``(integer? 'a')``; it is only evaluated when the error is inspected.
    """

    schema: object
    value: object
    expectation: Callable[[], object]
    fail_explanation: str | None = "not"

    def describe(self) -> object:
        form = self.expectation()
        if self.fail_explanation:
            return (symbol(self.fail_explanation), form)
        return form

    def __repr__(self) -> str:
        return render_form(self.describe())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (
            self.schema == other.schema
            and self.value == other.value
            and self.fail_explanation == other.fail_explanation
            and self.describe() == other.describe()
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True, slots=True)
class NamedError:
    """An inner error labelled by the ``named`` combinator."""

    name: object
    error: object

    def __repr__(self) -> str:
        return f"(named {self.error!r} {value_repr(self.name)})"


@dataclass(frozen=True, slots=True)
class InvalidKey:
    """A map key rejected by the wildcard key schema."""

    error: object

    def __repr__(self) -> str:
        return f"(invalid-key {self.error!r})"


@dataclass(frozen=True, slots=True)
class ExtraElements:
    """Trailing marker for sequence items no element descriptor consumed."""

    items: tuple[object, ...]

    def __repr__(self) -> str:
        return render_form((Symbol("has-extra-elts?"), [quote(item) for item in self.items]))


def validation_error(
    schema: object,
    value: object,
    expectation: Callable[[], object],
    fail_explanation: str | None = "not",
) -> ErrorContainer:
    return ErrorContainer(ValidationError(schema, value, expectation, fail_explanation))


class ShapecheckError(Exception):
    """Base class for every exception raised by shapecheck."""


class SchemaDefinitionError(ShapecheckError, ValueError):
    """Raised when a schema is malformed; never raised for invalid data."""


class UnboundReferenceError(SchemaDefinitionError):
    """Raised when a recursive reference is checked before being bound."""


@dataclass(frozen=True, slots=True)
class ErrorIssue:
    """Single flattened failure: location inside the value plus a message."""

    path: str
    message: str


class InvalidValueError(ShapecheckError, ValueError):
    """Raised by ``validate``/``validator`` when a value does not match."""

    def __init__(self, schema: object, value: object, error: object, *, context: str = "") -> None:
        self.schema = schema
        self.value = value
        self.error = error
        self.issues = error_issues(error)
        heading = context or "value does not match schema"
        if self.issues:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        else:
            rendered = f"- <root>: {error!r}"
        super().__init__(f"{heading}:\n{rendered}")


def error_issues(error: object) -> tuple[ErrorIssue, ...]:
    """Flatten a structured error into ``ErrorIssue`` rows with dotted paths."""

    issues: list[ErrorIssue] = []
    _collect_issues(error, "", issues)
    return tuple(issues)


def _collect_issues(error: object, path: str, issues: list[ErrorIssue]) -> None:
    if error is None:
        return
    if isinstance(error, Mapping):
        for key, item in error.items():
            _collect_issues(item, _join(path, key), issues)
        return
    if isinstance(error, Sequence) and not isinstance(error, (str, bytes)):
        for index, item in enumerate(error):
            if isinstance(item, ExtraElements):
                issues.append(ErrorIssue(path or "<root>", repr(item)))
            else:
                _collect_issues(item, f"{path}[{index}]", issues)
        return
    if isinstance(error, NamedError):
        _collect_issues(error.error, _join(path, error.name), issues)
        return
    issues.append(ErrorIssue(path or "<root>", repr(error)))


def _join(path: str, key: object) -> str:
    segment = key if isinstance(key, str) else repr(key)
    if not path:
        return segment
    return f"{path}.{segment}"


__all__ = [
    "DISALLOWED_KEY",
    "MISSING",
    "MISSING_REQUIRED_KEY",
    "ErrorContainer",
    "ErrorIssue",
    "ErrorMarker",
    "ExtraElements",
    "InvalidKey",
    "InvalidValueError",
    "NamedError",
    "SchemaDefinitionError",
    "ShapecheckError",
    "UnboundReferenceError",
    "ValidationError",
    "error_issues",
    "error_val",
    "is_error",
    "make_error",
    "validation_error",
]
