"""
shapecheck — public checking entry points.

File: src/shapecheck/checking.py
Last updated: 2026-10-19

Purpose
- Compile schemas (or schema literals) into checkers, walkers, predicates and
  validators.

What should be included in this file
- Public entry points built on ``engine.compiler``.
- Logging of validation failures before ``InvalidValueError`` is raised.

Functional requirements
- A checker returns ``None`` for a valid value, otherwise the error payload.
- ``validate`` returns the original value unchanged, or raises
  ``InvalidValueError`` carrying the error and its flattened issues.
- ``walker`` returns the rebuilt value, or an ``ErrorContainer``.
- Schema definition faults surface as ``SchemaDefinitionError`` when the
  entry point is built, never as a check result. The one exception is an
  error payload of ``None``, which can only be detected while checking.

Non-functional requirements
- Compiled functions are safe to call from several threads.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NoReturn

import structlog

from shapecheck.config import DEFAULT_CONTEXT, CheckContext
from shapecheck.engine.compiler import (
    as_schema,
    compile_checker,
    compile_predicate,
    explain_of,
    pre_predicate_of,
    spec_of,
)
from shapecheck.engine.core import Checker, Predicate, Spec
from shapecheck.errors import ErrorContainer, InvalidValueError, SchemaDefinitionError
from shapecheck.forms import render_form

logger = structlog.get_logger(__name__)


def spec(schema: object) -> Spec:
    return spec_of(schema)


def explain(schema: object) -> object:
    """Return the display form describing ``schema``."""

    return explain_of(schema)


def checker(schema: object, *, context: CheckContext | None = None) -> Callable[[object], object]:
    walk = compile_checker(as_schema(schema), context=context)

    def check_value(value: object) -> object:
        result = walk(value)
        if isinstance(result, ErrorContainer):
            if result.error is None:
                raise SchemaDefinitionError(
                    f"{render_form(explain_of(schema))} reported an error with a None payload"
                )
            return result.error
        return None

    return check_value


def check(schema: object, value: object, *, context: CheckContext | None = None) -> object:
    """Return ``None`` when ``value`` matches ``schema``, else the error."""

    return checker(schema, context=context)(value)


def walker(schema: object, *, context: CheckContext | None = None) -> Checker:
    return compile_checker(as_schema(schema), return_walked=True, context=context)


def predicate(schema: object, *, context: CheckContext | None = None) -> Predicate:
    return compile_predicate(as_schema(schema), context=context)


def pre_predicate(schema: object) -> Predicate:
    return pre_predicate_of(schema)


def validator(
    schema: object,
    *,
    context: CheckContext | None = None,
    log: Any | None = None,
) -> Callable[[object], object]:
    """Return a function that returns its argument or raises ``InvalidValueError``."""

    resolved = as_schema(schema)
    active = context if context is not None else DEFAULT_CONTEXT
    check_value = checker(resolved, context=active)
    events = log if log is not None else logger

    def validate_value(value: object) -> object:
        error = check_value(value)
        if error is None:
            return value
        raise_invalid(resolved, value, error, logger=events)

    return validate_value


def validate(schema: object, value: object, *, context: CheckContext | None = None) -> object:
    return validator(schema, context=context)(value)


def raise_invalid(
    schema: object,
    value: object,
    error: object,
    *,
    context: str = "",
    logger: Any,
) -> NoReturn:
    exc = InvalidValueError(schema, value, error, context=context)
    logger.debug(
        "shapecheck_validation_failed",
        schema=render_form(explain_of(schema)),
        issue_count=len(exc.issues),
        context=context or None,
    )
    raise exc


__all__ = [
    "check",
    "checker",
    "explain",
    "pre_predicate",
    "predicate",
    "raise_invalid",
    "spec",
    "validate",
    "validator",
    "walker",
]
