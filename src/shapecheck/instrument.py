"""
shapecheck — function instrumentation.

File: src/shapecheck/instrument.py
Last updated: 2026-10-19

Purpose
- ``validated``: attach a function schema to a function and, when the bound
  ``CheckContext`` asks for it, validate positional arguments and the return
  value on every call.

What should be included in this file
- The ``validated`` decorator and its argument/return checks.
- ``with_context`` rebinding of an instrumented function.

Functional requirements
- The function schema is registered for the original function and for the
  wrapper before any call happens.
- Arguments are checked in positional order against the declared input
  schemas; extra positional arguments and keyword-only arguments are not
  checked.
- Failures raise ``InvalidValueError`` whose message names the function and
  the argument or ``return``.
- There is no global switch: ``wrapper.with_context(ctx)`` returns a wrapper
  bound to a different context.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

from shapecheck.checking import checker, raise_invalid
from shapecheck.config import DEFAULT_CONTEXT, CheckContext
from shapecheck.registry import DEFAULT_REGISTRY, SchemaRegistry
from shapecheck.schemas.functions import FnSchema


def validated(
    output: object,
    *inputs: object,
    registry: SchemaRegistry | None = None,
    context: CheckContext | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate a function with ``FnSchema(output, (inputs,))``."""

    schema = FnSchema(output, (tuple(inputs),))
    target_registry = registry if registry is not None else DEFAULT_REGISTRY

    def decorate(fn: Callable[..., Any]) -> Callable[..., Any]:
        target_registry.register(fn, schema)
        wrapper = _instrument(fn, schema, context if context is not None else DEFAULT_CONTEXT)
        target_registry.register(wrapper, schema)
        return wrapper

    return decorate


def _instrument(fn: Callable[..., Any], schema: FnSchema, context: CheckContext) -> Callable[..., Any]:
    signature = inspect.signature(fn)
    positional = [
        parameter.name
        for parameter in signature.parameters.values()
        if parameter.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    input_schemas = schema.inputs[0]
    argument_checks = [
        (name, input_schema, checker(input_schema, context=context))
        for name, input_schema in zip(positional, input_schemas)
    ]
    output_check = checker(schema.output, context=context)
    label = getattr(fn, "__qualname__", repr(fn))
    logger = context.get_logger()

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not context.validate_calls:
            return fn(*args, **kwargs)
        bound = signature.bind(*args, **kwargs)
        for name, input_schema, check_argument in argument_checks:
            if name not in bound.arguments:
                continue
            value = bound.arguments[name]
            error = check_argument(value)
            if error is not None:
                raise_invalid(
                    input_schema,
                    value,
                    error,
                    context=f"{label}: argument {name!r} does not match schema",
                    logger=logger,
                )
        result = fn(*args, **kwargs)
        error = output_check(result)
        if error is not None:
            raise_invalid(
                schema.output,
                result,
                error,
                context=f"{label}: return value does not match schema",
                logger=logger,
            )
        return result

    def with_context(new_context: CheckContext) -> Callable[..., Any]:
        return _instrument(fn, schema, new_context)

    wrapper.with_context = with_context  # type: ignore[attr-defined]
    wrapper.fn_schema = schema  # type: ignore[attr-defined]
    return wrapper


__all__ = ["validated"]
