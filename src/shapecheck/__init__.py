"""
shapecheck — declarative data-shape schemas

File: src/shapecheck/__init__.py
Last updated: 2026-10-19

Purpose
- Package root. Re-exports the public schema constructors, the checking entry
  points, settings and instrumentation.

What should be included in this file
- Re-exports only; no logic.
- ``__all__`` listing every public name and ``__version__``.

Functional requirements
- Must not have side effects at import time (no settings loading, no logging
  configuration).

Key interfaces / contracts
- ``check``/``checker`` return ``None`` for valid values and structured error
  data otherwise; ``validate``/``validator`` raise ``InvalidValueError``.
"""

from __future__ import annotations

from shapecheck.checking import (
    check,
    checker,
    explain,
    pre_predicate,
    predicate,
    spec,
    validate,
    validator,
    walker,
)
from shapecheck.config import CheckContext, Settings, SettingsLoadError, load_settings
from shapecheck.errors import (
    DISALLOWED_KEY,
    MISSING_REQUIRED_KEY,
    ErrorContainer,
    ErrorIssue,
    ExtraElements,
    InvalidKey,
    InvalidValueError,
    NamedError,
    SchemaDefinitionError,
    ShapecheckError,
    UnboundReferenceError,
    ValidationError,
    error_issues,
    error_val,
    is_error,
    make_error,
)
from shapecheck.forms import render_form
from shapecheck.instrument import validated
from shapecheck.registry import SchemaRegistry
from shapecheck.schemas.alternation import (
    ELSE,
    both,
    cond_pre,
    conditional,
    constrained,
    either,
    maybe,
    named,
)
from shapecheck.schemas.base import Schema
from shapecheck.schemas.functions import FnSchema, fn_schema, make_fn_schema
from shapecheck.schemas.leaves import Any, Bool, Int, Num, Str, enum, eq, instance_of, pred, regex
from shapecheck.schemas.maps import map_schema, optional_key, required_key
from shapecheck.schemas.records import record
from shapecheck.schemas.recursion import Cell, SchemaRef, recursive
from shapecheck.schemas.sequences import atom, one, optional, queue_of, sequence_schema, set_of

__version__ = "0.1.0"

__all__ = [
    "DISALLOWED_KEY",
    "ELSE",
    "MISSING_REQUIRED_KEY",
    "Any",
    "Bool",
    "Cell",
    "CheckContext",
    "ErrorContainer",
    "ErrorIssue",
    "ExtraElements",
    "FnSchema",
    "Int",
    "InvalidKey",
    "InvalidValueError",
    "NamedError",
    "Num",
    "Schema",
    "SchemaDefinitionError",
    "SchemaRef",
    "SchemaRegistry",
    "Settings",
    "SettingsLoadError",
    "ShapecheckError",
    "Str",
    "UnboundReferenceError",
    "ValidationError",
    "__version__",
    "atom",
    "both",
    "check",
    "checker",
    "cond_pre",
    "conditional",
    "constrained",
    "either",
    "enum",
    "eq",
    "error_issues",
    "error_val",
    "explain",
    "fn_schema",
    "instance_of",
    "is_error",
    "load_settings",
    "make_error",
    "make_fn_schema",
    "map_schema",
    "maybe",
    "named",
    "one",
    "optional",
    "optional_key",
    "pre_predicate",
    "pred",
    "predicate",
    "queue_of",
    "record",
    "recursive",
    "regex",
    "render_form",
    "required_key",
    "sequence_schema",
    "set_of",
    "spec",
    "validate",
    "validated",
    "validator",
    "walker",
]
