"""
shapecheck — literal coercion.

File: src/shapecheck/schemas/coerce.py
Last updated: 2026-10-19

Purpose
- Turn plain Python data used as a schema into the equivalent built-in
  schema, so ``{"foo": Str, "bar": [Num]}`` is a schema on its own.

What should be included in this file
- ``coerce_literal`` and its dispatch over literal kinds.

Functional requirements
- ``type`` -> instance check; ``re.Pattern`` -> regex match on ``str``;
  ``dict`` -> map schema; ``list``/``tuple`` -> sequence schema; a
  one-element ``set``/``frozenset`` -> set schema; scalars -> equality.
- Any other callable is rejected with a hint to wrap it in ``pred``.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from typing import Final

from shapecheck.errors import SchemaDefinitionError
from shapecheck.schemas.base import Schema
from shapecheck.schemas.leaves import EqSchema, InstanceOf, RegexSchema
from shapecheck.schemas.maps import MapSchema
from shapecheck.schemas.sequences import SequenceSchema, SetSchema

_SCALAR_TYPES: Final[tuple[type, ...]] = (type(None), str, int, float, complex, bool, bytes)


def coerce_literal(value: object) -> Schema:
    """Return the schema a literal stands for, or raise ``SchemaDefinitionError``."""

    if isinstance(value, Schema):
        return value
    if isinstance(value, type):
        return InstanceOf(value)
    if isinstance(value, re.Pattern):
        return RegexSchema(value)
    if isinstance(value, Mapping):
        return MapSchema(tuple(value.items()))
    if isinstance(value, (list, tuple)):
        return SequenceSchema(tuple(value), as_tuple=isinstance(value, tuple))
    if isinstance(value, (set, frozenset)):
        if len(value) != 1:
            raise SchemaDefinitionError(
                f"set schema literal must contain exactly one element schema, got {len(value)}"
            )
        (element,) = value
        return SetSchema(element)
    if isinstance(value, (_SCALAR_TYPES, enum.Enum)):
        return EqSchema(value)
    if callable(value):
        raise SchemaDefinitionError(
            f"{value!r} is a callable, not a schema; wrap predicates with pred(...)"
        )
    raise SchemaDefinitionError(f"cannot use {type(value).__name__} value {value!r} as a schema")


__all__ = ["coerce_literal"]
