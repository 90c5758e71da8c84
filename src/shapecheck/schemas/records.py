"""
shapecheck — record schemas.

File: src/shapecheck/schemas/records.py
Last updated: 2026-10-19

Purpose
- Check instances of a class field by field, reusing the map machinery over
  the instance's fields.

What should be included in this file
- ``RecordSchema`` over dataclass fields or ``vars()``.

Functional requirements
- A value that is not an instance of ``cls`` fails with ``(instance? Cls v)``.
- Dataclass instances expose their declared fields; other objects expose
  ``vars(value)``. Fields the schema does not declare are ``disallowed-key``
  unless a wildcard key schema is declared.
- In walked mode the record is rebuilt as ``cls(**fields)``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass

from shapecheck.engine.collection import CollectionSpec
from shapecheck.engine.core import precondition
from shapecheck.errors import SchemaDefinitionError
from shapecheck.forms import symbol
from shapecheck.schemas.base import Schema
from shapecheck.schemas.maps import explain_entries, keyed_elements, map_error, split_keys


@dataclass(frozen=True)
class RecordSchema(Schema):
    cls: type
    entries: tuple[tuple[object, object], ...]

    def __post_init__(self) -> None:
        if not isinstance(self.cls, type):
            raise SchemaDefinitionError(f"record expects a class, got {self.cls!r}")
        split_keys(self.entries)

    def spec(self) -> CollectionSpec:
        cls = self.cls
        name = symbol(cls.__qualname__)
        return CollectionSpec(
            pre=precondition(
                self,
                lambda value: isinstance(value, cls),
                lambda value: (symbol("instance?"), name, value),
            ),
            unpack=record_fields,
            constructor=lambda results: cls(**dict(results)),  # type: ignore[arg-type]
            elements=keyed_elements(self.entries),
            on_error=map_error,
        )

    def explain(self) -> object:
        return (symbol("record"), symbol(self.cls.__qualname__), explain_entries(self.entries))


def record_fields(value: object) -> dict[object, object]:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    return dict(vars(value))


def record(cls: type, fields: Mapping[object, object]) -> RecordSchema:
    return RecordSchema(cls, tuple(fields.items()))


__all__ = ["RecordSchema", "record", "record_fields"]
