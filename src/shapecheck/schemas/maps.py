"""
shapecheck — map schemas.

File: src/shapecheck/schemas/maps.py
Last updated: 2026-10-19

Purpose
- Keyed collection schemas: explicit required/optional keys plus at most one
  wildcard key schema for the remaining entries.

What should be included in this file
- ``MapSchema`` and ``MapEntry``.
- Key classification (required, optional, wildcard) and map error assembly.

Functional requirements
- A required key absent from the value reports ``missing-required-key``.
- An undeclared key reports ``disallowed-key`` when no wildcard is declared.
- A key rejected by the wildcard key schema reports ``(invalid-key ...)``.
- Declaring the same explicit key twice, or two wildcard keys, is a schema
  definition error raised at construction.

Non-functional requirements
- Explicit keys are looked up directly; only the wildcard walks entries.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import partial

from shapecheck.engine.collection import CollectionSpec, map_entry, remaining_entries
from shapecheck.engine.compiler import explain_of
from shapecheck.engine.core import Element, ElementKind, precondition
from shapecheck.errors import (
    DISALLOWED_KEY,
    MISSING_REQUIRED_KEY,
    ErrorContainer,
    InvalidKey,
    SchemaDefinitionError,
    error_val,
)
from shapecheck.forms import render_form, symbol
from shapecheck.schemas.base import Schema
from shapecheck.schemas.leaves import EqSchema


@dataclass(frozen=True)
class RequiredKey:
    key: object


@dataclass(frozen=True)
class OptionalKey:
    key: object


def required_key(key: object) -> RequiredKey:
    return RequiredKey(key)


def optional_key(key: object) -> OptionalKey:
    return OptionalKey(key)


def is_explicit_key(key: object) -> bool:
    if isinstance(key, (RequiredKey, OptionalKey)):
        return True
    return not isinstance(key, (Schema, type, re.Pattern))


def explicit_key(key: object) -> object:
    if isinstance(key, (RequiredKey, OptionalKey)):
        return key.key
    return key


@dataclass(frozen=True)
class MapEntry(Schema):
    """A single ``(key, value)`` pair checked against two schemas."""

    key_schema: object
    value_schema: object

    def spec(self) -> CollectionSpec:
        return CollectionSpec(
            pre=precondition(self, _is_pair, lambda value: (symbol("map-entry?"), value)),
            unpack=_identity,
            constructor=tuple,
            elements=(
                Element(ElementKind.REQUIRED, self.key_schema, _parse_entry_key),
                Element(ElementKind.REQUIRED, self.value_schema, _parse_entry_value),
            ),
            on_error=_entry_error,
        )

    def explain(self) -> object:
        return (symbol("map-entry"), explain_of(self.key_schema), explain_of(self.value_schema))


@dataclass(frozen=True)
class MapSchema(Schema):
    entries: tuple[tuple[object, object], ...]

    def __post_init__(self) -> None:
        split_keys(self.entries)

    def spec(self) -> CollectionSpec:
        return CollectionSpec(
            pre=precondition(self, _is_mapping, lambda value: (symbol("map?"), value)),
            unpack=dict,
            constructor=dict,
            elements=keyed_elements(self.entries),
            on_error=map_error,
        )

    def explain(self) -> object:
        return explain_entries(self.entries)


def split_keys(
    entries: tuple[tuple[object, object], ...],
) -> tuple[
    list[tuple[object, object]],
    list[tuple[object, object]],
    tuple[object, object] | None,
]:
    """Partition declared entries into required, optional and wildcard."""

    required: list[tuple[object, object]] = []
    optional: list[tuple[object, object]] = []
    wildcard: tuple[object, object] | None = None
    seen: set[object] = set()
    for key, schema in entries:
        if not is_explicit_key(key):
            if wildcard is not None:
                raise SchemaDefinitionError(
                    "map schema can declare at most one wildcard key schema, "
                    f"got {render_form(explain_of(wildcard[0]))} and {render_form(explain_of(key))}"
                )
            wildcard = (key, schema)
            continue
        plain = explicit_key(key)
        if plain in seen:
            raise SchemaDefinitionError(f"map schema declares key {plain!r} more than once")
        seen.add(plain)
        if isinstance(key, OptionalKey):
            optional.append((plain, schema))
        else:
            required.append((plain, schema))
    return required, optional, wildcard


def keyed_elements(entries: tuple[tuple[object, object], ...]) -> tuple[Element, ...]:
    required, optional, wildcard = split_keys(entries)
    elements = [
        map_entry(
            key,
            MapEntry(EqSchema(key), schema),
            required=True,
            missing=partial(_missing_key, key),
        )
        for key, schema in required
    ]
    elements.extend(
        map_entry(key, MapEntry(EqSchema(key), schema), required=False) for key, schema in optional
    )
    if wildcard is not None:
        elements.append(remaining_entries(MapEntry(*wildcard)))
    return tuple(elements)


def map_error(value: object, results: list[object], remaining: object) -> dict[object, object]:
    errors: dict[object, object] = {}
    for result in results:
        if isinstance(result, ErrorContainer):
            key, error = result.error  # type: ignore[misc]
            errors[key] = error
    for key in remaining:  # type: ignore[attr-defined]
        errors[key] = DISALLOWED_KEY
    return errors


def explain_entries(entries: tuple[tuple[object, object], ...]) -> dict[object, object]:
    explained: dict[object, object] = {}
    for key, schema in entries:
        explained[_explain_key(key)] = explain_of(schema)
    return explained


def _explain_key(key: object) -> object:
    if isinstance(key, OptionalKey):
        return (symbol("optional-key"), key.key)
    if isinstance(key, RequiredKey):
        return key.key
    if is_explicit_key(key):
        return key
    explained = explain_of(key)
    try:
        hash(explained)
    except TypeError:
        return render_form(explained)
    return explained


def _missing_key(key: object) -> ErrorContainer:
    return ErrorContainer((key, MISSING_REQUIRED_KEY))


def _is_mapping(value: object) -> bool:
    return isinstance(value, Mapping)


def _is_pair(value: object) -> bool:
    return isinstance(value, tuple) and len(value) == 2


def _identity(value: object) -> object:
    return value


def _parse_entry_key(entry: object) -> tuple[list[object], object]:
    return [entry[0]], entry  # type: ignore[index]


def _parse_entry_value(entry: object) -> tuple[list[object], object]:
    return [entry[1]], ()  # type: ignore[index]


def _entry_error(value: object, results: list[object], remaining: object) -> tuple[object, object]:
    key = value[0]  # type: ignore[index]
    key_result = results[0]
    if isinstance(key_result, ErrorContainer):
        return (key, InvalidKey(key_result.error))
    return (key, error_val(results[1]))


def map_schema(entries: Mapping[object, object]) -> MapSchema:
    return MapSchema(tuple(entries.items()))


__all__ = [
    "MapEntry",
    "MapSchema",
    "OptionalKey",
    "RequiredKey",
    "explain_entries",
    "explicit_key",
    "is_explicit_key",
    "keyed_elements",
    "map_error",
    "map_schema",
    "optional_key",
    "required_key",
    "split_keys",
]
