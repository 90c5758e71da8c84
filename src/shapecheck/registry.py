"""
shapecheck — schema registry.

File: src/shapecheck/registry.py
Last updated: 2026-10-19

Purpose
- Associate functions and classes with the schema that describes them, so
  tooling can ask ``schema_for(fn)`` after ``validated`` ran.

What should be included in this file
- ``SchemaRegistry`` keyed weakly by target object.
- The process-wide ``DEFAULT_REGISTRY``.

Functional requirements
- Entries are weakly keyed by the target; a collected function drops out.
- Registering the same target again replaces the schema.

Non-functional requirements
- Thread-safe register/lookup.
"""

from __future__ import annotations

import threading
import weakref
from typing import Final

from shapecheck.errors import SchemaDefinitionError


class SchemaRegistry:
    """Weakly keyed ``target -> schema`` map."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._schemas: weakref.WeakKeyDictionary[object, object] = weakref.WeakKeyDictionary()

    def register(self, target: object, schema: object) -> object:
        try:
            weakref.ref(target)
        except TypeError as exc:
            raise SchemaDefinitionError(
                f"cannot register a schema for {type(target).__name__} objects"
            ) from exc
        with self._lock:
            self._schemas[target] = schema
        return schema

    def schema_for(self, target: object) -> object | None:
        with self._lock:
            try:
                return self._schemas.get(target)
            except TypeError:
                return None

    def unregister(self, target: object) -> None:
        with self._lock:
            self._schemas.pop(target, None)

    def __contains__(self, target: object) -> bool:
        return self.schema_for(target) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._schemas)


DEFAULT_REGISTRY: Final[SchemaRegistry] = SchemaRegistry()

__all__ = ["DEFAULT_REGISTRY", "SchemaRegistry"]
