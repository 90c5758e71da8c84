"""
shapecheck — compilation cache.

File: src/shapecheck/cache.py
Last updated: 2026-10-19

Purpose
- Memoise each schema's compiled Spec and explanation per schema identity.

What should be included in this file
- ``CompilationCache`` storing specs and explanations on the schema
  instance.
- Debug logging of cache misses.

Functional requirements
- Entries are stored in the schema instance's own ``__dict__`` (the same
  storage ``functools.cached_property`` uses), so the cache is keyed by
  identity and never keeps a retired schema alive.
- Schemas without instance storage (``__slots__``-only classes) are simply
  recompiled on every lookup; correctness never depends on a cache hit.

Non-functional requirements
- No locking. Concurrent misses compute equal results and the last writer
  wins, which is safe because compilation is pure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import structlog

if TYPE_CHECKING:
    from shapecheck.engine.core import Spec
    from shapecheck.schemas.base import Schema

_SPEC_SLOT: Final[str] = "_shapecheck_spec"
_EXPLAIN_SLOT: Final[str] = "_shapecheck_explain"
_UNSET: Final[object] = object()


class CompilationCache:
    """Identity-keyed memo for ``Schema.spec()`` and ``Schema.explain()``."""

    def __init__(self, *, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    def spec(self, schema: Schema) -> Spec:
        cached = self._lookup(schema, _SPEC_SLOT)
        if cached is not _UNSET:
            return cached  # type: ignore[return-value]
        compiled = schema.spec()
        if self._store(schema, _SPEC_SLOT, compiled):
            self._logger.debug(
                "shapecheck_spec_compiled",
                schema_type=type(schema).__name__,
                spec_type=type(compiled).__name__,
            )
        return compiled

    def explain(self, schema: Schema) -> object:
        cached = self._lookup(schema, _EXPLAIN_SLOT)
        if cached is not _UNSET:
            return cached
        explanation = schema.explain()
        self._store(schema, _EXPLAIN_SLOT, explanation)
        return explanation

    def is_cached(self, schema: Schema) -> bool:
        return self._lookup(schema, _SPEC_SLOT) is not _UNSET

    def evict(self, schema: Schema) -> None:
        storage = _instance_storage(schema)
        if storage is None:
            return
        storage.pop(_SPEC_SLOT, None)
        storage.pop(_EXPLAIN_SLOT, None)

    def _lookup(self, schema: Schema, slot: str) -> object:
        storage = _instance_storage(schema)
        if storage is None:
            return _UNSET
        return storage.get(slot, _UNSET)

    def _store(self, schema: Schema, slot: str, value: object) -> bool:
        storage = _instance_storage(schema)
        if storage is None:
            return False
        storage[slot] = value
        return True


def _instance_storage(schema: object) -> dict[str, object] | None:
    try:
        storage = object.__getattribute__(schema, "__dict__")
    except AttributeError:
        return None
    if isinstance(storage, dict):
        return storage
    return None


DEFAULT_CACHE: Final[CompilationCache] = CompilationCache()

__all__ = ["DEFAULT_CACHE", "CompilationCache"]
