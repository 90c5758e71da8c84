"""Leaf spec: a single precondition with no substructure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapecheck.engine.core import Checker, Precondition, Predicate

if TYPE_CHECKING:
    from shapecheck.engine.compiler import CompileParams


@dataclass(frozen=True, slots=True)
class LeafSpec:
    pre: Precondition

    def pre_predicate(self, value: object) -> bool:
        return self.pre.holds(value)

    def subschemas(self) -> tuple[object, ...]:
        return ()

    def checker(self, params: CompileParams) -> Checker:
        pre = self.pre

        def check(value: object) -> object:
            error = pre(value)
            if error is None:
                return value
            return error

        return check

    def predicate(self, params: CompileParams) -> Predicate:
        return self.pre.holds


__all__ = ["LeafSpec"]
