"""Schema capability shared by every built-in and user-defined schema."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapecheck.engine.core import Spec


class Schema(ABC):
    """Declarative shape description.

    Subclasses are immutable once constructed. ``spec()`` and ``explain()``
    must be pure: the compilation cache may call them more than once and keep
    any of the results.
    """

    __slots__ = ()

    @abstractmethod
    def spec(self) -> Spec:
        """Return the compiled, checkable form of this schema."""

    @abstractmethod
    def explain(self) -> object:
        """Return a displayable description of this schema."""


__all__ = ["Schema"]
