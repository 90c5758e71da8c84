"""Display forms shared by error values and schema explanations."""

from __future__ import annotations

import reprlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

_VALUE_REPR: Final[reprlib.Repr] = reprlib.Repr()
_VALUE_REPR.maxstring = 60
_VALUE_REPR.maxother = 60
_VALUE_REPR.maxlist = 8
_VALUE_REPR.maxtuple = 8
_VALUE_REPR.maxdict = 8


class Symbol(str):
    """Bare name inside a display form (rendered without quotes)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return str(self)


def symbol(name: str) -> Symbol:
    return Symbol(name)


@dataclass(frozen=True, slots=True)
class Value:
    """Data embedded in a display form; rendered with ``value_repr``."""

    value: object

    def __repr__(self) -> str:
        return value_repr(self.value)


def quote(value: object) -> Value:
    return value if isinstance(value, Value) else Value(value)


def render_form(form: object) -> str:
    """Render a nested display form as an s-expression style string.

    Tuples, lists and mappings are form structure; wrap data in ``Value`` to
    render it with its own ``repr``.
    """

    if isinstance(form, Symbol):
        return str(form)
    if isinstance(form, Value):
        return value_repr(form.value)
    if isinstance(form, tuple):
        return "(" + " ".join(render_form(part) for part in form) + ")"
    if isinstance(form, list):
        return "[" + " ".join(render_form(part) for part in form) + "]"
    if isinstance(form, Mapping):
        parts = (f"{render_form(key)} {render_form(value)}" for key, value in form.items())
        return "{" + ", ".join(parts) + "}"
    return value_repr(form)


def value_repr(value: object) -> str:
    """Size-bounded ``repr`` for offending values."""

    return _VALUE_REPR.repr(value)


__all__ = ["Symbol", "Value", "quote", "render_form", "symbol", "value_repr"]
