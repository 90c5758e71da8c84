"""
shapecheck — variant spec.

File: src/shapecheck/engine/variant.py
Last updated: 2026-10-19

Purpose
- Ordered alternation: pick exactly one option for a value and check the value
  against that option's schema only.

What should be included in this file
- ``VariantSpec`` and its guard chain.
- The debug-only ambiguity logging for exclusive variants.

Functional requirements
- A failing top-level precondition short-circuits.
- Options are scanned in declaration order; the first option whose guard is
  absent or true is selected and its result is final (no backtracking).
- No matching option yields ``(some-matching-option? <value>)`` unless the
  owner supplies its own failure form.
- The post-condition runs only after the selected schema succeeded.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

from shapecheck.engine.compiler import pre_predicate_of
from shapecheck.engine.core import Checker, Deferred, Option, Precondition, Predicate
from shapecheck.errors import ErrorContainer, validation_error
from shapecheck.forms import quote, symbol

if TYPE_CHECKING:
    from shapecheck.engine.compiler import CompileParams


def _no_match_form(value: object) -> object:
    return (symbol("some-matching-option?"), value)


@dataclass(frozen=True, slots=True)
class VariantSpec:
    owner: object
    options: tuple[Option, ...]
    pre: Precondition | None = None
    post: Precondition | None = None
    no_match_form: Callable[[object], object] = _no_match_form
    # Guards are expected to be mutually exclusive (cond_pre); enables the
    # debug ambiguity check.
    exclusive: bool = False

    def pre_predicate(self, value: object) -> bool:
        if self.pre is not None and not self.pre.holds(value):
            return False
        for option in self.options:
            if option.guard is not None and not option.guard(value):
                continue
            schema = option.schema
            if isinstance(schema, Deferred):
                schema = schema.resolve()
            return pre_predicate_of(schema)(value)
        return False

    def subschemas(self) -> tuple[object, ...]:
        return tuple(option.schema for option in self.options)

    def checker(self, params: CompileParams) -> Checker:
        owner = self.owner
        no_match_form = self.no_match_form

        def no_match(value: object) -> object:
            return validation_error(owner, value, partial(no_match_form, quote(value)), None)

        branch: Checker = no_match
        for option in reversed(self.options):
            sub = params.sub_checker(option.schema, option.error_wrap)
            if option.guard is None:
                branch = sub
            else:
                branch = _guarded(option.guard, sub, branch)

        if self.exclusive and params.context.detect_ambiguity:
            branch = _ambiguity_logged(self, branch, params)

        pre = self.pre
        post = self.post
        # Recursive schemas go through here once per level; skip the wrapper frame.
        if pre is None and post is None:
            return branch
        return_walked = params.return_walked

        def check(value: object) -> object:
            if pre is not None:
                error = pre(value)
                if error is not None:
                    return error
            result = branch(value)
            if post is None or isinstance(result, ErrorContainer):
                return result
            error = post(result if return_walked else value)
            if error is not None:
                return error
            return result

        return check

    def predicate(self, params: CompileParams) -> Predicate:
        def no_match(value: object) -> bool:
            return False

        branch: Predicate = no_match
        for option in reversed(self.options):
            sub = params.sub_predicate(option.schema)
            if option.guard is None:
                branch = sub
            else:
                branch = _guarded(option.guard, sub, branch)

        pre = self.pre
        post = self.post
        if pre is None and post is None:
            return branch

        def test(value: object) -> bool:
            if pre is not None and not pre.holds(value):
                return False
            if not branch(value):
                return False
            return post is None or post.holds(value)

        return test


def _guarded(
    guard: Callable[[object], object],
    selected: Callable[[object], Any],
    fallback: Callable[[object], Any],
) -> Callable[[object], Any]:
    def dispatch(value: object) -> Any:
        if guard(value):
            return selected(value)
        return fallback(value)

    return dispatch


def _ambiguity_logged(spec: VariantSpec, branch: Checker, params: CompileParams) -> Checker:
    guards = [option.guard for option in spec.options if option.guard is not None]
    logger = params.context.get_logger()

    def check(value: object) -> object:
        matched = sum(1 for guard in guards if guard(value))
        if matched > 1:
            logger.warning(
                "shapecheck_ambiguous_variant",
                owner=type(spec.owner).__name__,
                matched_options=matched,
                value_type=type(value).__name__,
            )
        return branch(value)

    return check


__all__ = ["VariantSpec"]
