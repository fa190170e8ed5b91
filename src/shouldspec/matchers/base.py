"""Matcher interface and validation of matcher functions."""

from __future__ import annotations

import inspect
import logging
import typing
from abc import ABC, abstractmethod
from typing import Any, Callable

from shouldspec.errors import (
    MatcherArgumentError,
    MatcherDefinitionError,
    MatcherExecutionError,
)
from shouldspec.typecheck import (
    bool_capable,
    error_capable,
    has_var_positional,
    positional_parameters,
    required_keyword_only,
    return_hint,
    signature_of,
)

logger = logging.getLogger(__name__)

MatchResult = tuple[bool, Exception | None]


class Matcher(ABC):
    """A named boolean predicate usable after ``Should [Not]`` in a spec.

    The first argument is always the spec's subject. A matcher with
    ``num_in == 2`` takes one more value from the sequence. That value is
    called first when it is a zero-argument function, unless
    ``resolves_argument`` is False (matchers that take a function).
    """

    resolves_argument: bool = True

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def num_in(self) -> int:
        """Number of values the matcher is called with, subject included."""
        ...

    @abstractmethod
    def matches(self, *args: Any) -> MatchResult:
        """Run the matcher. Returns (passed, error); never raises."""
        ...

    def __repr__(self) -> str:
        return self.name

    __str__ = __repr__


class FuncMatcher(Matcher):
    """A matcher backed by a validated ``fn(subject, ...) -> (bool, error)``."""

    def __init__(
        self,
        fn: Callable[..., Any],
        name: str,
        num_in: int,
        resolve_argument: bool = True,
    ):
        self.fn = fn
        self._name = name
        self._num_in = num_in
        self.resolves_argument = resolve_argument

    @property
    def name(self) -> str:
        return self._name

    @property
    def num_in(self) -> int:
        return self._num_in

    def matches(self, *args: Any) -> MatchResult:
        if len(args) != self._num_in:
            return False, MatcherArgumentError(
                f"{self._name} takes {self._num_in} argument(s), got {len(args)}"
            )

        logger.debug(f"{self._name}{args!r}")
        try:
            out = self.fn(*args)
        except Exception as e:
            return False, MatcherExecutionError(
                f"runtime fault in {self._name}: {e!r}", fault=e
            )

        if not isinstance(out, tuple) or len(out) != 2:
            return False, MatcherExecutionError(
                f"{self._name} returned {out!r}, expected (bool, error)"
            )
        passed, err = out
        if not isinstance(passed, bool):
            return False, MatcherExecutionError(
                f"{self._name} returned non-bool result {passed!r}"
            )
        if err is not None and not isinstance(err, Exception):
            return False, MatcherExecutionError(
                f"{self._name} returned non-error value {err!r}"
            )
        return passed, err


def _check_return_hint(fn: Callable[..., Any]) -> None:
    hint = return_hint(fn)
    if hint is inspect.Parameter.empty:
        # Checked on every call instead
        return

    args = typing.get_args(hint)
    if typing.get_origin(hint) is not tuple or Ellipsis in args:
        raise MatcherDefinitionError("matcher must return a (bool, error) pair")
    if len(args) < 2:
        raise MatcherDefinitionError("not enough matcher return values")
    if len(args) > 2:
        raise MatcherDefinitionError("too many matcher return values")
    if not bool_capable(args[0]):
        raise MatcherDefinitionError("matcher with non-bool return")
    if not error_capable(args[1]):
        raise MatcherDefinitionError("matcher with non-error second return value")


def new_matcher(
    fn: Callable[..., Any], name: str | None = None, resolve_argument: bool = True
) -> FuncMatcher:
    """Validate fn and wrap it as a Matcher.

    fn must take a fixed number (at least one) of positional arguments and
    return ``(bool, error-or-None)``. Shape problems are raised here, once,
    so that later failures can only be about the values a spec passes in.
    Pass resolve_argument=False when the argument is itself a function,
    such as a predicate, that must reach fn uncalled.

    Raises MatcherDefinitionError when fn does not have a matcher's shape.
    """
    if isinstance(fn, Matcher) or not callable(fn):
        raise MatcherDefinitionError(f"matcher not a function: {fn!r}")

    sig = signature_of(fn)
    if sig is None:
        raise MatcherDefinitionError(f"cannot inspect matcher signature of {fn!r}")
    if has_var_positional(sig):
        raise MatcherDefinitionError("matcher must take a fixed number of arguments")
    if required_keyword_only(sig):
        raise MatcherDefinitionError("matcher with required keyword-only arguments")

    num_in = len(positional_parameters(sig))
    if num_in == 0:
        raise MatcherDefinitionError("nil-adic matcher")

    _check_return_hint(fn)

    matcher_name = name or getattr(fn, "__name__", None) or repr(fn)
    return FuncMatcher(fn, matcher_name, num_in, resolve_argument)
