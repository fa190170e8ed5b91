from typing import Any, Callable

from shouldspec.matchers.base import FuncMatcher, MatchResult, Matcher, new_matcher
from shouldspec.matchers.builtin import (
    matcher_equal,
    matcher_have_error,
    matcher_raise,
    matcher_satisfy,
)
from shouldspec.matchers.equality import deep_equal
from shouldspec.matchers.registry import MatcherRegistry

Equal = new_matcher(matcher_equal, name="Equal")
Satisfy = new_matcher(matcher_satisfy, name="Satisfy", resolve_argument=False)
HaveError = new_matcher(matcher_have_error, name="HaveError")
Raise = new_matcher(matcher_raise, name="Raise")

BUILTIN_MATCHERS = MatcherRegistry()
for _matcher in (Equal, Satisfy, HaveError, Raise):
    BUILTIN_MATCHERS.register(_matcher)
BUILTIN_MATCHERS.freeze()

_USER_MATCHERS = MatcherRegistry(parent=BUILTIN_MATCHERS)


def get_matcher(name: str) -> Matcher:
    return _USER_MATCHERS.get(name)


def register_matcher(fn: Matcher | Callable[..., Any], name: str | None = None) -> Matcher:
    """Validate and register a matcher under name for lookup with get_matcher."""
    return _USER_MATCHERS.register(fn, name=name)


__all__ = [
    "BUILTIN_MATCHERS",
    "Equal",
    "FuncMatcher",
    "HaveError",
    "MatchResult",
    "Matcher",
    "MatcherRegistry",
    "Raise",
    "Satisfy",
    "deep_equal",
    "get_matcher",
    "new_matcher",
    "register_matcher",
]
