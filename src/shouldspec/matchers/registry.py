from __future__ import annotations

from typing import Any, Callable, Iterator

from shouldspec.errors import MatcherDefinitionError
from shouldspec.matchers.base import Matcher, new_matcher


class MatcherRegistry:
    """Named matchers, optionally layered over a parent registry."""

    def __init__(self, parent: MatcherRegistry | None = None):
        self._parent = parent
        self._matchers: dict[str, Matcher] = {}
        self._frozen = False

    def register(
        self, matcher: Matcher | Callable[..., Any], name: str | None = None
    ) -> Matcher:
        """Add a matcher, validating plain functions with new_matcher."""
        if self._frozen:
            raise MatcherDefinitionError("matcher registry is read-only")
        if not isinstance(matcher, Matcher):
            matcher = new_matcher(matcher, name=name)
        key = name or matcher.name
        if key in self:
            raise MatcherDefinitionError(f"matcher {key!r} is already registered")
        self._matchers[key] = matcher
        return matcher

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Matcher:
        matcher = self._matchers.get(name)
        if matcher is None and self._parent is not None and name in self._parent:
            return self._parent.get(name)
        if matcher is None:
            raise ValueError(
                f"Unknown matcher: {name!r}. Available: {', '.join(self.names())}"
            )
        return matcher

    def names(self) -> list[str]:
        names = set(self._matchers)
        if self._parent is not None:
            names.update(self._parent.names())
        return sorted(names)

    def __contains__(self, name: object) -> bool:
        if name in self._matchers:
            return True
        return self._parent is not None and name in self._parent

    def __iter__(self) -> Iterator[Matcher]:
        return (self.get(name) for name in self.names())

    def __len__(self) -> int:
        return len(self.names())
