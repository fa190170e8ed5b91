"""
Token classification for spec sequences.

A spec sequence is the flat argument list of one ``spec(...)`` call. Each
argument is classified by identity alone:

- a ``Sugar`` member (``Should``, ``Not``) is a connective,
- a ``Matcher`` instance is a matcher reference,
- anything else, callables included, is a plain value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Sequence

from shouldspec.matchers.base import Matcher


class Sugar(Enum):
    """Connectives that make a spec read as a sentence."""

    SHOULD = "Should"
    NOT = "Not"

    def __repr__(self) -> str:
        return self.value

    __str__ = __repr__


Should = Sugar.SHOULD
Not = Sugar.NOT


class TokenKind(Enum):
    SUGAR = auto()
    MATCHER = auto()
    VALUE = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any

    @property
    def is_sugar(self) -> bool:
        return self.kind is TokenKind.SUGAR

    @property
    def is_matcher(self) -> bool:
        return self.kind is TokenKind.MATCHER

    @property
    def is_value(self) -> bool:
        return self.kind is TokenKind.VALUE

    def render(self) -> str:
        if self.kind is TokenKind.VALUE:
            return repr(self.value)
        return str(self.value)


def token_kind(value: Any) -> TokenKind:
    if isinstance(value, Sugar):
        return TokenKind.SUGAR
    if isinstance(value, Matcher):
        return TokenKind.MATCHER
    return TokenKind.VALUE


def tokenize(sequence: Sequence[Any]) -> list[Token]:
    return [Token(token_kind(v), v) for v in sequence]


def render_sequence(tokens: Sequence[Token]) -> str:
    """Human-readable form of a spec sequence, e.g. ``1 Should Not Equal 2``."""
    return " ".join(t.render() for t in tokens)
