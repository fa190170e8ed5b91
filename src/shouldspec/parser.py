"""
Parser for spec sequences.

Grammar:

    spec    := subject Should [Not] matcher [argument]
    subject := value [index]

The subject value (and the argument) may be a zero-argument function, which
is called while parsing; an index then selects one of its return values.

Every step reports problems by returning a GrammarError instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from shouldspec.calls import FnCall, invoke, is_nilary
from shouldspec.errors import GrammarError, GrammarErrorKind as GE
from shouldspec.matchers.base import Matcher
from shouldspec.tokens import Not, Should, Token, render_sequence, tokenize
from shouldspec.typecheck import declares_no_value

logger = logging.getLogger(__name__)

MAX_MATCHER_ARGS = 2


@dataclass
class ParseResult:
    """A parsed spec, or the grammar error that stopped parsing.

    ``args`` holds everything the matcher is called with, the subject first.
    """

    tokens: list[Token]
    negated: bool = False
    matcher: Matcher | None = None
    args: list[Any] = field(default_factory=list)
    error: GrammarError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def subject(self) -> Any:
        return self.args[0] if self.args else None

    def render(self) -> str:
        return render_sequence(self.tokens)


def resolve_value(value: Any) -> tuple[Any, GrammarError | None]:
    """Call value if it is a zero-argument function; otherwise return it."""
    if isinstance(value, FnCall) or not is_nilary(value):
        return value, None
    if declares_no_value(value):
        return None, GrammarError(GE.VALUELESS_FUNCTION, repr(value))
    return invoke(value), None


class SpecParser:
    """Left-to-right parser over the tokens of one spec sequence."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    # ------------------------------------------------------------------
    # Token navigation
    # ------------------------------------------------------------------

    def peek(self, offset: int = 0) -> Token | None:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _trace(self, stage: str) -> None:
        logger.debug(f"{stage}: {render_sequence(self.tokens[self.pos:])}")

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> ParseResult:
        result = ParseResult(tokens=self.tokens)
        if not self.tokens:
            result.error = GrammarError(GE.MISSING_VALUE)
            return result

        self._trace("subject")
        subject, err = self.parse_subject()
        if err is None:
            err = self.expect_should()
        if err is None:
            result.negated = self.accept_not()
            self._trace("matcher")
            result.matcher, err = self.parse_matcher()
        if err is not None:
            result.error = err
            return result

        result.args = [subject]
        n = result.matcher.num_in
        if n > MAX_MATCHER_ARGS:
            result.error = GrammarError(GE.TOO_MANY_ARGUMENTS, result.matcher.name)
            return result
        if n == MAX_MATCHER_ARGS:
            self._trace("argument")
            arg, err = self.parse_argument(resolve=result.matcher.resolves_argument)
            if err is not None:
                result.error = err
                return result
            result.args.append(arg)

        if not self.at_end():
            excess = render_sequence(self.tokens[self.pos:])
            result.error = GrammarError(GE.EXCESS_PIECES, excess)
        return result

    def parse_subject(self) -> tuple[Any, GrammarError | None]:
        pieces: list[Any] = []
        while (tok := self.peek()) is not None and tok.is_value:
            pieces.append(self.advance().value)

        tok = self.peek()
        if not pieces:
            return None, GrammarError(GE.MISSING_VALUE)
        if tok is None or tok.is_matcher:
            return None, GrammarError(GE.MISSING_SHOULD)
        if len(pieces) > 2:
            return None, GrammarError(GE.TOO_MANY_VALUE_PIECES, f"{len(pieces)} values")

        subject, err = resolve_value(pieces[0])
        if err is not None or len(pieces) == 1:
            return subject, err
        return self.index(subject, pieces[1])

    def index(self, subject: Any, idx: Any) -> tuple[Any, GrammarError | None]:
        if not isinstance(subject, FnCall):
            return None, GrammarError(
                GE.TOO_MANY_VALUE_PIECES, "only a function call can be indexed"
            )
        if isinstance(idx, bool) or not isinstance(idx, int):
            return None, GrammarError(GE.BAD_INDEX, repr(idx))
        if not 0 <= idx < len(subject.out):
            return None, GrammarError(
                GE.INDEX_OUT_OF_RANGE, f"{idx} of {len(subject.out)} return values"
            )
        return subject.out[idx], None

    def expect_should(self) -> GrammarError | None:
        tok = self.advance()
        if tok.value is not Should:
            return GrammarError(GE.BAD_SUGAR, f"expected Should, found {tok.render()}")
        return None

    def accept_not(self) -> bool:
        tok = self.peek()
        if tok is not None and tok.value is Not:
            self.advance()
            return True
        return False

    def parse_matcher(self) -> tuple[Matcher | None, GrammarError | None]:
        tok = self.peek()
        if tok is None:
            return None, GrammarError(GE.MISSING_MATCHER)
        if tok.is_sugar:
            return None, GrammarError(GE.BAD_SUGAR, f"unexpected {tok.render()}")
        if not tok.is_matcher:
            return None, GrammarError(GE.MISSING_MATCHER, f"found {tok.render()}")
        self.advance()
        return tok.value, None

    def parse_argument(self, resolve: bool = True) -> tuple[Any, GrammarError | None]:
        tok = self.peek()
        if tok is None:
            return None, GrammarError(GE.MISSING_ARGUMENT)
        if not tok.is_value:
            return None, GrammarError(GE.MISSING_ARGUMENT, f"found {tok.render()}")
        self.advance()
        if not resolve:
            return tok.value, None
        return resolve_value(tok.value)


def parse(sequence: Sequence[Any]) -> ParseResult:
    """Tokenize and parse the arguments of one spec call."""
    return SpecParser(tokenize(sequence)).parse()
