"""Error types raised or returned by the spec engine."""

from __future__ import annotations

from enum import Enum


class SpecError(Exception):
    """Base class for every error produced by shouldspec."""


class GrammarErrorKind(str, Enum):
    MISSING_VALUE = "missing value"
    MISSING_SHOULD = "missing Should"
    BAD_SUGAR = "bad sugar"
    MISSING_MATCHER = "missing matcher"
    TOO_MANY_VALUE_PIECES = "too many value pieces"
    BAD_INDEX = "missing 'int' value index"
    INDEX_OUT_OF_RANGE = "index out of range"
    VALUELESS_FUNCTION = "value-less function"
    TOO_MANY_ARGUMENTS = "needs too many arguments"
    MISSING_ARGUMENT = "missing argument"
    EXCESS_PIECES = "excess specification pieces"


class GrammarError(SpecError):
    """A spec sequence that does not follow ``SUBJECT Should [Not] MATCHER [ARG]``."""

    def __init__(self, kind: GrammarErrorKind, detail: str | None = None):
        self.kind = kind
        self.detail = detail
        message = kind.value
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MatcherDefinitionError(SpecError, TypeError):
    """A function that cannot be turned into a matcher."""


class MatcherArgumentError(SpecError):
    """A matcher was given values it cannot work with."""


class MatcherExecutionError(SpecError):
    """A matcher raised, or returned something other than ``(bool, error)``."""

    def __init__(self, message: str, fault: BaseException | None = None):
        super().__init__(message)
        self.fault = fault


class TriggerError(SpecError, ValueError):
    """A lifecycle hook could not be registered."""


class SelectionPatternError(SpecError, ValueError):
    """The configured selection pattern is not a valid regular expression."""


class SpecFailure(AssertionError):
    """Raised by reporters that have no host-specific way to fail a test."""
