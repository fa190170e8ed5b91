"""Behaviour specs that read as sentences, on top of an ordinary test.

    s.spec(stack.pop, Should, Equal, 3)
    s.spec(lambda: parse(""), Should, HaveError)
"""

from shouldspec.calls import FnCall, invoke
from shouldspec.config import SpecConfig, load_config
from shouldspec.errors import (
    GrammarError,
    GrammarErrorKind,
    MatcherArgumentError,
    MatcherDefinitionError,
    MatcherExecutionError,
    SelectionPatternError,
    SpecError,
    SpecFailure,
    TriggerError,
)
from shouldspec.matchers import (
    Equal,
    HaveError,
    Matcher,
    MatcherRegistry,
    Raise,
    Satisfy,
    get_matcher,
    new_matcher,
    register_matcher,
)
from shouldspec.outcome import Outcome, ScopeReport, Status
from shouldspec.reporter import BufferedReporter, HostReporter, UnittestReporter
from shouldspec.scope import After, All, Before, First, Last, Position, Quantifier
from shouldspec.spec import SpecTest
from shouldspec.tokens import Not, Should, Sugar

__all__ = [
    "After",
    "All",
    "Before",
    "BufferedReporter",
    "Equal",
    "First",
    "FnCall",
    "GrammarError",
    "GrammarErrorKind",
    "HaveError",
    "HostReporter",
    "Last",
    "Matcher",
    "MatcherArgumentError",
    "MatcherDefinitionError",
    "MatcherExecutionError",
    "MatcherRegistry",
    "Not",
    "Outcome",
    "Position",
    "Quantifier",
    "Raise",
    "Satisfy",
    "ScopeReport",
    "SelectionPatternError",
    "Should",
    "SpecConfig",
    "SpecError",
    "SpecFailure",
    "SpecTest",
    "Status",
    "Sugar",
    "TriggerError",
    "UnittestReporter",
    "get_matcher",
    "invoke",
    "load_config",
    "new_matcher",
    "register_matcher",
]
