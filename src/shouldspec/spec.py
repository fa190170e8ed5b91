"""The spec engine: nested descriptions, lifecycle hooks and spec evaluation."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, ContextManager, Iterator

from shouldspec.config import SpecConfig
from shouldspec.errors import SelectionPatternError, TriggerError
from shouldspec.outcome import Outcome, ScopeReport
from shouldspec.parser import parse
from shouldspec.reporter import HostReporter
from shouldspec.scope import (
    Position,
    Quantifier,
    Scope,
    ScopeStack,
    Trigger,
    fire_all,
)
from shouldspec.verbose import setup_logger

logger = logging.getLogger(__name__)

# Selects nothing; used once the configured pattern has been rejected.
_NOTHING = re.compile(r"(?!)")


class SpecTest:
    """Behaviour specs layered over a host test.

    Describe a thing with nested scopes and write specs inside them::

        s = SpecTest(reporter)
        with s.describe("A stack"):
            with s.it("starts empty"):
                s.spec(stack.size, Should, Equal, 0)

    Every scope that ran specs itself reports one line through the host
    reporter when it exits: ``"A stack starts empty: PASS"``, or FAIL/ERROR
    followed by the offending sequences.
    """

    def __init__(self, reporter: HostReporter, config: SpecConfig | None = None):
        self.reporter = reporter
        self.config = config or SpecConfig()
        self.scopes = ScopeStack()
        self.reports: list[ScopeReport] = []

        if self.config.debug or self.config.debug_file:
            debug_file = Path(self.config.debug_file) if self.config.debug_file else None
            setup_logger(debug_file, verbose=self.config.debug)

        self._selection: re.Pattern[str] | None
        try:
            self._selection = self.config.compile_selection()
        except SelectionPatternError as e:
            self._selection = _NOTHING
            self.reporter.fatalf("%s", e)

    @property
    def path(self) -> str:
        """Labels of the open scopes, outermost first, joined by spaces."""
        return self.scopes.path

    def __str__(self) -> str:
        return self.path

    def _selects(self, path: str) -> bool:
        if self._selection is None:
            return True
        return self._selection.search(path) is not None

    # ------------------------------------------------------------------
    # Scopes
    # ------------------------------------------------------------------

    @contextmanager
    def scope(self, label: str) -> Iterator[Scope]:
        """Open a nested scope for the duration of a with block.

        The scope reports when the block completes. Its LAST after-hooks run
        and its frame is released on every exit path.
        """
        scope = self.scopes.push(label, selected=self._selects(self.scopes.path_for(label)))
        try:
            yield scope
            self._report(scope)
        finally:
            self.scopes.pop()

    def describe(
        self, thing: str, does: Callable[[], Any] | None = None
    ) -> ContextManager[Scope] | None:
        """Describe thing, either by calling does() or as a context manager."""
        if does is None:
            return self.scope(thing)
        with self.scope(thing):
            does()
        return None

    def it(
        self, specification: str, check: Callable[[], Any] | None = None
    ) -> ContextManager[Scope] | None:
        return self.describe(specification, check)

    def they(
        self, specification: str, check: Callable[[], Any] | None = None
    ) -> ContextManager[Scope] | None:
        return self.describe(specification, check)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def trigger(
        self, position: Position, quantifier: Quantifier, fn: Callable[[], Any]
    ) -> Trigger:
        """Register fn in the innermost open scope.

        Raises TriggerError for a Before/Last combination or when no scope is
        open. Nothing is registered in either case.
        """
        scope = self.scopes.top
        if scope is None:
            raise TriggerError("hooks can only be registered inside a scope")
        trigger = scope.add_trigger(position, quantifier, fn)
        logger.debug(f"{position!r} {quantifier!r} trigger in {scope.path!r}")
        return trigger

    def before(self, quantifier: Quantifier, fn: Callable[[], Any]) -> Trigger:
        return self.trigger(Position.BEFORE, quantifier, fn)

    def after(self, quantifier: Quantifier, fn: Callable[[], Any]) -> Trigger:
        return self.trigger(Position.AFTER, quantifier, fn)

    # ------------------------------------------------------------------
    # Specs
    # ------------------------------------------------------------------

    def spec(self, *sequence: Any) -> Outcome | None:
        """Evaluate ``SUBJECT [INDEX] Should [Not] MATCHER [ARGUMENT]``.

            s.spec("abc", Should, Equal, "abc")
            s.spec("abc", Should, Satisfy, lambda x: x.islower())
            v = invoke(lambda: ("abc", ValueError("Oops!")))
            s.spec(v, Should, HaveError)
            s.spec(v, Should, Equal, "abc")

        Hooks of every open scope fire around the spec whether or not the
        selection pattern selects the current scope. Returns the outcome, or
        None when the spec was not run.
        """
        scope = self.scopes.top
        if scope is None:
            self.reporter.error(f"Spec error: spec {sequence!r} outside of a scope")
            return None

        self.scopes.fire_before()
        scheduled = self.scopes.schedule_after()
        try:
            if not scope.selected:
                logger.debug(f"skipping spec in unselected scope {scope.path!r}")
                return None
            outcome = self._evaluate(sequence)
            scope.outcomes.append(outcome)
            return outcome
        finally:
            fire_all(scheduled)

    def _evaluate(self, sequence: tuple[Any, ...]) -> Outcome:
        result = parse(sequence)
        rendered = result.render()
        if not result.ok:
            logger.debug(f"parse error in {rendered}: {result.error}")
            return Outcome(rendered, passed=False, error=result.error)

        passed, err = result.matcher.matches(*result.args)
        if err is not None:
            logger.debug(f"{result.matcher.name} error in {rendered}: {err}")
            return Outcome(rendered, passed=False, error=err)
        if result.negated:
            passed = not passed
        logger.debug(f"{rendered}: passed={passed}")
        return Outcome(rendered, passed=passed)

    def _report(self, scope: Scope) -> None:
        if not scope.outcomes:
            return
        report = ScopeReport(scope.path, list(scope.outcomes))
        self.reports.append(report)
        if report.passed:
            self.reporter.log(report.message())
        else:
            self.reporter.error(report.message())
