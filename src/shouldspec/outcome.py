"""Results of spec evaluation and their per-scope summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Status(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


@dataclass
class Outcome:
    """Result of evaluating a single spec.

    Attributes:
        sequence: Rendered spec sequence (e.g. "1 Should Not Equal 2").
        passed: Whether the matcher held, after negation.
        error: Grammar, matcher argument or matcher execution error. An
            outcome with an error never counts as passed.
    """

    sequence: str
    passed: bool
    error: Exception | None = None

    @property
    def status(self) -> Status:
        if self.error is not None:
            return Status.ERROR
        return Status.PASS if self.passed else Status.FAIL


@dataclass
class ScopeReport:
    """Summary of the specs evaluated directly inside one scope.

    Attributes:
        path: Space-joined labels of the scope and its ancestors.
        outcomes: Outcomes of the specs run in this scope, in order.
    """

    path: str
    outcomes: list[Outcome] = field(default_factory=list)

    @property
    def status(self) -> Status:
        statuses = {o.status for o in self.outcomes}
        if Status.ERROR in statuses:
            return Status.ERROR
        if Status.FAIL in statuses:
            return Status.FAIL
        return Status.PASS

    @property
    def passed(self) -> bool:
        return self.status is Status.PASS

    def message(self) -> str:
        msg = f"{self.path}: {self.status.value}"
        for outcome in self.outcomes:
            if outcome.status is Status.PASS:
                continue
            msg += f"\n\t{outcome.sequence}"
            if outcome.error is not None:
                msg += f"\n\tError: {outcome.error}"
        return msg
