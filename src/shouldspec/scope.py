"""Nested description scopes and the lifecycle hooks they own."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Iterator

from shouldspec.errors import TriggerError
from shouldspec.outcome import Outcome

logger = logging.getLogger(__name__)


class Quantifier(Enum):
    """How often a hook fires for the specs nested in its scope.

    ALL fires around every spec, FIRST around the next spec only, and LAST
    (after-hooks only) once when the scope is torn down.
    """

    ALL = "All"
    FIRST = "First"
    LAST = "Last"

    def __repr__(self) -> str:
        return self.value


class Position(Enum):
    BEFORE = "Before"
    AFTER = "After"

    def __repr__(self) -> str:
        return self.value


All = Quantifier.ALL
First = Quantifier.FIRST
Last = Quantifier.LAST
Before = Position.BEFORE
After = Position.AFTER


@dataclass(eq=False)
class Trigger:
    quantifier: Quantifier
    fn: Callable[[], Any]

    def fire(self) -> None:
        logger.debug(f"firing {self!r}")
        self.fn()


def fire_all(triggers: Iterable[Trigger]) -> None:
    """Fire every trigger even if some raise, then re-raise the first error."""
    first: Exception | None = None
    for trigger in triggers:
        try:
            trigger.fire()
        except Exception as e:
            if first is None:
                first = e
            else:
                logger.warning(f"{trigger!r} also raised {e!r}")
    if first is not None:
        raise first


@dataclass
class Scope:
    """One frame of the scope stack.

    Hook lists belong to the frame and are discarded with it.
    """

    label: str
    depth: int
    path: str
    selected: bool = True
    before: list[Trigger] = field(default_factory=list)
    after: list[Trigger] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)

    def add_trigger(
        self, position: Position, quantifier: Quantifier, fn: Callable[[], Any]
    ) -> Trigger:
        if position is Position.BEFORE and quantifier is Quantifier.LAST:
            raise TriggerError(f"Bad trigger {position.value} {quantifier.value}")
        if not callable(fn):
            raise TriggerError(f"trigger callback is not callable: {fn!r}")
        trigger = Trigger(quantifier, fn)
        if position is Position.BEFORE:
            self.before.append(trigger)
        else:
            self.after.append(trigger)
        return trigger

    def fire_before(self) -> None:
        for trigger in list(self.before):
            try:
                trigger.fire()
            finally:
                if trigger.quantifier is Quantifier.FIRST:
                    self.before.remove(trigger)

    def schedule_after(self) -> list[Trigger]:
        """Hooks to run once the current spec finishes.

        FIRST hooks are handed out once and dropped; LAST hooks wait for
        teardown.
        """
        scheduled = [t for t in self.after if t.quantifier is not Quantifier.LAST]
        self.after = [t for t in self.after if t.quantifier is not Quantifier.FIRST]
        return scheduled

    def teardown(self) -> None:
        """Run the remaining LAST after-hooks in registration order."""
        last = [t for t in self.after if t.quantifier is Quantifier.LAST]
        try:
            fire_all(last)
        finally:
            self.before.clear()
            self.after.clear()


class ScopeStack:
    """Strictly nested scopes, outermost first."""

    def __init__(self) -> None:
        self._frames: list[Scope] = []

    def push(self, label: str, selected: bool = True) -> Scope:
        path = self.path_for(label)
        scope = Scope(label=label, depth=len(self._frames), path=path, selected=selected)
        self._frames.append(scope)
        logger.debug(f"enter {path!r} (selected={selected})")
        return scope

    def pop(self) -> Scope:
        """Tear down the innermost scope and release its frame."""
        scope = self._frames[-1]
        try:
            scope.teardown()
        finally:
            self._frames.pop()
            logger.debug(f"exit {scope.path!r}")
        return scope

    @property
    def top(self) -> Scope | None:
        return self._frames[-1] if self._frames else None

    @property
    def depth(self) -> int:
        return len(self._frames)

    def path_for(self, label: str) -> str:
        return " ".join([*(s.label for s in self._frames), label])

    @property
    def path(self) -> str:
        return " ".join(s.label for s in self._frames)

    def fire_before(self) -> None:
        for scope in self._frames:
            scope.fire_before()

    def schedule_after(self) -> list[Trigger]:
        scheduled: list[Trigger] = []
        for scope in self._frames:
            scheduled.extend(scope.schedule_after())
        return scheduled

    def __iter__(self) -> Iterator[Scope]:
        return iter(self._frames)

    def __len__(self) -> int:
        return len(self._frames)
