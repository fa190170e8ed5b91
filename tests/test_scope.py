"""Tests for the scope stack and hook bookkeeping."""

import pytest

from shouldspec.errors import TriggerError
from shouldspec.scope import After, All, Before, First, Last, Scope, ScopeStack, fire_all


def test_push_and_pop_build_paths():
    stack = ScopeStack()
    stack.push("A stack")
    inner = stack.push("starts empty")

    assert inner.path == "A stack starts empty"
    assert inner.depth == 1
    assert stack.path == "A stack starts empty"
    assert stack.path_for("pops") == "A stack starts empty pops"
    assert len(stack) == 2

    assert stack.pop() is inner
    assert stack.path == "A stack"
    stack.pop()
    assert stack.top is None
    assert stack.path == ""


def test_before_last_rejected_and_nothing_registered():
    scope = Scope(label="a", depth=0, path="a")
    with pytest.raises(TriggerError, match="Bad trigger Before Last"):
        scope.add_trigger(Before, Last, lambda: None)
    assert scope.before == []
    assert scope.after == []


def test_non_callable_hook_rejected():
    scope = Scope(label="a", depth=0, path="a")
    with pytest.raises(TriggerError):
        scope.add_trigger(After, All, "not a function")
    assert scope.after == []


def test_before_first_fires_once():
    calls = []
    scope = Scope(label="a", depth=0, path="a")
    scope.add_trigger(Before, First, lambda: calls.append("first"))
    scope.add_trigger(Before, All, lambda: calls.append("all"))

    scope.fire_before()
    scope.fire_before()

    assert calls == ["first", "all", "all"]


def test_before_first_dropped_even_if_it_raises():
    scope = Scope(label="a", depth=0, path="a")

    def broken():
        raise RuntimeError("hook")

    scope.add_trigger(Before, First, broken)
    with pytest.raises(RuntimeError):
        scope.fire_before()
    assert scope.before == []


def test_schedule_after():
    scope = Scope(label="a", depth=0, path="a")
    every = scope.add_trigger(After, All, lambda: None)
    once = scope.add_trigger(After, First, lambda: None)
    last = scope.add_trigger(After, Last, lambda: None)

    assert scope.schedule_after() == [every, once]
    assert scope.schedule_after() == [every]
    assert scope.after == [every, last]


def test_teardown_runs_last_hooks_in_order():
    calls = []
    stack = ScopeStack()
    scope = stack.push("a")
    scope.add_trigger(After, Last, lambda: calls.append(1))
    scope.add_trigger(After, All, lambda: calls.append("all"))
    scope.add_trigger(After, Last, lambda: calls.append(2))

    stack.pop()

    assert calls == [1, 2]
    assert scope.before == [] and scope.after == []


def test_pop_releases_frame_when_last_hook_raises():
    stack = ScopeStack()
    scope = stack.push("a")

    def broken():
        raise RuntimeError("teardown")

    scope.add_trigger(After, Last, broken)
    with pytest.raises(RuntimeError):
        stack.pop()
    assert len(stack) == 0


def test_raising_last_hook_does_not_skip_remaining_last_hooks():
    calls = []
    stack = ScopeStack()
    scope = stack.push("a")

    def broken():
        raise RuntimeError("first")

    scope.add_trigger(After, Last, broken)
    scope.add_trigger(After, Last, lambda: calls.append("second"))

    with pytest.raises(RuntimeError, match="first"):
        stack.pop()
    assert calls == ["second"]
    assert len(stack) == 0


def test_fire_all_reraises_first_error():
    calls = []
    scope = Scope(label="a", depth=0, path="a")

    def fail(message):
        def hook():
            calls.append(message)
            raise RuntimeError(message)

        return hook

    triggers = [
        scope.add_trigger(After, All, fail("one")),
        scope.add_trigger(After, All, fail("two")),
        scope.add_trigger(After, All, lambda: calls.append("three")),
    ]

    with pytest.raises(RuntimeError, match="one"):
        fire_all(triggers)
    assert calls == ["one", "two", "three"]


def test_stack_fires_outermost_first():
    calls = []
    stack = ScopeStack()
    stack.push("outer").add_trigger(Before, All, lambda: calls.append("outer"))
    stack.push("inner").add_trigger(Before, All, lambda: calls.append("inner"))

    stack.fire_before()

    assert calls == ["outer", "inner"]
