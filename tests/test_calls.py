"""Tests for nilary function detection and invocation."""

import functools

import pytest

from shouldspec.calls import FnCall, invoke, is_nilary, value_of


class Widget:
    pass


def _two() -> tuple[int, Exception | None]:
    return 2, None


@pytest.mark.parametrize(
    "value",
    [
        lambda: 1,
        lambda x=1: x,
        lambda *args: args,
        _two,
        [].copy,
        functools.partial(lambda x: x, 3),
    ],
)
def test_is_nilary(value):
    assert is_nilary(value)


@pytest.mark.parametrize(
    "value",
    [
        1,
        "abc",
        None,
        lambda x: x,
        lambda *, key: key,
        Widget,
        int,
        FnCall(fn=_two, out=[2, None]),
    ],
)
def test_is_not_nilary(value):
    assert not is_nilary(value)


def test_invoke_single_value():
    call = invoke(lambda: 3)
    assert call.out == [3]
    assert call.fault is None
    assert call.first == 3


def test_invoke_tuple_becomes_multiple_values():
    err = ValueError("blah")
    call = invoke(lambda: (True, err))
    assert call.out == [True, err]


def test_invoke_none_is_a_value():
    call = invoke(lambda: None)
    assert call.out == [None]


def test_invoke_captures_fault():
    def boom():
        raise RuntimeError("boom")

    call = invoke(boom)
    assert call.out == []
    assert isinstance(call.fault, RuntimeError)
    assert "raised RuntimeError('boom')" in repr(call)


def test_invoke_does_not_capture_base_exceptions():
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        invoke(interrupt)


def test_value_of():
    assert value_of(5) == 5
    assert value_of(invoke(lambda: (7, None))) == 7


def test_repr_lists_values():
    assert repr(invoke(_two)) == "_two() -> 2, None"
