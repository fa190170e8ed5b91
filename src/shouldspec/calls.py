"""Nilary function resolution: subjects that are computed by calling them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from shouldspec.typecheck import required_parameters, signature_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FnCall:
    """The realised call of a zero-argument function.

    Attributes:
        fn: The function that was called.
        out: Its return values in order. A returned tuple contributes one
            entry per element; any other result is a single entry. Empty when
            the call raised.
        fault: The exception the call raised, if any.
    """

    fn: Callable[[], Any]
    out: list[Any] = field(default_factory=list)
    fault: Exception | None = None

    @property
    def first(self) -> Any:
        return self.out[0]

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", repr(self.fn))
        if self.fault is not None:
            return f"{name}() raised {self.fault!r}"
        return f"{name}() -> {', '.join(repr(v) for v in self.out)}"


def is_nilary(value: Any) -> bool:
    """Whether value is a function that can be called with no arguments.

    Classes are values, not functions to call.
    """
    if isinstance(value, (type, FnCall)) or not callable(value):
        return False
    sig = signature_of(value)
    if sig is None:
        return False
    return not required_parameters(sig)


def invoke(fn: Callable[[], Any]) -> FnCall:
    """Call fn with no arguments, capturing its return values or its exception."""
    try:
        result = fn()
    except Exception as e:
        logger.debug(f"{fn!r} raised {e!r}")
        return FnCall(fn=fn, fault=e)
    if isinstance(result, tuple):
        return FnCall(fn=fn, out=list(result))
    return FnCall(fn=fn, out=[result])


def value_of(x: Any) -> Any:
    """Return x, or the first return value of x when it is a realised call."""
    if isinstance(x, FnCall):
        return x.first
    return x
