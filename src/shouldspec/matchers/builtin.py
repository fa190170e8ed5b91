"""The default set of spec matchers."""

from __future__ import annotations

import inspect
from typing import Any

from shouldspec.calls import FnCall
from shouldspec.errors import MatcherArgumentError
from shouldspec.matchers.equality import deep_equal
from shouldspec.typecheck import (
    admits,
    bool_capable,
    error_capable,
    has_var_positional,
    positional_parameters,
    required_keyword_only,
    return_components,
    return_hint,
    signature_of,
    type_hints,
)


def _unwrap(x: Any, matcher: str) -> tuple[Any, Exception | None]:
    """Return x, or the first return value of x when it is a function call."""
    if not isinstance(x, FnCall):
        return x, None
    if not x.out:
        return None, MatcherArgumentError(
            f"{matcher} given a function call without return values: {x!r}"
        )
    return x.first, None


def matcher_equal(a: Any, b: Any) -> tuple[bool, Exception | None]:
    """Deep structural equality of two values."""
    a, err = _unwrap(a, "Equal")
    if err is not None:
        return False, err
    b, err = _unwrap(b, "Equal")
    if err is not None:
        return False, err
    return deep_equal(a, b), None


def matcher_satisfy(x: Any, fn: Any) -> tuple[bool, Exception | None]:
    """Check that predicate ``fn(x) -> bool`` holds for x."""
    if not callable(fn) or isinstance(fn, type):
        return False, MatcherArgumentError("Satisfy given non-function")
    x, err = _unwrap(x, "Satisfy")
    if err is not None:
        return False, err

    sig = signature_of(fn)
    if sig is None:
        return False, MatcherArgumentError(f"Satisfy cannot inspect predicate {fn!r}")
    params = positional_parameters(sig)
    if len(params) != 1 or has_var_positional(sig) or required_keyword_only(sig):
        return False, MatcherArgumentError("Satisfy needs a function of one argument")

    hints = type_hints(fn)
    param_hint = hints.get(params[0].name, inspect.Parameter.empty)
    if not admits(param_hint, x):
        return False, MatcherArgumentError(
            f"Satisfy argument type-mismatch: {type(x).__name__} "
            f"is not assignable to {param_hint!r}"
        )
    if not bool_capable(hints.get("return", inspect.Parameter.empty)):
        return False, MatcherArgumentError("Satisfy needs a predicate (fn(x) -> bool)")

    out = fn(x)
    if not isinstance(out, bool):
        return False, MatcherArgumentError(
            f"Satisfy output type-mismatch: predicate returned {out!r}"
        )
    return out, None


def matcher_have_error(fn: Any) -> tuple[bool, Exception | None]:
    """Check that a function call's last return value is an exception."""
    if not isinstance(fn, FnCall):
        return False, MatcherArgumentError("HaveError needs a function call value")

    hint = return_hint(fn.fn)
    if hint is not inspect.Parameter.empty:
        declared = return_components(hint)
        if not error_capable(declared[-1]):
            return False, MatcherArgumentError(
                "HaveError function call's last value must be an exception"
            )

    if not fn.out:
        return False, MatcherArgumentError(
            f"HaveError function call has no return values: {fn!r}"
        )

    last = fn.out[-1]
    if last is None:
        return False, None
    if isinstance(last, BaseException):
        return True, None
    return False, MatcherArgumentError(
        f"function call can not have error: last value is {last!r}"
    )


def matcher_raise(fn: Any) -> tuple[bool, Exception | None]:
    """Check that calling a function raised an exception."""
    if not isinstance(fn, FnCall):
        return False, MatcherArgumentError("Raise needs a function call value")
    return fn.fault is not None, None
