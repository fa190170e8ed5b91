"""Runtime type introspection for subjects, predicates and matchers."""

from __future__ import annotations

import inspect
import logging
import types
import typing
from typing import Any, Callable, Union

from pydantic import PydanticSchemaGenerationError, PydanticUserError, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

_EMPTY = inspect.Parameter.empty
_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def signature_of(fn: Callable[..., Any]) -> inspect.Signature | None:
    """Return fn's signature, or None when it cannot be inspected."""
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        return None


def positional_parameters(sig: inspect.Signature) -> list[inspect.Parameter]:
    return [p for p in sig.parameters.values() if p.kind in _POSITIONAL]


def has_var_positional(sig: inspect.Signature) -> bool:
    return any(
        p.kind is inspect.Parameter.VAR_POSITIONAL for p in sig.parameters.values()
    )


def required_keyword_only(sig: inspect.Signature) -> list[inspect.Parameter]:
    return [
        p
        for p in sig.parameters.values()
        if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is _EMPTY
    ]


def required_parameters(sig: inspect.Signature) -> list[inspect.Parameter]:
    return [
        p
        for p in sig.parameters.values()
        if p.default is _EMPTY
        and p.kind
        not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


def type_hints(fn: Callable[..., Any]) -> dict[str, Any]:
    """Resolve fn's annotations, falling back to the raw ones.

    String annotations that cannot be evaluated (names only visible inside a
    test function, for example) are dropped rather than guessed at.
    """
    target = inspect.unwrap(fn)
    try:
        return typing.get_type_hints(target)
    except Exception:
        raw = getattr(target, "__annotations__", None) or {}
        return {k: v for k, v in raw.items() if not isinstance(v, str)}


def return_hint(fn: Callable[..., Any]) -> Any:
    """Declared return type of fn, or inspect.Parameter.empty."""
    return type_hints(fn).get("return", _EMPTY)


def declares_no_value(fn: Callable[..., Any]) -> bool:
    """True when fn is annotated ``-> None``."""
    hint = return_hint(fn)
    return hint is None or hint is type(None)


def return_components(hint: Any) -> list[Any]:
    """Split a declared return type into its positional return values.

    ``tuple[int, Exception | None]`` declares two values; any other hint
    declares one. A variadic ``tuple[X, ...]`` declares a run of X.
    """
    if typing.get_origin(hint) is tuple:
        args = typing.get_args(hint)
        if len(args) == 2 and args[1] is Ellipsis:
            return [args[0]]
        return list(args)
    return [hint]


def _is_union(hint: Any) -> bool:
    origin = typing.get_origin(hint)
    return origin is Union or origin is types.UnionType


def error_capable(hint: Any) -> bool:
    """Whether a value of the declared type can hold an exception."""
    if hint is _EMPTY or hint is Any or hint is object:
        return True
    if _is_union(hint):
        return any(
            error_capable(arg) for arg in typing.get_args(hint) if arg is not type(None)
        )
    if isinstance(hint, type):
        return issubclass(hint, BaseException)
    return False


def bool_capable(hint: Any) -> bool:
    """Whether the declared type is (or accepts) a plain bool."""
    if hint is _EMPTY or hint is Any or hint is bool:
        return True
    if _is_union(hint):
        return any(bool_capable(arg) for arg in typing.get_args(hint))
    return False


def _adapter(hint: Any) -> TypeAdapter[Any] | None:
    try:
        return TypeAdapter(hint)
    except (PydanticSchemaGenerationError, PydanticUserError, TypeError) as e:
        logger.debug(f"no schema for {hint!r}: {e}")
        return None


def admits(hint: Any, value: Any) -> bool:
    """Whether value may be passed where hint is declared.

    Validation is strict so that no coercion stands in for assignability:
    a str is not admitted where an int is declared.
    """
    if hint is _EMPTY or hint is Any or hint is object:
        return True

    adapter = _adapter(hint)
    if adapter is not None:
        try:
            adapter.validate_python(value, strict=True)
        except ValidationError:
            return False
        return True

    origin = typing.get_origin(hint) or hint
    if isinstance(origin, type):
        return isinstance(value, origin)
    return True
