"""Deep structural equality."""

from __future__ import annotations

import types
from typing import Any

# Compared by identity only
_IDENTITY_TYPES = (
    type,
    types.FunctionType,
    types.ModuleType,
)


def _has_custom_eq(obj: Any) -> bool:
    return type(obj).__eq__ is not object.__eq__


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def _attributes(obj: Any) -> dict[str, Any]:
    attrs = dict(getattr(obj, "__dict__", {}))
    if isinstance(obj, BaseException):
        # Exception state lives in args, not __dict__
        attrs["args"] = obj.args
    for name in _slot_names(type(obj)):
        if hasattr(obj, name):
            attrs[name] = getattr(obj, name)
    return attrs


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values by content rather than identity.

    Both values must have exactly the same type, so ``1`` and ``1.0`` or
    ``True`` and ``1`` are different. Lists, tuples and dicts are compared
    element by element; objects without their own ``__eq__`` are compared
    attribute by attribute (exceptions by ``args`` too), so two stateless
    instances of one class are equal. Functions, classes and modules are
    equal only to themselves; everything else uses ``==``.
    """
    return _deep_equal(a, b, set())


def _deep_equal(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    if type(a) is not type(b):
        return False
    if a is b:
        return True

    key = (id(a), id(b))
    if key in seen:
        return True

    if isinstance(a, (list, tuple)):
        if len(a) != len(b):
            return False
        seen.add(key)
        return all(_deep_equal(x, y, seen) for x, y in zip(a, b))

    if isinstance(a, dict):
        if a.keys() != b.keys():
            return False
        seen.add(key)
        return all(_deep_equal(a[k], b[k], seen) for k in a)

    if isinstance(a, _IDENTITY_TYPES):
        return False

    if not _has_custom_eq(a):
        seen.add(key)
        attrs_a, attrs_b = _attributes(a), _attributes(b)
        return _deep_equal(attrs_a, attrs_b, seen)

    return bool(a == b)
