"""Value comparison used by the spy inspection API.

Recorded arguments and results are compared with *same-value* semantics
instead of ``==``:

- an object is always the same value as itself;
- ``int``, ``float``, ``complex``, ``str``, ``bytes`` and ``bool`` compare by
  value, but only against the exact same type (``1`` is not ``1.0`` or
  ``True``);
- ``nan`` is the same value as ``nan``, while ``0.0`` and ``-0.0`` differ;
- everything else compares by identity.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

_VALUE_TYPES = (bool, int, str, bytes)


def same_value(a: Any, b: Any) -> bool:
    """Return ``True`` when ``a`` and ``b`` are the same value."""
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, float):
        return _same_float(a, b)
    if isinstance(a, complex):
        return _same_float(a.real, b.real) and _same_float(a.imag, b.imag)
    if isinstance(a, _VALUE_TYPES):
        return a == b
    return False


def args_match(
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
    expected_args: Sequence[Any],
    expected_kwargs: Mapping[str, Any],
) -> bool:
    """Compare a recorded argument list against an expected one."""
    if len(args) != len(expected_args) or len(kwargs) != len(expected_kwargs):
        return False
    if any(not same_value(actual, expected) for actual, expected in zip(args, expected_args)):
        return False
    for name, expected in expected_kwargs.items():
        if name not in kwargs or not same_value(kwargs[name], expected):
            return False
    return True


def error_matches(error: BaseException, matcher: Any = None) -> bool:
    """Check a raised exception against an optional matcher.

    Args:
        error: The exception recorded for a call
        matcher: ``None`` matches anything. A ``str`` matches the exception
            message, an exception class matches by ``isinstance`` and an
            exception instance matches by class name and message. Any other
            value falls back to :func:`same_value`.
    """
    if matcher is None:
        return True
    if isinstance(matcher, str):
        return str(error) == matcher
    if isinstance(matcher, type):
        return isinstance(error, matcher)
    if isinstance(matcher, BaseException):
        return type(error).__name__ == type(matcher).__name__ and str(error) == str(matcher)
    return same_value(error, matcher)


def _same_float(a: float, b: float) -> bool:
    if math.isnan(a) and math.isnan(b):
        return True
    if a == 0.0 and b == 0.0:
        return math.copysign(1.0, a) == math.copysign(1.0, b)
    return a == b
