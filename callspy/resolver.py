"""Signature resolver - classify ``create_spy`` arguments.

``create_spy`` accepts two call shapes:

    create_spy(callable, [custom_implementation])
    create_spy(obj, method_name, [custom_implementation])

The resolver decides which one applies before any proxy is built and returns
a tagged variant describing it. It never mutates the target.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from .errors import AttributeNotFoundError, SpyArgumentError, SpyUsageError

# Values that can't carry a patched attribute.
_SCALAR_TYPES = (str, bytes, int, float, complex, bool)

_MISSING = object()


@dataclass(frozen=True)
class FunctionTarget:
    """Spy on a standalone callable."""

    original: Callable[..., Any]
    replacement: Callable[..., Any] | None = None

    @property
    def implementation(self) -> Callable[..., Any]:
        return self.replacement if self.replacement is not None else self.original


@dataclass(frozen=True)
class MethodTarget:
    """Spy on a named attribute of an object, class or module."""

    target: Any
    key: str
    original: Callable[..., Any]
    replacement: Callable[..., Any] | None = None
    own: bool = False  # defined in vars(target) rather than inherited

    @property
    def implementation(self) -> Callable[..., Any]:
        return self.replacement if self.replacement is not None else self.original


SpyTarget = Union[FunctionTarget, MethodTarget]


def resolve_spy_args(target: Any, second: Any = None, third: Any = None) -> SpyTarget:
    """Classify creation arguments.

    ``None`` for ``second`` or ``third`` means the argument was not supplied.

    Raises:
        SpyArgumentError: An argument has the wrong type
        AttributeNotFoundError: The named attribute does not exist
        SpyUsageError: The arguments match neither call shape
    """
    if callable(target) and third is None and not isinstance(second, str):
        return _resolve_function(target, second)
    if _is_composite(target) and isinstance(second, str):
        return _resolve_method(target, second, third)

    if target is None and second is None and third is None:
        raise SpyArgumentError("Attempted to spy on None.")
    if second is None and not callable(target):
        raise SpyArgumentError(
            f'Attempted to spy on a non-callable value of type "{type(target).__name__}". '
            "To spy on an object method, you must provide the method name as the second argument."
        )
    raise SpyUsageError()


def has_own_attribute(target: Any, key: str) -> bool:
    """Return ``True`` if ``key`` lives in the target's own namespace."""
    namespace = getattr(target, "__dict__", None)
    if namespace is None:
        return False
    return key in namespace


def _resolve_function(target: Callable[..., Any], replacement: Any) -> FunctionTarget:
    if replacement is not None and not callable(replacement):
        raise SpyArgumentError(
            "When spying on a function, the second argument (custom implementation) "
            "must be callable if provided."
        )
    return FunctionTarget(original=target, replacement=replacement)


def _resolve_method(target: Any, key: str, replacement: Any) -> MethodTarget:
    value = getattr(target, key, _MISSING)
    if value is _MISSING:
        raise AttributeNotFoundError(key)
    if not callable(value):
        raise SpyArgumentError(
            f'Attempted to spy on "{key}" which is not callable. It is a "{type(value).__name__}".'
        )
    if replacement is not None and not callable(replacement):
        raise SpyArgumentError(
            "When spying on a method, the third argument (custom implementation) "
            "must be callable if provided."
        )
    return MethodTarget(
        target=target,
        key=key,
        original=value,
        replacement=replacement,
        own=has_own_attribute(target, key),
    )


def _is_composite(value: Any) -> bool:
    return value is not None and not isinstance(value, _SCALAR_TYPES)
