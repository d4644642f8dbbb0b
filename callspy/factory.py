"""Spy creation entry point."""

from __future__ import annotations

from typing import Any

from .logger import get_logger
from .patching import PatchRecord, binds_receiver
from .proxy import Spy
from .resolver import FunctionTarget, MethodTarget, resolve_spy_args

_log = get_logger("callspy.factory")

_MISSING = object()


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


def create_spy(target: Any = _MISSING, second: Any = None, third: Any = None) -> Spy:
    """Create a spy.

    Spy on a standalone callable:
        create_spy(fn, [custom_implementation])

    Spy on an attribute of an object, class or module. The attribute is
    replaced by the spy right away; call ``spy.restore()`` to put it back:
        create_spy(obj, "method_name", [custom_implementation])

    Without arguments the spy wraps a no-op function.

    Raises:
        SpyArgumentError: An argument has the wrong type
        AttributeNotFoundError: The named attribute does not exist
        SpyUsageError: The arguments match neither call shape
    """
    if target is _MISSING and second is None and third is None:
        target = _noop
    elif target is _MISSING:
        target = None

    resolved = resolve_spy_args(target, second, third)
    if isinstance(resolved, MethodTarget):
        spy = _create_method_spy(resolved)
    else:
        spy = _create_function_spy(resolved)

    _log.debug(
        "Created spy %s",
        spy.name,
        extra={"event": "spy_created", "spy": spy.name, "method_spy": spy.is_method_spy},
    )
    return spy


def _create_function_spy(resolved: FunctionTarget) -> Spy:
    return Spy(
        resolved.original,
        resolved.implementation,
        name=_callable_name(resolved.original),
    )


def _create_method_spy(resolved: MethodTarget) -> Spy:
    # Inspect the class before the spy shadows the attribute.
    binds = binds_receiver(resolved.target, resolved.key)
    patch = PatchRecord(resolved.target, resolved.key, resolved.own)
    spy = Spy(
        resolved.original,
        resolved.implementation,
        name=f"{_owner_name(resolved.target)}.{resolved.key}",
        patch=patch,
        binds=binds,
    )
    patch.apply(spy)
    return spy


def _callable_name(fn: Any) -> str:
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if isinstance(name, str):
        return name
    return type(fn).__name__


def _owner_name(target: Any) -> str:
    if isinstance(target, type):
        return target.__qualname__
    name = getattr(target, "__name__", None)
    if isinstance(name, str):
        return name
    return type(target).__name__
