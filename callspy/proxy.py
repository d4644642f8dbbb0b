"""Spy proxy - wraps a callable to record its calls.

Core component that:
1. Counts the call before running anything
2. Runs the active implementation (original or replacement)
3. Records arguments, receiver and outcome in the call log
4. Hands the result, or the identical exception, back to the caller
"""

from __future__ import annotations

import operator
import time
from collections.abc import Callable
from typing import Any

from .comparison import args_match, error_matches, same_value
from .errors import CallIndexError
from .logger import get_logger
from .patching import PatchRecord
from .records import CallLog, CallRecord

_log = get_logger("callspy.proxy")


class Spy:
    """Callable that records every invocation of the wrapped implementation.

    A spy binds like a plain function when it is found on a class and looked
    up through an instance; see :meth:`__get__`.

    Usage:
        spy = create_spy(greet)
        spy("Ann")
        assert spy.call_count == 1
        assert spy.get_call(0).args == ("Ann",)
    """

    def __init__(
        self,
        original: Callable[..., Any],
        implementation: Callable[..., Any],
        *,
        name: str,
        patch: PatchRecord | None = None,
        binds: bool = True,
    ) -> None:
        """Initialize a spy.

        Args:
            original: Callable the spy was created over
            implementation: Callable actually run on each call
            name: Label used for call ids, ``repr`` and log records
            patch: Attribute overwrite to undo on restore (method spies only)
            binds: Whether instance attribute access passes the instance
        """
        self._original = original
        self._implementation = implementation
        self._name = name
        self._patch = patch
        self._binds = binds
        self._call_log = CallLog(name)
        self.__wrapped__ = original

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        this = self._patch.target if self.is_patched else None
        return self._invoke(this, args, kwargs, pass_receiver=False)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None or not self._binds:
            return self
        return BoundSpy(self, instance)

    def _invoke(self, this: Any, args: tuple[Any, ...], kwargs: dict[str, Any], *, pass_receiver: bool) -> Any:
        slot = self._call_log.reserve()
        call_id = slot.call_id
        args = tuple(args)
        kwargs = dict(kwargs)
        timestamp = time.time()
        start = time.perf_counter()
        try:
            if pass_receiver:
                result = self._implementation(this, *args, **kwargs)
            else:
                result = self._implementation(*args, **kwargs)
        except BaseException as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            self._call_log.record(
                slot,
                CallRecord(
                    call_id=call_id,
                    args=args,
                    kwargs=kwargs,
                    this=this,
                    error=exc,
                    threw=True,
                    timestamp=timestamp,
                    duration_ms=duration_ms,
                )
            )
            _log.debug(
                "Raised: %s -> %s [%.2fms]",
                call_id,
                type(exc).__name__,
                duration_ms,
                extra={"event": "spy_call_error", "call_id": call_id, "error_type": type(exc).__name__},
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        self._call_log.record(
            slot,
            CallRecord(
                call_id=call_id,
                args=args,
                kwargs=kwargs,
                this=this,
                return_value=result,
                timestamp=timestamp,
                duration_ms=duration_ms,
            )
        )
        _log.debug(
            "Completed: %s [%.2fms]",
            call_id,
            duration_ms,
            extra={"event": "spy_call_complete", "call_id": call_id, "duration_ms": duration_ms},
        )
        return result

    @property
    def name(self) -> str:
        return self._name

    @property
    def original(self) -> Callable[..., Any]:
        return self._original

    @property
    def implementation(self) -> Callable[..., Any]:
        return self._implementation

    @property
    def is_method_spy(self) -> bool:
        return self._patch is not None

    @property
    def target(self) -> Any:
        return self._patch.target if self._patch is not None else None

    @property
    def key(self) -> str | None:
        return self._patch.key if self._patch is not None else None

    @property
    def is_patched(self) -> bool:
        """Whether the spy is currently installed on its target."""
        return self._patch is not None and self._patch.applied

    @property
    def calls(self) -> tuple[CallRecord, ...]:
        return self._call_log.get_records()

    @property
    def call_count(self) -> int:
        return self._call_log.count

    @property
    def called(self) -> bool:
        return self._call_log.count > 0

    is_called = called

    @property
    def last_call(self) -> CallRecord | None:
        records = self._call_log.get_records()
        return records[-1] if records else None

    def get_call(self, index: int) -> CallRecord:
        """Return the record of the call at ``index`` (zero-based).

        Raises:
            CallIndexError: ``index`` is not an int in ``[0, call_count)``
        """
        count = self._call_log.count
        if isinstance(index, bool):
            raise CallIndexError(index, count)
        try:
            position = operator.index(index)
        except TypeError:
            raise CallIndexError(index, count) from None
        if position < 0 or position >= count:
            raise CallIndexError(index, count)
        record = self._call_log.get(position)
        # A call still running is counted but not yet recorded.
        if record is None:
            raise CallIndexError(index, count)
        return record

    def called_with(self, *args: Any, **kwargs: Any) -> bool:
        """Return ``True`` if any call received exactly these arguments."""
        return any(args_match(call.args, call.kwargs, args, kwargs) for call in self._call_log.get_records())

    def nth_called_with(self, index: int, /, *args: Any, **kwargs: Any) -> bool:
        call = self.get_call(index)
        return args_match(call.args, call.kwargs, args, kwargs)

    def nth_call_returned(self, index: int, value: Any) -> bool:
        call = self.get_call(index)
        if call.threw:
            return False
        return same_value(call.return_value, value)

    def nth_call_threw(self, index: int, matcher: Any = None) -> bool:
        """Return ``True`` if the call at ``index`` raised a matching exception.

        See :func:`callspy.comparison.error_matches` for the matcher forms.
        """
        call = self.get_call(index)
        if not call.threw:
            return False
        return error_matches(call.error, matcher)

    def reset(self) -> None:
        """Forget recorded calls without touching the patched attribute."""
        self._call_log.clear()

    def restore(self) -> None:
        """Undo the attribute patch (method spies) and clear the call history.

        Safe to call any number of times.
        """
        was_patched = self.is_patched
        if self._patch is not None:
            self._patch.undo()
        self._call_log.clear()
        _log.debug(
            "Restored: %s",
            self._name,
            extra={"event": "spy_restored", "spy": self._name, "unpatched": was_patched},
        )

    def __enter__(self) -> "Spy":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def __repr__(self) -> str:
        kind = "method" if self.is_method_spy else "function"
        return f"<Spy {kind} {self._name} ({self._call_log.count} calls)>"


class BoundSpy:
    """A spy looked up through an instance, like a bound method.

    Calls record the instance as the receiver and pass it to the
    implementation. Inspection attributes are read from the spy.
    """

    def __init__(self, spy: Spy, instance: Any) -> None:
        self.__func__ = spy
        self.__self__ = instance

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.__func__._invoke(self.__self__, args, kwargs, pass_receiver=True)

    def __getattr__(self, name: str) -> Any:
        if name in ("__func__", "__self__"):
            raise AttributeError(name)
        return getattr(self.__func__, name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoundSpy):
            return self.__func__ is other.__func__ and self.__self__ is other.__self__
        return NotImplemented

    def __hash__(self) -> int:
        return hash((id(self.__func__), id(self.__self__)))

    def __repr__(self) -> str:
        return f"<BoundSpy {self.__func__.name} of {self.__self__!r}>"
