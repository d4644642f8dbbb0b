"""Call log domain models.

Records are frozen dataclasses; the log only ever grows until it is cleared.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CallRecord:
    """One invocation of a spy."""

    call_id: str  # "greet#0", "Greeter.greet#3"
    args: tuple[Any, ...]
    kwargs: dict[str, Any] = field(default_factory=dict)
    this: Any = None  # receiver the spy was reached through
    return_value: Any = None
    error: BaseException | None = None
    threw: bool = False
    timestamp: float = 0.0
    duration_ms: float | None = None

    # Arguments and results are arbitrary, often unhashable, values.
    __hash__ = None  # type: ignore[assignment]

    @property
    def returned(self) -> bool:
        return not self.threw


@dataclass(frozen=True)
class CallSlot:
    """Position reserved for a call when it starts."""

    call_id: str
    index: int
    generation: int


class CallLog:
    """Stores call records for a single spy, in the order calls started.

    A slot is reserved before the wrapped callable runs and filled when it
    finishes, so nested calls keep their start order.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._slots: list[CallRecord | None] = []
        self._generation = 0

    @property
    def count(self) -> int:
        return len(self._slots)

    def reserve(self) -> CallSlot:
        """Count a new call and reserve its position in the log."""
        index = len(self._slots)
        self._slots.append(None)
        return CallSlot(call_id=f"{self._name}#{index}", index=index, generation=self._generation)

    def record(self, slot: CallSlot, record: CallRecord) -> None:
        # A call that outlived a clear() belongs to the discarded history.
        if slot.generation != self._generation:
            return
        self._slots[slot.index] = record

    def get(self, index: int) -> CallRecord | None:
        """Return the record at ``index``, or ``None`` while that call runs."""
        return self._slots[index]

    def get_records(self) -> tuple[CallRecord, ...]:
        """Return the finished calls in start order."""
        return tuple(record for record in self._slots if record is not None)

    def clear(self) -> None:
        self._slots = []
        self._generation += 1
