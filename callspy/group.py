"""Spies group - create spies and restore them as one."""

from __future__ import annotations

from typing import Any

from .factory import create_spy
from .logger import get_logger
from .proxy import Spy

_log = get_logger("callspy.group")


class SpiesGroup:
    """Creates spies with shared lifetime.

    Usage:
        group = create_spies_group()
        group.on(service, "fetch", lambda *a: {"ok": True})
        group.on(cache, "get")
        ...
        group.restore()
    """

    def __init__(self) -> None:
        self.spies: list[Spy] = []

    def on(self, target: Any, second: Any = None, third: Any = None) -> Spy:
        """Create a spy with :func:`create_spy` and add it to the group."""
        spy = create_spy(target, second, third)
        self.spies.append(spy)
        return spy

    def restore(self) -> "SpiesGroup":
        """Restore every spy in the group and forget them.

        Spies are restored newest first, so several spies stacked on one
        attribute unwind back to the original.
        """
        count = len(self.spies)
        for spy in reversed(self.spies):
            spy.restore()
        self.spies = []
        _log.debug(
            "Restored %d spies",
            count,
            extra={"event": "group_restored", "count": count},
        )
        return self

    def __len__(self) -> int:
        return len(self.spies)

    def __enter__(self) -> "SpiesGroup":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()


def create_spies_group() -> SpiesGroup:
    return SpiesGroup()
