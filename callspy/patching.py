"""Attribute patching for method spies.

How an attribute is put back is decided once, when the spy is installed:

- ``OWN_OVERRIDE``: the attribute lived in the target's own namespace, so the
  saved value is assigned back.
- ``INHERITED_OVERRIDE``: the attribute was only reachable through the class
  or MRO, so the override is deleted and lookup falls through again.
"""

from __future__ import annotations

import inspect
from enum import Enum, auto
from typing import Any

from .logger import get_logger

_log = get_logger("callspy.patching")


class RestorePolicy(Enum):
    """How a patched attribute is restored."""

    OWN_OVERRIDE = auto()  # reassign the saved value
    INHERITED_OVERRIDE = auto()  # delete the override


class PatchRecord:
    """Remembers one attribute overwrite and knows how to undo it."""

    def __init__(self, target: Any, key: str, own: bool) -> None:
        self.target = target
        self.key = key
        self.policy = RestorePolicy.OWN_OVERRIDE if own else RestorePolicy.INHERITED_OVERRIDE
        # Raw namespace value, so staticmethod/classmethod wrappers survive restore.
        self.saved = vars(target)[key] if own else None
        self.applied = False

    def apply(self, value: Any) -> None:
        setattr(self.target, self.key, value)
        self.applied = True
        _log.debug(
            "Patched %s (%s)",
            self.key,
            self.policy.name,
            extra={"event": "attribute_patched", "attribute": self.key, "policy": self.policy.name},
        )

    def undo(self) -> None:
        """Reverse :meth:`apply`. Does nothing once the patch is detached."""
        if not self.applied:
            return
        if self.policy is RestorePolicy.OWN_OVERRIDE:
            setattr(self.target, self.key, self.saved)
        else:
            delattr(self.target, self.key)
        self.applied = False


def binds_receiver(target: Any, key: str) -> bool:
    """Return ``True`` if instances of ``target`` receive ``self`` for ``key``.

    Only plain functions found on a class bind the instance they are looked up
    through; staticmethods, classmethods and builtins do not.
    """
    if not inspect.isclass(target):
        return False
    return inspect.isfunction(inspect.getattr_static(target, key, None))
