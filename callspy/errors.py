"""Spy errors."""

from __future__ import annotations

INVALID_SIGNATURE_MESSAGE = (
    "Invalid arguments. Valid signatures:\n"
    "  create_spy(callable, [custom_implementation])\n"
    "  create_spy(obj, method_name, [custom_implementation])"
)


class SpyArgumentError(TypeError):
    """Raised when a creation argument has the wrong type."""

    pass


class AttributeNotFoundError(AttributeError):
    """Raised when the attribute to spy on does not exist on the target."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Attempted to spy on a non-existent attribute: "{key}"')


class CallIndexError(IndexError):
    """Raised when a call index does not point at a recorded call."""

    def __init__(self, index: object, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"Invalid call index {index!r}. Spy has {count} call(s).")


class SpyUsageError(ValueError):
    """Raised for creation calls that match none of the valid signatures."""

    def __init__(self, message: str = INVALID_SIGNATURE_MESSAGE) -> None:
        super().__init__(message)
