"""Unit tests for create_spy argument classification."""

import math
from types import SimpleNamespace

import pytest

from callspy.errors import AttributeNotFoundError, SpyArgumentError, SpyUsageError
from callspy.resolver import FunctionTarget, MethodTarget, has_own_attribute, resolve_spy_args


def _original(x):
    return x


class _Base:
    def method(self):
        return "base"


class TestFunctionTargets:
    """Callable targets resolve to FunctionTarget."""

    def test_plain_callable(self) -> None:
        """Implementation falls back to the original."""
        resolved = resolve_spy_args(_original)

        assert isinstance(resolved, FunctionTarget)
        assert resolved.original is _original
        assert resolved.replacement is None
        assert resolved.implementation is _original

    def test_replacement_becomes_implementation(self) -> None:
        """A second callable argument replaces the original."""
        replacement = lambda x: 42  # noqa: E731
        resolved = resolve_spy_args(_original, replacement)

        assert resolved.original is _original
        assert resolved.implementation is replacement

    def test_non_callable_replacement(self) -> None:
        """A non-callable replacement is a type error."""
        with pytest.raises(SpyArgumentError) as exc_info:
            resolve_spy_args(_original, 123)

        assert str(exc_info.value) == (
            "When spying on a function, the second argument (custom implementation) "
            "must be callable if provided."
        )
        assert isinstance(exc_info.value, TypeError)


class TestMethodTargets:
    """Object plus attribute name resolves to MethodTarget."""

    def test_own_attribute(self) -> None:
        """Attributes in the instance namespace are own."""
        fn = lambda: "own"  # noqa: E731
        obj = SimpleNamespace(fn=fn)

        resolved = resolve_spy_args(obj, "fn")

        assert isinstance(resolved, MethodTarget)
        assert resolved.target is obj
        assert resolved.key == "fn"
        assert resolved.original is fn
        assert resolved.own is True

    def test_inherited_attribute(self) -> None:
        """Methods found through the class are not own."""
        instance = _Base()

        resolved = resolve_spy_args(instance, "method")

        assert resolved.own is False
        assert resolved.original() == "base"

    def test_class_target(self) -> None:
        """Classes are callable but a name still selects method mode."""
        resolved = resolve_spy_args(_Base, "method")

        assert isinstance(resolved, MethodTarget)
        assert resolved.own is True
        assert resolved.original is _Base.__dict__["method"]

    def test_replacement(self) -> None:
        """A third callable argument replaces the method."""
        replacement = lambda self: "custom"  # noqa: E731
        resolved = resolve_spy_args(_Base, "method", replacement)

        assert resolved.implementation is replacement

    def test_missing_attribute(self) -> None:
        """Missing attributes raise a not-found error naming the key."""
        with pytest.raises(AttributeNotFoundError) as exc_info:
            resolve_spy_args(SimpleNamespace(), "missing")

        assert exc_info.value.key == "missing"
        assert str(exc_info.value) == 'Attempted to spy on a non-existent attribute: "missing"'
        assert isinstance(exc_info.value, AttributeError)

    def test_non_callable_attribute(self) -> None:
        """The error names the runtime type of the attribute."""
        with pytest.raises(SpyArgumentError) as exc_info:
            resolve_spy_args(SimpleNamespace(prop=123), "prop")

        assert str(exc_info.value) == 'Attempted to spy on "prop" which is not callable. It is a "int".'

    def test_non_callable_replacement(self) -> None:
        """A non-callable third argument is a type error."""
        obj = SimpleNamespace(method=lambda: None)

        with pytest.raises(SpyArgumentError, match="the third argument"):
            resolve_spy_args(obj, "method", "not a function")


class TestInvalidSignatures:
    """Combinations matching neither call shape."""

    def test_none_target(self) -> None:
        with pytest.raises(SpyArgumentError) as exc_info:
            resolve_spy_args(None)

        assert str(exc_info.value) == "Attempted to spy on None."

    @pytest.mark.parametrize("target, type_name", [({}, "dict"), (123, "int"), ("text", "str")])
    def test_non_callable_without_name(self, target, type_name) -> None:
        """Non-callable targets need a method name."""
        with pytest.raises(SpyArgumentError) as exc_info:
            resolve_spy_args(target)

        assert str(exc_info.value) == (
            f'Attempted to spy on a non-callable value of type "{type_name}". '
            "To spy on an object method, you must provide the method name as the second argument."
        )

    @pytest.mark.parametrize(
        "args",
        [
            (None, "method"),
            ("text", "upper"),
            (42, "real"),
            ({}, 5),
            (_original, _original, _original),
        ],
    )
    def test_generic_usage_error(self, args) -> None:
        """Everything else lists the valid signatures."""
        with pytest.raises(SpyUsageError, match="Valid signatures"):
            resolve_spy_args(*args)

    def test_resolution_has_no_side_effects(self) -> None:
        """Resolving a method target leaves the object untouched."""
        fn = lambda: None  # noqa: E731
        obj = SimpleNamespace(fn=fn)

        resolve_spy_args(obj, "fn")

        assert obj.fn is fn


class TestHasOwnAttribute:
    def test_instance_and_class_namespaces(self) -> None:
        instance = _Base()
        instance.extra = lambda: None

        assert has_own_attribute(instance, "extra")
        assert not has_own_attribute(instance, "method")
        assert has_own_attribute(_Base, "method")

    def test_objects_without_namespace(self) -> None:
        assert not has_own_attribute(object(), "__str__")

    def test_slotted_instance_and_module(self) -> None:
        class Slotted:
            __slots__ = ("value",)

            def method(self):
                return None

        assert not has_own_attribute(Slotted(), "method")
        assert has_own_attribute(Slotted, "method")
        assert has_own_attribute(math, "sqrt")
