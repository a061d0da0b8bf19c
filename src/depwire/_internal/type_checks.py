from __future__ import annotations

import collections.abc
import types
import typing
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    ClassVar,
    Final,
    Literal,
    TypeGuard,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from depwire._internal.markers import strip_annotated

_UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)
_WRAPPER_ORIGINS: tuple[Any, ...] = (ClassVar, Final)
_CALLABLE_ORIGINS: tuple[Any, ...] = (collections.abc.Callable, typing.Callable)

# int is acceptable where float or complex is expected (PEP 484 numeric tower).
_NUMERIC_PROMOTIONS: dict[type[Any], tuple[type[Any], ...]] = {
    float: (int,),
    complex: (int, float),
}


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


@dataclass(frozen=True, slots=True)
class AssignmentResult:
    """Outcome of checking a value against a field annotation."""

    ok: bool
    expected: Any = None
    actual: type[Any] | None = None

    @classmethod
    def accepted(cls) -> AssignmentResult:
        return cls(ok=True)

    @classmethod
    def rejected(cls, *, expected: Any, actual: type[Any]) -> AssignmentResult:
        return cls(ok=False, expected=expected, actual=actual)


@dataclass(slots=True)
class AssignmentChecker:
    """Check values against field annotations before they are assigned.

    ``check`` never raises for an unsupported annotation; anything it cannot
    reason about is accepted and left to the attribute assignment itself.
    Parameterized generics are checked against their origin only, so
    ``list[int]`` accepts any list.
    """

    def check(self, value: Any, annotation: Any) -> AssignmentResult:
        """Return whether ``value`` may be assigned to a field of type ``annotation``."""
        if self.is_assignable(value, annotation):
            return AssignmentResult.accepted()
        return AssignmentResult.rejected(expected=annotation, actual=type(value))

    def is_assignable(self, value: Any, annotation: Any) -> bool:  # noqa: C901, PLR0911, PLR0912
        if annotation is Any or annotation is object:
            return True
        if isinstance(annotation, (str, typing.ForwardRef)):
            return True
        if annotation is None or annotation is type(None):
            return value is None

        origin = get_origin(annotation)
        if origin is Annotated:
            return self.is_assignable(value, strip_annotated(annotation))
        if origin in _WRAPPER_ORIGINS:
            arguments = get_args(annotation)
            return not arguments or self.is_assignable(value, arguments[0])
        if origin in _UNION_ORIGINS:
            return any(self.is_assignable(value, argument) for argument in get_args(annotation))
        if origin is Literal:
            return any(
                value == argument and type(value) is type(argument)
                for argument in get_args(annotation)
            )
        if origin is type:
            return self._is_assignable_class(value, get_args(annotation))
        if origin in _CALLABLE_ORIGINS:
            return callable(value)
        if origin is not None:
            return self._is_instance(value, origin)

        if isinstance(annotation, TypeVar):
            return self._is_assignable_type_var(value, annotation)
        if isinstance(annotation, typing.NewType):
            return self.is_assignable(value, annotation.__supertype__)
        if annotation in _CALLABLE_ORIGINS:
            return callable(value)
        if getattr(annotation, "_is_protocol", False):
            if getattr(annotation, "_is_runtime_protocol", False):
                return self._is_instance(value, annotation)
            return True
        if is_runtime_class(annotation):
            return self._is_instance(value, annotation)
        return True

    def _is_assignable_class(self, value: Any, arguments: tuple[Any, ...]) -> bool:
        if not isinstance(value, type):
            return False
        if not arguments or arguments[0] is Any:
            return True
        expected = arguments[0]
        if get_origin(expected) in _UNION_ORIGINS:
            return any(self._is_assignable_class(value, (item,)) for item in get_args(expected))
        if not is_runtime_class(expected):
            return True
        try:
            return issubclass(value, expected)
        except TypeError:
            return True

    def _is_assignable_type_var(self, value: Any, type_var: TypeVar) -> bool:
        if type_var.__bound__ is not None:
            return self.is_assignable(value, type_var.__bound__)
        if type_var.__constraints__:
            return any(
                self.is_assignable(value, constraint) for constraint in type_var.__constraints__
            )
        return True

    def _is_instance(self, value: Any, expected: Any) -> bool:
        if expected in _NUMERIC_PROMOTIONS and not isinstance(value, bool):
            if isinstance(value, _NUMERIC_PROMOTIONS[expected]):
                return True
        try:
            return isinstance(value, expected)
        except TypeError:
            return True


__all__ = [
    "AssignmentChecker",
    "AssignmentResult",
    "is_runtime_class",
]
