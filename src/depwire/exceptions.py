from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from depwire._internal.missing import MissingDependencies


class DepwireError(Exception):
    """Represent a base class for all depwire-specific failures.

    Catch this type when you want to handle any depwire error path without
    matching each concrete exception class individually.
    """


class DepwireInvalidRegistrationError(DepwireError):
    """Signal invalid arguments passed to ``Registry.register``.

    Dependency names are plain strings. Anything else is rejected before the
    registry is touched.
    """


class DepwireAlreadyRegisteredError(DepwireError):
    """Signal that a dependency name is already taken in a registry.

    Raised by ``Registry.register``. Registries never replace a stored value,
    so the first registration under a name stays in place.

    Attributes:
        name: The dependency name that was registered twice.

    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Dependency {name!r} is already registered.")


class DepwireDependencyNotFoundError(DepwireError, KeyError):
    """Signal that ``Registry.get`` was asked for an unknown name.

    The class also derives from ``KeyError`` so mapping-style callers can keep
    their usual ``except KeyError`` handling.

    Attributes:
        name: The dependency name that has no registered value.

    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Dependency {name!r} is not registered.")

    def __str__(self) -> str:
        # KeyError.__str__ quotes its argument.
        return str(self.args[0])


class DepwireInjectionError(DepwireError):
    """Represent a base class for failures raised by ``Registry.inject``."""


class DepwireDependenciesNotFoundError(DepwireInjectionError):
    """Signal that one or more annotated dependencies were not registered.

    Raised once per ``Registry.inject`` call after the whole target has been
    walked, so ``names`` lists every missing dependency, including those of
    nested and hidden targets. Fields whose dependencies were found are left
    injected.

    Typical fix is registering every listed name before injecting again.

    Attributes:
        missing: The accumulated ``MissingDependencies`` set.
        names: Sorted tuple of the missing dependency names.

    """

    prefix = "Dependencies not found"

    def __init__(self, missing: MissingDependencies) -> None:
        self.missing = missing
        self.names = missing.names()
        if self.names:
            message = f"{self.prefix}: " + ", ".join(repr(name) for name in self.names)
        else:
            message = self.prefix
        super().__init__(message)


class DepwireUnresolvedAnnotationError(DepwireInjectionError):
    """Signal that a dependency field's annotation cannot be read.

    Raised while discovering the fields of a record when an annotation string
    cannot be resolved and its ``Inject(...)`` marker cannot be recovered from
    the source text either, for example ``Inject(NAME_CONSTANT)`` in a module
    using ``from __future__ import annotations``.

    Typical fix is spelling the dependency name as a string literal or making
    the annotation's names importable at runtime.

    Attributes:
        field_name: Qualified ``Class.field`` name of the field.
        annotation: The annotation string as written.

    """

    def __init__(self, field_name: str, annotation: str, reason: str) -> None:
        self.field_name = field_name
        self.annotation = annotation
        super().__init__(f"Cannot resolve dependency field {field_name!r}: {reason}")


class DepwireWrongTypeError(DepwireInjectionError):
    """Signal that a registered value does not fit the annotated field.

    Raised as soon as it is detected; the rest of the target is not walked.
    Unlike ``DepwireDependenciesNotFoundError`` this means something *was*
    registered under the name, but its type does not match the field's
    declared annotation.

    Attributes:
        dependency_name: Name of the dependency that could not be assigned.
        expected: The field's declared annotation, when known.
        actual: The type of the registered value, when known.

    """

    prefix = "Wrong type for dependency"

    def __init__(
        self,
        dependency_name: str,
        *,
        expected: Any = None,
        actual: type[Any] | None = None,
    ) -> None:
        self.dependency_name = dependency_name
        self.expected = expected
        self.actual = actual
        message = f"{self.prefix} {dependency_name!r}"
        if expected is not None and actual is not None:
            message += f": expected {_describe(expected)}, got {_describe(actual)}"
        super().__init__(message)


class DepwireInjectionProblemError(DepwireInjectionError):
    """Signal an unexpected failure while assigning a dependency to a field.

    Wraps whatever the target's attribute assignment raised (a frozen
    dataclass, a read-only property, a validating model). The original
    exception is available as ``error`` and as ``__cause__``.

    Attributes:
        dependency_name: Name of the dependency being assigned.
        value: The registered value that was being assigned.
        error: The original exception.

    """

    def __init__(self, dependency_name: str, value: Any, error: BaseException) -> None:
        self.dependency_name = dependency_name
        self.value = value
        self.error = error
        super().__init__(
            f"Problem injecting dependency {dependency_name!r} "
            f"with value {value!r} ({type(value).__qualname__}): "
            f"{type(error).__name__}: {error}",
        )


def _describe(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)


__all__ = [
    "DepwireAlreadyRegisteredError",
    "DepwireDependenciesNotFoundError",
    "DepwireDependencyNotFoundError",
    "DepwireError",
    "DepwireInjectionError",
    "DepwireInjectionProblemError",
    "DepwireInvalidRegistrationError",
    "DepwireUnresolvedAnnotationError",
    "DepwireWrongTypeError",
]
