from depwire._internal.holders import DependencyHolder
from depwire._internal.markers import INJECT_METADATA_KEY, Inject
from depwire._internal.missing import MissingDependencies
from depwire._internal.registry import Registry
from depwire.exceptions import (
    DepwireAlreadyRegisteredError,
    DepwireDependenciesNotFoundError,
    DepwireDependencyNotFoundError,
    DepwireError,
    DepwireInjectionError,
    DepwireInjectionProblemError,
    DepwireInvalidRegistrationError,
    DepwireUnresolvedAnnotationError,
    DepwireWrongTypeError,
)

__all__ = [
    "INJECT_METADATA_KEY",
    "DependencyHolder",
    "DepwireAlreadyRegisteredError",
    "DepwireDependenciesNotFoundError",
    "DepwireDependencyNotFoundError",
    "DepwireError",
    "DepwireInjectionError",
    "DepwireInjectionProblemError",
    "DepwireInvalidRegistrationError",
    "DepwireUnresolvedAnnotationError",
    "DepwireWrongTypeError",
    "Inject",
    "MissingDependencies",
    "Registry",
]
