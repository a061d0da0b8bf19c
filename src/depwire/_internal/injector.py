from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from depwire._internal.fields import FieldInspector, InjectableField
from depwire._internal.holders import is_dependency_holder
from depwire._internal.missing import MissingDependencies
from depwire._internal.shapes import Shape, ShapeClassifier
from depwire._internal.type_checks import AssignmentChecker
from depwire.exceptions import (
    DepwireDependenciesNotFoundError,
    DepwireError,
    DepwireInjectionProblemError,
    DepwireWrongTypeError,
)


@dataclass(slots=True)
class Injector:
    """Fill annotated fields of a target from a name-to-value table.

    The injector walks the target recursively. Hidden dependencies exposed by
    a ``dependencies()`` accessor are walked first, then the target's own
    shape: record fields are assigned, sequences and mappings are walked
    element by element, references are followed. Missing names from every
    branch are merged and raised together at the end. A registered value of
    the wrong type aborts the walk immediately.

    Assignments are not rolled back: fields that were injected before a
    failure keep their new values.
    """

    entries: Mapping[str, Any]
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    shape_classifier: ShapeClassifier = field(default_factory=ShapeClassifier)
    field_inspector: FieldInspector = field(default_factory=FieldInspector)
    assignment_checker: AssignmentChecker = field(default_factory=AssignmentChecker)

    def inject(self, target: Any) -> None:
        """Inject dependencies into ``target`` and everything reachable from it.

        Raises:
            DepwireDependenciesNotFoundError: When any annotated dependency
                anywhere in the walk has no registered value.
            DepwireWrongTypeError: When a registered value does not match the
                field's annotation.
            DepwireInjectionProblemError: When assigning a value to a field
                fails for another reason.

        """
        missing = self.collect_missing(target)
        if not missing.is_empty():
            raise DepwireDependenciesNotFoundError(missing)

    def collect_missing(self, target: Any) -> MissingDependencies:
        """Inject into ``target`` and return the names that were not found."""
        missing = MissingDependencies()

        if is_dependency_holder(target):
            hidden = target.dependencies()
            if hidden is not None:
                hidden_missing = self.collect_missing(hidden)
                self._accumulate(target, missing, hidden_missing)

        self._accumulate(target, missing, self.visit(target))
        return missing

    def visit(self, target: Any) -> MissingDependencies:
        """Dispatch on the target's shape without looking at hidden dependencies."""
        shape = self.shape_classifier.classify(target)
        visitor = self._visitors()[shape]
        return visitor(target)

    def visit_record(self, target: Any) -> MissingDependencies:
        missing = MissingDependencies()
        for injectable in self.field_inspector.inspect(target):
            dependency_name = injectable.dependency_name
            if dependency_name not in self.entries:
                missing.insert(dependency_name)
                continue
            self.assign(target, injectable, self.entries[dependency_name])
        return missing

    def visit_sequence(self, target: Iterable[Any]) -> MissingDependencies:
        return self._visit_elements(target)

    def visit_mapping(self, target: Mapping[Any, Any]) -> MissingDependencies:
        return self._visit_elements(target.values())

    def visit_reference(self, target: Any) -> MissingDependencies:
        referent = self.shape_classifier.dereference(target)
        if referent is None:
            return MissingDependencies()
        return self.collect_missing(referent)

    def visit_scalar(self, _target: Any) -> MissingDependencies:
        return MissingDependencies()

    def assign(self, target: Any, injectable: InjectableField, value: Any) -> None:
        """Assign ``value`` to the field, converting failures to depwire errors."""
        dependency_name = injectable.dependency_name
        result = self.assignment_checker.check(value, injectable.annotation)
        if not result.ok:
            raise DepwireWrongTypeError(
                dependency_name,
                expected=result.expected,
                actual=result.actual,
            )

        try:
            setattr(target, injectable.field_name, value)
        except DepwireError:
            raise
        except TypeError as error:
            raise DepwireWrongTypeError(
                dependency_name,
                expected=injectable.annotation,
                actual=type(value),
            ) from error
        except Exception as error:
            raise DepwireInjectionProblemError(dependency_name, value, error) from error

    def _visit_elements(self, elements: Iterable[Any]) -> MissingDependencies:
        missing = MissingDependencies()
        for element in elements:
            missing.merge(self.collect_missing(element))
        return missing

    def _accumulate(
        self,
        target: Any,
        missing: MissingDependencies,
        intermediate: MissingDependencies,
    ) -> None:
        if intermediate.is_empty():
            return
        self.logger.debug(
            "[INSIDE] inject(<%s>) intermediate missing dependencies: %s",
            type(target).__qualname__,
            intermediate.names(),
        )
        missing.merge(intermediate)
        self.logger.debug(
            "[INSIDE] inject(<%s>) accumulated missing dependencies: %s",
            type(target).__qualname__,
            missing.names(),
        )

    def _visitors(self) -> dict[Shape, Callable[[Any], MissingDependencies]]:
        return {
            Shape.RECORD: self.visit_record,
            Shape.SEQUENCE: self.visit_sequence,
            Shape.MAPPING: self.visit_mapping,
            Shape.REFERENCE: self.visit_reference,
            Shape.SCALAR: self.visit_scalar,
        }


__all__ = ["Injector"]
