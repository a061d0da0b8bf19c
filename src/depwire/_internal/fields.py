from __future__ import annotations

import dataclasses
import inspect
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, get_origin, get_type_hints

from depwire._internal.markers import (
    INJECT_METADATA_KEY,
    find_inject_marker,
    parse_inject_marker,
)
from depwire.exceptions import DepwireUnresolvedAnnotationError

_ANNOTATION_EVALUATION_ERRORS = (AttributeError, NameError, SyntaxError, TypeError)


@dataclass(frozen=True, slots=True)
class InjectableField:
    """A record attribute that asks for a registry value."""

    field_name: str
    dependency_name: str
    annotation: Any


@dataclass(slots=True)
class FieldInspector:
    """Discover dependency fields on record instances.

    A field asks for a dependency in one of two ways:

    * its class annotation is ``Annotated[T, Inject("name")]``;
    * it is a dataclass or attrs field with ``metadata={"inject": "name"}``.

    Annotations are collected over the MRO, base classes first, so a subclass
    can redeclare a field. Nothing is cached; every call reflects the class as
    it is now.
    """

    metadata_key: str = INJECT_METADATA_KEY

    def inspect(self, target: Any) -> tuple[InjectableField, ...]:
        """Return the dependency fields of ``target`` in declaration order."""
        annotations = self.resolved_annotations(type(target))
        metadata_names = self.metadata_dependency_names(target)

        injectable: dict[str, InjectableField] = {}
        for field_name, annotation in annotations.items():
            if get_origin(annotation) is ClassVar:
                continue
            marker = find_inject_marker(annotation)
            dependency_name = marker.name if marker is not None else metadata_names.get(field_name)
            if not dependency_name:
                continue
            injectable[field_name] = InjectableField(
                field_name=field_name,
                dependency_name=dependency_name,
                annotation=annotation,
            )

        # Metadata-only fields without a usable annotation are still injected.
        for field_name, dependency_name in metadata_names.items():
            if field_name in injectable or field_name in annotations or not dependency_name:
                continue
            injectable[field_name] = InjectableField(
                field_name=field_name,
                dependency_name=dependency_name,
                annotation=Any,
            )
        return tuple(injectable.values())

    def resolved_annotations(self, cls: type[Any]) -> dict[str, Any]:
        """Merge resolved annotations of ``cls`` and its bases, bases first."""
        try:
            return get_type_hints(cls, include_extras=True)
        except _ANNOTATION_EVALUATION_ERRORS:
            pass

        merged: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            merged.update(self.class_annotations(klass))
        return merged

    def class_annotations(self, klass: type[Any]) -> dict[str, Any]:
        """Return the annotations declared directly on ``klass``.

        Each annotation is resolved on its own, so one unresolvable name (an
        import guarded by ``TYPE_CHECKING``, a class local to a function) does
        not hide the other fields. An annotation that still cannot be resolved
        keeps its ``Inject`` marker read from the source text, with ``Any`` as
        the field type; without a marker it stays a string.

        Raises:
            DepwireUnresolvedAnnotationError: If an unresolvable annotation
                mentions ``Inject`` but its dependency name cannot be read.

        """
        try:
            raw_annotations = inspect.get_annotations(klass)
        except _ANNOTATION_EVALUATION_ERRORS:
            return {}
        module = sys.modules.get(klass.__module__)
        module_globals = dict(vars(module)) if module is not None else {}
        class_locals = dict(vars(klass))
        return {
            name: self._resolve(klass, name, annotation, module_globals, class_locals)
            for name, annotation in raw_annotations.items()
        }

    def metadata_dependency_names(self, target: Any) -> dict[str, str]:
        """Return ``{field: dependency}`` from dataclass and attrs field metadata."""
        names: dict[str, str] = {}
        if dataclasses.is_dataclass(target):
            for dataclass_field in dataclasses.fields(target):
                self._collect_metadata_name(names, dataclass_field.name, dataclass_field.metadata)
        for attrs_attribute in getattr(type(target), "__attrs_attrs__", ()):
            self._collect_metadata_name(names, attrs_attribute.name, attrs_attribute.metadata)
        return names

    def _collect_metadata_name(
        self,
        names: dict[str, str],
        field_name: str,
        metadata: Mapping[Any, Any] | None,
    ) -> None:
        if not metadata:
            return
        dependency_name = metadata.get(self.metadata_key)
        if isinstance(dependency_name, str) and dependency_name:
            names[field_name] = dependency_name

    def _resolve(  # noqa: PLR0913
        self,
        klass: type[Any],
        field_name: str,
        annotation: Any,
        module_globals: dict[str, Any],
        class_locals: dict[str, Any],
    ) -> Any:
        if not isinstance(annotation, str):
            return annotation

        single_field = type(
            klass.__name__,
            (),
            {"__annotations__": {field_name: annotation}, "__module__": klass.__module__},
        )
        try:
            hints = get_type_hints(
                single_field,
                globalns=module_globals,
                localns=class_locals,
                include_extras=True,
            )
        except _ANNOTATION_EVALUATION_ERRORS:
            pass
        else:
            return hints[field_name]

        try:
            marker = parse_inject_marker(annotation)
        except ValueError as error:
            raise DepwireUnresolvedAnnotationError(
                f"{klass.__qualname__}.{field_name}",
                annotation,
                str(error),
            ) from error
        if marker is None:
            return annotation
        return Annotated[Any, marker]


__all__ = ["FieldInspector", "InjectableField"]
