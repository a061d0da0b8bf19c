from __future__ import annotations

import enum
import inspect
import numbers
import types
import weakref
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any

_TEXT_TYPES: tuple[type[Any], ...] = (str, bytes, bytearray, memoryview)
_SCALAR_TYPES: tuple[type[Any], ...] = (
    *_TEXT_TYPES,
    bool,
    numbers.Number,
    enum.Enum,
    type,
    types.ModuleType,
    range,
    slice,
)


class Shape(enum.Enum):
    """Closed set of shapes the injector knows how to walk.

    Only records carry dependency fields. The other shapes decide how the
    injector reaches records nested inside a target.
    """

    RECORD = "record"
    """An object instance with attributes: plain classes, dataclasses, attrs, models."""

    SEQUENCE = "sequence"
    """Lists, tuples, deques, sets and other non-text collections of targets."""

    MAPPING = "mapping"
    """Mappings whose values are targets. Keys are ignored."""

    REFERENCE = "reference"
    """``None`` or a ``weakref.ref``; dereferenced, absent referents are skipped."""

    SCALAR = "scalar"
    """Anything else. Skipped without error."""


@dataclass(slots=True)
class ShapeClassifier:
    """Classify injection targets into a ``Shape``."""

    def classify(self, target: Any) -> Shape:  # noqa: PLR0911
        if target is None or isinstance(target, weakref.ReferenceType):
            return Shape.REFERENCE
        if isinstance(target, _SCALAR_TYPES):
            return Shape.SCALAR
        if isinstance(target, Mapping):
            return Shape.MAPPING
        if isinstance(target, (Sequence, Set)):
            return Shape.SEQUENCE
        if self._is_record(target):
            return Shape.RECORD
        return Shape.SCALAR

    def dereference(self, target: Any) -> Any:
        """Return the object behind a reference-shaped target, or ``None``."""
        if isinstance(target, weakref.ReferenceType):
            return target()
        return None

    def _is_record(self, target: Any) -> bool:
        if inspect.isroutine(target) or isinstance(target, (property, staticmethod, classmethod)):
            return False
        return hasattr(target, "__dict__") or bool(getattr(type(target), "__slots__", ()))


__all__ = ["Shape", "ShapeClassifier"]
