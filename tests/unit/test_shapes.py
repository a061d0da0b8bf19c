"""Tests for target shape classification."""

import collections
import dataclasses
import enum
import types
import weakref
from typing import Any, NamedTuple

import pytest

from depwire._internal.shapes import Shape, ShapeClassifier


class PlainRecord:
    pass


class SlottedRecord:
    __slots__ = ("value",)


@dataclasses.dataclass
class DataRecord:
    value: int = 0


class Point(NamedTuple):
    x: int
    y: int


class Color(enum.Enum):
    RED = "red"


def _function() -> None:
    pass


@pytest.fixture()
def classifier() -> ShapeClassifier:
    return ShapeClassifier()


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        pytest.param(PlainRecord(), Shape.RECORD, id="plain-object"),
        pytest.param(SlottedRecord(), Shape.RECORD, id="slotted-object"),
        pytest.param(DataRecord(), Shape.RECORD, id="dataclass"),
        pytest.param([], Shape.SEQUENCE, id="list"),
        pytest.param((1, 2), Shape.SEQUENCE, id="tuple"),
        pytest.param(Point(1, 2), Shape.SEQUENCE, id="namedtuple"),
        pytest.param(collections.deque(), Shape.SEQUENCE, id="deque"),
        pytest.param(frozenset(), Shape.SEQUENCE, id="frozenset"),
        pytest.param({}, Shape.MAPPING, id="dict"),
        pytest.param(types.MappingProxyType({}), Shape.MAPPING, id="mappingproxy"),
        pytest.param(collections.OrderedDict(), Shape.MAPPING, id="ordereddict"),
        pytest.param(None, Shape.REFERENCE, id="none"),
        pytest.param("text", Shape.SCALAR, id="str"),
        pytest.param(b"bytes", Shape.SCALAR, id="bytes"),
        pytest.param(bytearray(b"x"), Shape.SCALAR, id="bytearray"),
        pytest.param(20, Shape.SCALAR, id="int"),
        pytest.param(2.5, Shape.SCALAR, id="float"),
        pytest.param(True, Shape.SCALAR, id="bool"),
        pytest.param(Color.RED, Shape.SCALAR, id="enum"),
        pytest.param(PlainRecord, Shape.SCALAR, id="class"),
        pytest.param(types, Shape.SCALAR, id="module"),
        pytest.param(_function, Shape.SCALAR, id="function"),
        pytest.param(range(3), Shape.SCALAR, id="range"),
        pytest.param(iter([]), Shape.SCALAR, id="iterator"),
    ],
)
def test_classify(classifier: ShapeClassifier, target: Any, expected: Shape) -> None:
    assert classifier.classify(target) is expected


def test_set_of_records_is_a_sequence(classifier: ShapeClassifier) -> None:
    assert classifier.classify({PlainRecord()}) is Shape.SEQUENCE


def test_bound_method_is_scalar(classifier: ShapeClassifier) -> None:
    assert classifier.classify(PlainRecord().__init__) is Shape.SCALAR


def test_weak_reference_is_dereferenced(classifier: ShapeClassifier) -> None:
    record = PlainRecord()
    reference = weakref.ref(record)

    assert classifier.classify(reference) is Shape.REFERENCE
    assert classifier.dereference(reference) is record


def test_dead_weak_reference_dereferences_to_none(classifier: ShapeClassifier) -> None:
    record = PlainRecord()
    reference = weakref.ref(record)
    del record

    assert classifier.dereference(reference) is None


def test_none_dereferences_to_none(classifier: ShapeClassifier) -> None:
    assert classifier.dereference(None) is None
