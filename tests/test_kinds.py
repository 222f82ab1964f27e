"""Tests for value-kind inspection and reference equality."""

from __future__ import annotations

import dataclasses
import functools
from types import SimpleNamespace

from memo_diff.engine.kinds import classify, composite_entries, primitive_kind, ref_equal
from memo_diff.models import ValueKind


@dataclasses.dataclass
class Point:
    x: int
    y: int


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self) -> None:
        self.a = 1
        self.b = 2


def handler() -> None:
    pass


# --- classify ---


class TestClassify:
    def test_none_is_absent(self):
        assert classify(None) is ValueKind.ABSENT

    def test_scalars_are_primitive(self):
        for value in (0, 1.5, "", "text", True, b"raw", 2j):
            assert classify(value) is ValueKind.PRIMITIVE, value

    def test_containers_are_composite(self):
        for value in ({}, [], (1,), {1, 2}, frozenset()):
            assert classify(value) is ValueKind.COMPOSITE, value

    def test_callables_are_functions(self):
        for value in (handler, len, lambda: None, functools.partial(handler), Point):
            assert classify(value) is ValueKind.FUNCTION, value

    def test_attribute_objects_are_composite(self):
        assert classify(Point(1, 2)) is ValueKind.COMPOSITE
        assert classify(SimpleNamespace(a=1)) is ValueKind.COMPOSITE
        assert classify(Slotted()) is ValueKind.COMPOSITE

    def test_opaque_object_is_primitive(self):
        assert classify(object()) is ValueKind.PRIMITIVE


# --- primitive_kind ---


class TestPrimitiveKind:
    def test_numbers_share_a_kind(self):
        assert primitive_kind(1) == primitive_kind(2.5) == "number"

    def test_bool_is_not_a_number(self):
        assert primitive_kind(True) == "boolean"

    def test_strings_and_bytes(self):
        assert primitive_kind("a") == "string"
        assert primitive_kind(b"a") == "bytes"


# --- ref_equal ---


class TestRefEqual:
    def test_same_object(self):
        d: dict = {}
        assert ref_equal(d, d) is True

    def test_equal_primitives(self):
        assert ref_equal(1, 1) is True
        assert ref_equal("abc", "abc") is True
        assert ref_equal(1, 1.0) is True

    def test_distinct_containers(self):
        assert ref_equal({}, {}) is False
        assert ref_equal([1], [1]) is False

    def test_bool_and_int_differ(self):
        assert ref_equal(True, 1) is False

    def test_distinct_nan_objects(self):
        assert ref_equal(float("nan"), float("nan")) is False

    def test_none_pair(self):
        assert ref_equal(None, None) is True


# --- composite_entries ---


class TestCompositeEntries:
    def test_mapping(self):
        assert composite_entries({"a": 1}) == {"a": 1}

    def test_sequence_uses_indices(self):
        assert composite_entries(["x", "y"]) == {0: "x", 1: "y"}

    def test_dataclass_fields(self):
        assert composite_entries(Point(1, 2)) == {"x": 1, "y": 2}

    def test_slots(self):
        assert composite_entries(Slotted()) == {"a": 1, "b": 2}

    def test_set_keys_are_reprs(self):
        assert composite_entries({3}) == {"3": 3}
