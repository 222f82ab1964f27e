"""Tests for structural equality."""

from __future__ import annotations

import dataclasses

from memo_diff.engine.equality import deep_equal


@dataclasses.dataclass
class Box:
    value: object


@dataclasses.dataclass
class OtherBox:
    value: object


def first() -> int:
    return 1


def second() -> int:
    return 2


class TestDeepEqual:
    def test_nested_containers(self):
        assert deep_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})

    def test_nested_difference(self):
        assert not deep_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 3}]})

    def test_key_sets_must_match(self):
        assert not deep_equal({"a": 1}, {"a": 1, "b": 2})
        assert not deep_equal({"a": 1}, {"b": 1})

    def test_list_and_tuple_differ(self):
        assert not deep_equal([1, 2], (1, 2))

    def test_sequence_order_matters(self):
        assert not deep_equal([1, 2], [2, 1])

    def test_sets_ignore_order(self):
        assert deep_equal({1, 2, 3}, {3, 2, 1})
        assert not deep_equal({1, 2}, {1, 3})

    def test_nan_equals_nan(self):
        assert deep_equal(float("nan"), float("nan"))
        assert deep_equal([float("nan")], [float("nan")])

    def test_bool_is_not_int(self):
        assert not deep_equal(True, 1)

    def test_int_and_float(self):
        assert deep_equal(1, 1.0)

    def test_none(self):
        assert deep_equal(None, None)
        assert not deep_equal(None, {})

    def test_functions_compare_by_identity(self):
        assert deep_equal(first, first)
        assert not deep_equal(first, second)

    def test_dataclasses(self):
        assert deep_equal(Box([1]), Box([1]))
        assert not deep_equal(Box([1]), Box([2]))
        assert not deep_equal(Box(1), OtherBox(1))

    def test_self_referencing_lists(self):
        a: list = []
        a.append(a)
        b: list = []
        b.append(b)
        assert deep_equal(a, b)

    def test_self_referencing_dicts_with_difference(self):
        a: dict = {"n": 1}
        a["self"] = a
        b: dict = {"n": 2}
        b["self"] = b
        assert not deep_equal(a, b)

    def test_mutual_references(self):
        a: dict = {}
        b: dict = {"peer": a}
        a["peer"] = b
        c: dict = {}
        d: dict = {"peer": c}
        c["peer"] = d
        assert deep_equal(a, c)


def _nested(depth: int, leaf: object) -> dict:
    value: dict = {"leaf": leaf}
    for _ in range(depth):
        value = {"c": value}
    return value


class TestDeepNesting:
    def test_nesting_beyond_recursion_limit(self):
        assert deep_equal(_nested(5000, 1), _nested(5000, 1))

    def test_difference_at_the_bottom(self):
        assert not deep_equal(_nested(5000, 1), _nested(5000, 2))

    def test_nested_lists(self):
        a: list = [1]
        b: list = [1]
        for _ in range(5000):
            a, b = [a], [b]
        assert deep_equal(a, b)
