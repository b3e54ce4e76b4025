# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import datetime
from decimal import Decimal

import pytest

from diffit.diffing.introspect import (
    Kind, kind_of, is_struct, is_reference, to_snake_case, bson_field_name,
    struct_fields, is_zero_value, is_zero, zero_value, deep_equal)
from diffit.patch_format import Missing

from .fixtures import Address, Profile, Money, Point, Color, Node, User


@pytest.mark.parametrize("name, expected", [
    ("UserID", "user_i_d"),
    ("age", "age"),
    ("Name", "name"),
    ("firstName", "first_name"),
    ("CreatedAt", "created_at"),
    ("HTTPServer", "h_t_t_p_server"),
    ("snake_case", "snake_case"),
])
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


def test_bson_field_name():
    assert bson_field_name("Nick", "nickname,omitempty") == "nickname"
    assert bson_field_name("Nick", "nickname") == "nickname"
    assert bson_field_name("UserID", ",omitempty") == "user_i_d"
    assert bson_field_name("UserID", "") == "user_i_d"
    assert bson_field_name("UserID") == "user_i_d"
    assert bson_field_name("Secret", "-") == "-"


def test_struct_fields_dataclass():
    fields = struct_fields(Profile())
    assert [f.name for f in fields] == ["UserID", "Nick", "Home", "Tags", "Extra"]
    assert [f.external_name for f in fields] == [
        "user_i_d", "nickname", "home", "tags", "extra"]
    assert [f.name for f in fields if f.omitempty] == ["Nick"]


def test_struct_fields_plain_objects_are_merged():
    a = Node(1)
    b = Node(2)
    b.label = "x"
    b._hidden = True
    assert [f.name for f in struct_fields(a, b)] == ["value", "next", "label"]


def test_struct_fields_namedtuple():
    assert [f.external_name for f in struct_fields(Point(1, 2))] == ["x", "y"]


@pytest.mark.parametrize("value, kind", [
    (None, Kind.NIL),
    (datetime.datetime(2020, 1, 1), Kind.TIME),
    (datetime.date(2020, 1, 1), Kind.TIME),
    (datetime.timedelta(seconds=1), Kind.TIME),
    (User(), Kind.STRUCT),
    (Point(1, 2), Kind.STRUCT),
    (Node(1), Kind.STRUCT),
    ([1], Kind.SEQUENCE),
    ((1,), Kind.SEQUENCE),
    ({"a": 1}, Kind.MAPPING),
    (1, Kind.SCALAR),
    ("a", Kind.SCALAR),
    (Decimal("1.5"), Kind.SCALAR),
    (Color.RED, Kind.SCALAR),
    (User, Kind.SCALAR),
])
def test_kind_of(value, kind):
    assert kind_of(value) == kind


def test_containers_are_not_structs():
    class Record(dict):
        pass

    r = Record()
    r.note = "has a __dict__"
    assert not is_struct(r)
    assert kind_of(r) == Kind.MAPPING


def test_is_reference():
    assert is_reference([])
    assert is_reference({})
    assert is_reference(set())
    assert is_reference(Address())
    assert is_reference(Node(1))
    assert not is_reference(())
    assert not is_reference("text")
    assert not is_reference(Money(1, "EUR"))
    assert not is_reference(Point(1, 2))


@pytest.mark.parametrize("value", [
    None, "", b"", 0, 0.0, False, Decimal(0),
    datetime.datetime.min,
    datetime.datetime.min.replace(tzinfo=datetime.timezone.utc),
    datetime.date.min, datetime.time(), datetime.timedelta(0),
])
def test_zero_values(value):
    assert is_zero_value(value)
    assert is_zero(value)


@pytest.mark.parametrize("value", [
    "x", 1, -0.5, True, Decimal("0.1"),
    datetime.datetime(2020, 1, 1), datetime.time(12),
    [], {}, Address(),
])
def test_non_zero_scalar_values(value):
    assert not is_zero_value(value)


def test_is_zero_containers_and_structs():
    assert is_zero([])
    assert is_zero({})
    assert is_zero(Address())
    assert is_zero(Profile())
    assert not is_zero(Address(City="Paris"))
    assert not is_zero([0])


def test_is_zero_cyclic_struct():
    a = Node(1)
    a.next = a
    assert not is_zero(a)
    z = Node(0)
    z.next = z
    assert is_zero(z)


def test_zero_value():
    assert zero_value(5) == 0
    assert zero_value("x") == ""
    assert zero_value([1, 2]) == []
    assert zero_value({"a": 1}) == {}
    aware = datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc)
    assert zero_value(aware) == datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)
    assert zero_value(datetime.date(2020, 1, 1)) == datetime.date.min
    assert zero_value(Address()) is Missing
    assert zero_value(Point(1, 2)) is Missing
    assert zero_value(Color.RED) is Missing


def test_deep_equal():
    assert deep_equal(1, 1)
    assert not deep_equal(1, 1.0)
    assert not deep_equal(1, True)
    assert deep_equal([1, {"a": (2, 3)}], [1, {"a": (2, 3)}])
    assert not deep_equal([1, 2], [1, 2, 3])
    assert not deep_equal({"a": 1}, {"b": 1})
    assert deep_equal(Address("a", "b"), Address("a", "b"))
    assert not deep_equal(Address("a", "b"), Address("a", "c"))


def test_deep_equal_same_nan():
    nan = float("nan")
    assert deep_equal(nan, nan)
    assert deep_equal([nan], [nan])
    assert not deep_equal(nan, 1.0)


def test_deep_equal_time_is_semantic():
    utc = datetime.datetime(2020, 1, 1, 12, tzinfo=datetime.timezone.utc)
    cet = datetime.datetime(2020, 1, 1, 13,
                            tzinfo=datetime.timezone(datetime.timedelta(hours=1)))
    assert deep_equal(utc, cet)


def test_deep_equal_plain_objects_compare_private_attributes():
    a = Node(1)
    b = Node(1)
    assert deep_equal(a, b)
    b._cache = {}
    assert not deep_equal(a, b)


def test_deep_equal_cyclic():
    a = [1]
    a.append(a)
    b = [1]
    b.append(b)
    assert deep_equal(a, b)
