# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import datetime
import json
from decimal import Decimal

import bson
import pytest
from bson.decimal128 import Decimal128

from diffit import diff, ArrayStrategy, EmptyPatchError, PatchFormatError
from diffit.encoding import to_document, decode_bson, decode_json, encode_json
from diffit.patch_format import Patch

from .fixtures import User, Address, Profile, Item, Cart, Point, Color


def test_to_document_struct():
    doc = to_document(Profile(UserID=1, Secret="s", Home=Address("Main", ""), Tags=["a"]))
    assert doc == {
        "user_i_d": 1,
        "home": {"street": "Main", "city": ""},
        "tags": ["a"],
        "extra": {},
    }

    doc = to_document(Profile(Nick="j"))
    assert doc["nickname"] == "j"
    assert doc["home"] is None


def test_to_document_containers():
    assert to_document((1, 2)) == [1, 2]
    assert to_document(Point(1, 2)) == {"x": 1, "y": 2}
    assert to_document({"c": Color.RED, "l": [Item(1, 2)]}) == {
        "c": "red", "l": [{"id": 1, "qty": 2}]}


def test_patch_to_bson():
    p = diff(User("John", 25), User("John", 26))
    data = p.to_bson()
    assert isinstance(data, bytes)
    assert bson.decode(data) == {"$set": {"age": 26}}


def test_patch_to_bson_values():
    p = Patch()
    p.set("price", Decimal("9.99"))
    p.set("day", datetime.date(2020, 1, 2))
    p.set("home", Address("Main", "Paris"))
    p.unset("nick")
    doc = decode_bson(p.to_bson())
    assert doc["$set"]["price"] == Decimal128("9.99")
    assert doc["$set"]["day"] == datetime.datetime(2020, 1, 2, tzinfo=datetime.timezone.utc)
    assert doc["$set"]["home"] == {"street": "Main", "city": "Paris"}
    assert doc["$unset"] == {"nick": ""}


def test_empty_patch_to_bson():
    with pytest.raises(EmptyPatchError):
        Patch().to_bson()
    with pytest.raises(EmptyPatchError):
        diff(User("a", 1), User("a", 1)).to_bson()


def test_patch_to_json():
    p = diff(User("John", 25), User("John", 26))
    assert json.loads(p.to_json()) == {
        "operations": {"$set": {"age": 26}},
        "metadata": {
            "fieldsChanged": ["age"],
            "operationTypes": {"age": "$set"},
            "totalChanges": 1,
        },
    }


def test_patch_to_json_array_filters():
    old = Cart(Items=[Item(1, 1), Item(2, 1)])
    new = Cart(Items=[Item(1, 1), Item(2, 5)])
    p = diff(old, new, array_strategy=ArrayStrategy.SMART)
    d = json.loads(encode_json(p))
    assert d["operations"] == {"$set": {"items.$[elem0]": {"id": 2, "qty": 5}}}
    assert d["arrayFilters"] == [{"elem0._index": 1}]


def test_patch_to_json_values():
    p = Patch()
    p.set("when", datetime.datetime(2020, 1, 2, 3, 4, 5))
    p.set("took", datetime.timedelta(minutes=1))
    p.set("price", Decimal("1.50"))
    ops = json.loads(p.to_json())["operations"]["$set"]
    assert ops == {"when": "2020-01-02T03:04:05", "took": 60.0, "price": "1.50"}


def test_decode_json():
    p = diff({"a": 1, "b": [1]}, {"a": 2, "c": 3})
    q = decode_json(p.to_json())
    assert q == p
    assert q.operations == {"$set": {"a": 2, "c": 3}, "$unset": {"b": ""}}


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    '{"operations": {"$rename": {"a": "b"}}, "metadata": {}}',
])
def test_decode_json_invalid(text):
    with pytest.raises(PatchFormatError):
        decode_json(text)
