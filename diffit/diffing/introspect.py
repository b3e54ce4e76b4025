# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Runtime introspection of the values handled by diff.

Everything the comparators need to know about a value goes through this
module: its kind, its exported fields and their external names, its zero
value, and deep equality.

Structs are dataclass instances, named tuples and plain objects carrying an
instance ``__dict__``. Attributes starting with an underscore are private and
never diffed. A dataclass field can set its external name with a ``bson`` tag
in the field metadata, in the same format as a struct tag::

    @dataclass
    class User:
        user_id: int = field(metadata={"bson": "_id"})
        nick: str = field(default="", metadata={"bson": "nick,omitempty"})
        cache: dict = field(default_factory=dict, metadata={"bson": "-"})

Untagged fields use the snake_case form of their attribute name.
"""

import dataclasses
import datetime
import enum
import functools
import types
from collections import namedtuple
from collections.abc import Mapping
from decimal import Decimal

from ..patch_format import Missing


# Metadata key holding the serialization tag of a dataclass field
TAG_KEY = "bson"


class Kind:
    "Collection of the value kinds dispatched on by diff."
    NIL = "nil"
    TIME = "time"
    STRUCT = "struct"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"


time_types = (datetime.datetime, datetime.date, datetime.time, datetime.timedelta)

primitive_types = (bool, int, float, complex, str, bytes, Decimal)

_not_structs = (type, types.ModuleType, types.FunctionType, types.BuiltinFunctionType,
                types.MethodType, enum.Enum, BaseException)

# Subclasses of these carry an instance __dict__ but are not structs
_containers = (Mapping, list, tuple, set, frozenset, str, bytes, bytearray)


StructField = namedtuple("StructField", ["name", "external_name", "omitempty"])


def is_namedtuple(value):
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_struct(value):
    if dataclasses.is_dataclass(value):
        return not isinstance(value, type)
    if is_namedtuple(value):
        return True
    if isinstance(value, _containers):
        return False
    return hasattr(value, "__dict__") and not isinstance(value, _not_structs)


def kind_of(value):
    "Classify value as one of the Kind constants."
    if value is None:
        return Kind.NIL
    if isinstance(value, time_types):
        return Kind.TIME
    if is_struct(value):
        return Kind.STRUCT
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE
    return Kind.SCALAR


def is_primitive(value):
    "Primitive scalars are the bool, numeric, text and bytes types."
    return isinstance(value, primitive_types)


def is_reference(value):
    """Return True for mutable objects that can be shared between values.

    These play the role of pointers: two values holding the same reference
    observe each other's mutations.
    """
    if isinstance(value, (list, dict, set, bytearray)):
        return True
    if not is_struct(value) or is_namedtuple(value):
        return False
    if dataclasses.is_dataclass(value):
        return not type(value).__dataclass_params__.frozen
    return True


def to_snake_case(name):
    """Convert a PascalCase/camelCase name to snake_case.

    An underscore is inserted before each uppercase letter except the
    first character, then everything is lower-cased. Acronyms are not
    treated specially, so "UserID" becomes "user_i_d".
    """
    chars = []
    for i, c in enumerate(name):
        if i > 0 and c.isupper():
            chars.append("_")
        chars.append(c.lower())
    return "".join(chars)


def bson_field_name(name, tag=None):
    """Resolve the external name of a field from its tag.

    The first comma separated segment of the tag wins when not empty.
    A tag of "-" marks the field as excluded and is returned as is.
    """
    if tag:
        if tag == "-":
            return tag
        external = tag.split(",")[0]
        if external:
            return external
    return to_snake_case(name)


@functools.lru_cache(maxsize=None)
def _dataclass_struct_fields(cls):
    fields = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        tag = f.metadata.get(TAG_KEY, None)
        external = bson_field_name(f.name, tag)
        if external == "-":
            continue
        options = tag.split(",")[1:] if tag else []
        fields.append(StructField(f.name, external, "omitempty" in options))
    return tuple(fields)


def _attribute_names(value):
    if dataclasses.is_dataclass(value):
        return [f.name for f in dataclasses.fields(value)]
    if is_namedtuple(value):
        return list(value._fields)
    return list(vars(value))


def struct_fields(value, *others):
    """Return the exported fields of a struct as StructField tuples.

    For plain objects the attribute set can differ between instances,
    so the fields of all given values are merged, keeping first-seen order.
    """
    if dataclasses.is_dataclass(value):
        return _dataclass_struct_fields(type(value))
    names = []
    for v in (value,) + others:
        if v is None:
            continue
        for name in _attribute_names(v):
            if name not in names and not name.startswith("_"):
                names.append(name)
    return tuple(StructField(name, bson_field_name(name), False) for name in names)


def field_value(value, name):
    "Value of the named field, None when the struct is None or lacks it."
    if value is None:
        return None
    return getattr(value, name, None)


def is_zero_value(value):
    """Return True when value is the zero value of a scalar type.

    Zero values are None, empty text/bytes, numeric zero, False and
    the minimal date/time values. Containers and structs are never zero here.
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, (bool, int, float, complex, Decimal)):
        return value == 0
    if isinstance(value, datetime.datetime):
        return value.replace(tzinfo=None) == datetime.datetime.min
    if isinstance(value, datetime.date):
        return value == datetime.date.min
    if isinstance(value, datetime.time):
        return value.replace(tzinfo=None) == datetime.time()
    if isinstance(value, datetime.timedelta):
        return value == datetime.timedelta(0)
    return False


def is_zero(value, _active=None):
    """Return True if value is zero, empty, or a struct of only zero fields.

    A struct already being checked further up counts as zero, so cyclic
    values terminate.
    """
    kind = kind_of(value)
    if kind in (Kind.SEQUENCE, Kind.MAPPING):
        return len(value) == 0
    if kind == Kind.STRUCT:
        if _active is None:
            _active = set()
        if id(value) in _active:
            return True
        _active.add(id(value))
        try:
            return all(is_zero(field_value(value, f.name), _active)
                       for f in struct_fields(value))
        finally:
            _active.discard(id(value))
    return is_zero_value(value)


def zero_value(value):
    """Return the zero value of value's type.

    Returns Missing when no zero value can be built, which is the
    case for structs, enums and unknown scalar types.
    """
    if isinstance(value, datetime.datetime):
        return datetime.datetime.min.replace(tzinfo=value.tzinfo)
    if isinstance(value, datetime.date):
        return datetime.date.min
    if isinstance(value, datetime.time):
        return datetime.time(tzinfo=value.tzinfo)
    if isinstance(value, datetime.timedelta):
        return datetime.timedelta(0)
    if isinstance(value, enum.Enum) or is_namedtuple(value):
        return Missing
    if isinstance(value, primitive_types + (list, tuple, dict)):
        try:
            return type(value)()
        except TypeError:
            return Missing
    return Missing


def deep_equal(a, b, _active=None):
    """Structural equality of two values.

    Types must match exactly. Time values use semantic equality,
    structs compare all their attributes, and containers recurse.
    """
    if type(a) is not type(b):
        return False
    kind = kind_of(a)
    if kind in (Kind.NIL, Kind.TIME, Kind.SCALAR):
        return a is b or a == b
    if a is b:
        return True

    # Pairs already being compared further up are assumed equal,
    # which keeps cyclic values from recursing forever
    if _active is None:
        _active = set()
    key = (id(a), id(b))
    if key in _active:
        return True
    _active.add(key)
    try:
        if kind == Kind.STRUCT:
            names = _attribute_names(a)
            if names != _attribute_names(b):
                return False
            return all(deep_equal(getattr(a, n), getattr(b, n), _active) for n in names)
        if kind == Kind.MAPPING:
            if a.keys() != b.keys():
                return False
            return all(deep_equal(a[k], b[k], _active) for k in a)
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y, _active) for x, y in zip(a, b))
    finally:
        _active.discard(key)
