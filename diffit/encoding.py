# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Conversion of patches to documents, JSON and BSON.

Values recorded in a patch are kept as given to diff. Before a patch
leaves the library, structs become documents keyed by their external
field names and tuples become lists.
"""

import datetime
import enum
import json
from decimal import Decimal

import bson
from bson.codec_options import CodecOptions, TypeEncoder, TypeRegistry
from bson.decimal128 import Decimal128

from .diffing.introspect import Kind, kind_of, struct_fields, field_value, is_zero
from .errors import EmptyPatchError, PatchFormatError
from .patch_format import Patch


def to_document(value):
    "Convert value to plain dicts, lists and scalars."
    kind = kind_of(value)
    if kind == Kind.STRUCT:
        doc = {}
        for f in struct_fields(value):
            v = field_value(value, f.name)
            if f.omitempty and is_zero(v):
                continue
            doc[f.external_name] = to_document(v)
        return doc
    if kind == Kind.MAPPING:
        return {k: to_document(v) for k, v in value.items()}
    if kind == Kind.SEQUENCE:
        return [to_document(v) for v in value]
    if isinstance(value, enum.Enum):
        return to_document(value.value)
    return value


class DecimalEncoder(TypeEncoder):
    python_type = Decimal

    def transform_python(self, value):
        return Decimal128(value)


def _bson_fallback(value):
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return datetime.datetime.combine(value, datetime.time())
    if isinstance(value, datetime.time):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return value.total_seconds()
    if isinstance(value, (set, frozenset)):
        return list(value)
    return value


codec_options = CodecOptions(
    tz_aware=True,
    type_registry=TypeRegistry([DecimalEncoder()], fallback_encoder=_bson_fallback),
)


def encode_bson(patch):
    """Encode the update document of patch as BSON.

    Raises EmptyPatchError when the patch has no operations, as an
    empty update document is rejected by document stores.
    """
    if patch.is_empty():
        raise EmptyPatchError()
    return bson.encode(to_document(patch.operations), codec_options=codec_options)


def decode_bson(data):
    "Decode a BSON update document, as produced by encode_bson."
    return bson.decode(data, codec_options=codec_options)


def _json_default(value):
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return value.total_seconds()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, bytes):
        return value.decode("latin-1")
    raise TypeError("Object of type %s is not JSON serializable" % type(value).__name__)


def encode_json(patch, **kwargs):
    "Encode the structured info of patch as JSON."
    info = patch.info().to_dict()
    info["operations"] = to_document(info["operations"])
    info["arrayFilters"] = to_document(info.get("arrayFilters", []))
    if not info["arrayFilters"]:
        del info["arrayFilters"]
    kwargs.setdefault("default", _json_default)
    return json.dumps(info, **kwargs)


def decode_json(text):
    "Rebuild a patch from the output of encode_json."
    try:
        info = json.loads(text)
    except ValueError as e:
        raise PatchFormatError("Patch is not valid JSON: %s" % e)
    return Patch.from_info(info)
