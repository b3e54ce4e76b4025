# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import pprint
from collections import namedtuple

from .errors import PatchFormatError


# Sentinel to allow None as a value
Missing = object()


class PatchOp:
    "Collection of valid operator names in a patch."
    SET = "$set"
    UNSET = "$unset"
    PUSH = "$push"

    # Modifier used in $push values to append several items at once
    EACH = "$each"


# Valid values for the operator keys of a patch
OPERATORS = (
    PatchOp.SET,
    PatchOp.UNSET,
    PatchOp.PUSH,
    )


class PatchMetadata(object):
    """Bookkeeping of what a patch changes.

    `fields_changed` lists every touched path once, in the order it was
    first recorded. `operation_types` maps each path to the operator that
    last touched it. `total_changes` counts recorded operations, so
    rewriting a path counts again.
    """

    def __init__(self, fields_changed=None, operation_types=None, total_changes=0):
        self.fields_changed = list(fields_changed or [])
        self.operation_types = dict(operation_types or {})
        self.total_changes = total_changes

    def record(self, path, operator):
        if path not in self.operation_types:
            self.fields_changed.append(path)
        self.operation_types[path] = operator
        self.total_changes += 1

    def to_dict(self):
        return {
            "fieldsChanged": list(self.fields_changed),
            "operationTypes": dict(self.operation_types),
            "totalChanges": self.total_changes,
        }

    def __eq__(self, other):
        if not isinstance(other, PatchMetadata):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "PatchMetadata(fields_changed=%r, operation_types=%r, total_changes=%r)" % (
            self.fields_changed, self.operation_types, self.total_changes)


class PatchInfo(namedtuple("PatchInfo", ["operations", "array_filters", "metadata"])):
    "Structured view of a patch, see Patch.info()."

    def to_dict(self):
        d = {"operations": self.operations}
        if self.array_filters:
            d["arrayFilters"] = self.array_filters
        d["metadata"] = self.metadata.to_dict()
        return d


class ArrayFilterIdentifier(object):
    "Generates placeholder names for array filters, unique within one diff."

    def __init__(self, prefix="elem"):
        self.prefix = prefix
        self._counter = 0

    def next(self):
        identifier = "%s%d" % (self.prefix, self._counter)
        self._counter += 1
        return identifier

    __next__ = next

    def __iter__(self):
        return self


class Patch(object):
    """Update document built by diff.

    Operations are grouped by operator (`$set`, `$unset`, `$push`) and
    then by field path. A path is only ever recorded under one operator.
    """

    def __init__(self):
        self._operations = {}
        self._array_filters = []
        self.metadata = PatchMetadata()

    @property
    def operations(self):
        "The update operations, operator -> {path -> value}."
        return self._operations

    @property
    def array_filters(self):
        "The array filters used by positional operations, in order."
        return self._array_filters

    def is_empty(self):
        return len(self._operations) == 0

    def has_array_filters(self):
        return len(self._array_filters) > 0

    def add_operation(self, operator, path, value):
        "Record `operator` on `path`, replacing any earlier value for it."
        if operator not in OPERATORS:
            raise PatchFormatError("Unknown patch operator {!r}.".format(operator))
        for other in list(self._operations):
            if other != operator and path in self._operations[other]:
                del self._operations[other][path]
                if not self._operations[other]:
                    del self._operations[other]
        self._operations.setdefault(operator, {})[path] = value
        self.metadata.record(path, operator)

    def set(self, path, value):
        self.add_operation(PatchOp.SET, path, value)

    def unset(self, path):
        self.add_operation(PatchOp.UNSET, path, "")

    def push(self, path, values):
        "Append `values` (a list) to the array at `path`."
        if len(values) == 1:
            self.add_operation(PatchOp.PUSH, path, values[0])
        elif values:
            self.add_operation(PatchOp.PUSH, path, {PatchOp.EACH: list(values)})

    def add_array_filter(self, array_filter):
        self._array_filters.append(array_filter)

    def info(self):
        return PatchInfo(self._operations, self._array_filters, self.metadata)

    def to_document(self):
        "The update document, ready for submission to a document store."
        from .encoding import to_document
        return to_document(self._operations)

    def to_json(self, **kwargs):
        from .encoding import encode_json
        return encode_json(self, **kwargs)

    def to_bson(self):
        from .encoding import encode_bson
        return encode_bson(self)

    @classmethod
    def from_info(cls, info):
        """Rebuild a patch from the dict form produced by PatchInfo.to_dict().

        Raises a PatchFormatError if the structure is not valid.
        """
        validate_patch_info(info)
        p = cls()
        for operator, fields in info["operations"].items():
            p._operations[operator] = dict(fields)
        p._array_filters = list(info.get("arrayFilters", None) or [])
        md = info["metadata"]
        p.metadata = PatchMetadata(
            md.get("fieldsChanged"), md.get("operationTypes"), md.get("totalChanges", 0))
        return p

    def __eq__(self, other):
        if not isinstance(other, Patch):
            return NotImplemented
        return (self._operations == other._operations and
                self._array_filters == other._array_filters and
                self.metadata == other.metadata)

    def __str__(self):
        parts = []
        if self._operations:
            parts.append("Operations:\n%s" % _dumps(self.to_document()))
        if self._array_filters:
            parts.append("ArrayFilters:\n%s" % _dumps(self._array_filters))
        if self.metadata.total_changes > 0:
            parts.append("Changes: %d fields modified" % self.metadata.total_changes)
        if not parts:
            return "Patch: <empty>"
        return "Patch:\n%s" % "\n".join(parts)

    def __repr__(self):
        return "Patch(operations=%r, array_filters=%r, metadata=%r)" % (
            self._operations, self._array_filters, self.metadata)


def _dumps(obj):
    try:
        return json.dumps(obj, indent=2, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return pprint.pformat(obj)


def validate_patch_info(info):
    """Check that `info` is a well formed patch in dict form.

    Raises a PatchFormatError if not well formed.
    """
    if not isinstance(info, dict):
        raise PatchFormatError("Patch must be a dict, not {}.".format(type(info).__name__))
    for key in ("operations", "metadata"):
        if key not in info:
            raise PatchFormatError("Patch is missing the {!r} entry.".format(key))

    operations = info["operations"]
    if not isinstance(operations, dict):
        raise PatchFormatError("Patch operations must be a dict.")
    seen = {}
    for operator, fields in operations.items():
        if operator not in OPERATORS:
            raise PatchFormatError("Unknown patch operator {!r}.".format(operator))
        if not isinstance(fields, dict) or not fields:
            raise PatchFormatError(
                "Operator {!r} must map to a non-empty dict of paths.".format(operator))
        for path in fields:
            if not isinstance(path, str):
                raise PatchFormatError("Field path {!r} is not a string.".format(path))
            if path in seen:
                raise PatchFormatError(
                    "Field path {!r} appears under both {!r} and {!r}.".format(
                        path, seen[path], operator))
            seen[path] = operator

    array_filters = info.get("arrayFilters", None) or []
    if not isinstance(array_filters, list) or not all(isinstance(f, dict) for f in array_filters):
        raise PatchFormatError("Patch arrayFilters must be a list of dicts.")

    md = info["metadata"]
    if not isinstance(md, dict):
        raise PatchFormatError("Patch metadata must be a dict.")
    if not isinstance(md.get("totalChanges", 0), int):
        raise PatchFormatError("Patch metadata totalChanges must be an int.")
    if not isinstance(md.get("fieldsChanged", None) or [], list):
        raise PatchFormatError("Patch metadata fieldsChanged must be a list.")
    if not isinstance(md.get("operationTypes", None) or {}, dict):
        raise PatchFormatError("Patch metadata operationTypes must be a dict.")
