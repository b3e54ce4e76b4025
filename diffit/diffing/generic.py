# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..errors import NilPairError, TypeMismatchError, UnsupportedKeyError
from ..log import debug, warning
from ..patch_format import (
    Patch, ArrayFilterIdentifier, Missing, validate_patch_info)
from ..utils import join_path

from .arrays import diff_sequences
from .config import DiffConfig, ZeroValueHandling
from .introspect import (
    Kind, kind_of, is_struct, struct_fields, field_value,
    is_zero, is_zero_value, zero_value, deep_equal)
from .pointers import PointerTracker

__all__ = ["diff"]


class DiffState(object):
    """Everything one diff call accumulates into.

    Each call to diff gets its own state, so concurrent calls on
    distinct values never share anything.
    """

    def __init__(self, config):
        self.config = config
        self.patch = Patch()
        self.tracker = PointerTracker()
        self.filter_ids = ArrayFilterIdentifier()


def diff(old, new, config=None, **options):
    """Compute the patch turning `old` into `new`.

    Both values must have the same type, or one of them can be None.
    Options are the keyword arguments of DiffConfig, or a prebuilt
    DiffConfig can be passed as `config`.

    Raises NilPairError when both values are None, TypeMismatchError when
    the types differ anywhere in the structure, and PointerSharingError
    when `detect_pointer_sharing` is enabled and the values share a
    mutable object.
    """
    if config is None:
        config = DiffConfig(**options)
    elif options:
        raise TypeError("Pass either a DiffConfig or keyword options to diff, not both.")

    if old is None and new is None:
        raise NilPairError()
    if old is not None and new is not None and type(old) is not type(new):
        raise TypeMismatchError("", type(old), type(new))

    state = DiffState(config)
    if config.detect_pointer_sharing:
        state.tracker.track_roots(old, new)

    diff_values(old, new, path="", state=state)

    if config.detect_pointer_sharing:
        sharing = state.tracker.check_for_sharing()
        if sharing is not None:
            warning("%s", sharing.message)
            raise sharing

    # We can turn this off for performance after the library has been well tested:
    validate_patch_info(state.patch.info().to_dict())

    return state.patch


def diff_values(old, new, path="", state=None):
    "Compare two values of any kind and record the changes at path."
    if state is None:
        state = DiffState(DiffConfig())

    if old is None or new is None:
        diff_pointers(old, new, path=path, state=state)
        return

    if type(old) is not type(new):
        raise TypeMismatchError(path, type(old), type(new))

    kind = kind_of(old)
    if kind == Kind.STRUCT:
        with state.tracker.visiting(old, new, path):
            diff_structs(old, new, path=path, state=state)
    elif kind == Kind.SEQUENCE:
        with state.tracker.visiting(old, new, path):
            diff_sequences(old, new, path=path, state=state)
    elif kind == Kind.MAPPING:
        with state.tracker.visiting(old, new, path):
            diff_mappings(old, new, path=path, state=state)
    else:
        # Time values are scalars, compared by their meaning
        diff_scalars(old, new, path=path, state=state)


def diff_pointers(old, new, path="", state=None):
    """Handle values that may be None on either side.

    A reference is transparent: when both sides are set the targets
    are compared at the same path.
    """
    if old is None and new is None:
        return
    if old is None:
        if is_struct(new):
            add_struct_fields(new, path=path, state=state)
        else:
            state.patch.set(path, new)
    elif new is None:
        if is_struct(old):
            unset_struct_fields(old, path=path, state=state)
        else:
            state.patch.unset(path)
    else:
        diff_values(old, new, path=path, state=state)


def _iter_fields(old, new, path, config):
    "Yield (field, subpath) for the exported, not ignored fields of the structs."
    for f in struct_fields(old, new):
        subpath = join_path(path, f.external_name)
        if config.is_ignored(f.name, f.external_name, subpath):
            continue
        yield f, subpath


def diff_structs(old, new, path="", state=None):
    """Compare two structs field by field.

    Fields are addressed by their external name. Fields listed in the
    ignore list by attribute name, external name or full path are skipped.
    """
    for f, subpath in _iter_fields(old, new, path, state.config):
        diff_values(field_value(old, f.name), field_value(new, f.name),
                    path=subpath, state=state)


def add_struct_fields(new, path="", state=None):
    "Record every field of a new struct, comparing each with its zero value."
    with state.tracker.visiting(new, None, path):
        for f, subpath in _iter_fields(new, None, path, state.config):
            diff_added(field_value(new, f.name), path=subpath, state=state)


def diff_added(value, path="", state=None):
    if value is None:
        return
    if is_struct(value):
        add_struct_fields(value, path=path, state=state)
        return
    zero = zero_value(value)
    if zero is Missing:
        state.patch.set(path, value)
    else:
        diff_values(zero, value, path=path, state=state)


def unset_struct_fields(old, path="", state=None):
    "Unset every non-zero field of a removed struct."
    with state.tracker.visiting(old, None, path):
        for f, subpath in _iter_fields(old, None, path, state.config):
            diff_removed(field_value(old, f.name), path=subpath, state=state)


def diff_removed(value, path="", state=None):
    # Mirrors diff_added: a mapping is compared against an empty one,
    # so each entry goes through the value -> None rule
    if is_zero(value):
        return
    if is_struct(value):
        unset_struct_fields(value, path=path, state=state)
    elif kind_of(value) == Kind.MAPPING:
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedKeyError(path, key)
            subpath = join_path(path, key)
            if state.config.is_ignored(key, subpath):
                continue
            diff_values(item, None, path=subpath, state=state)
    else:
        state.patch.unset(path)


def diff_mappings(old, new, path="", state=None):
    """Compare two mappings key by key.

    Keys extend the path, so only str keys are supported. A key present on
    one side only is handled like a value changing from or to None.
    """
    keys = list(old)
    keys.extend(k for k in new if k not in old)
    for key in keys:
        if not isinstance(key, str):
            raise UnsupportedKeyError(path, key)
        subpath = join_path(path, key)
        if state.config.is_ignored(key, subpath):
            continue
        diff_values(old.get(key, None), new.get(key, None), path=subpath, state=state)


def diff_scalars(old, new, path="", state=None):
    if deep_equal(old, new):
        return

    if is_zero_value(new):
        handling = state.config.zero_value_handling
        if handling == ZeroValueHandling.AS_UNSET:
            state.patch.unset(path)
            return
        elif handling == ZeroValueHandling.IGNORE:
            debug("ignoring zero value at %s", path)
            return

    state.patch.set(path, new)
