# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from contextlib import contextmanager

from ..errors import CyclicReferenceError, PointerSharingError
from ..log import debug
from ..utils import join_path
from .introspect import Kind, kind_of, is_reference, struct_fields, field_value


class PointerTracker(object):
    """Address bookkeeping for one diff call.

    Maps the address (``id()``) of every reference value found in the old
    and new values to the field path it was first seen at. Sharing exists
    when an address shows up on both sides.

    The tracker also keeps the set of (old, new) pairs currently being
    compared, so that cyclic values are reported instead of recursing
    without end.
    """

    def __init__(self):
        self.old_pointers = {}
        self.new_pointers = {}
        self._active = set()

    def track_pointer(self, is_old, path, address):
        "Record address at path, return False if it was already recorded."
        pointers = self.old_pointers if is_old else self.new_pointers
        if address in pointers:
            return False
        pointers[address] = path
        return True

    def track_roots(self, old, new):
        self.track_value(True, old)
        self.track_value(False, new)
        debug("tracked %d old and %d new references",
              len(self.old_pointers), len(self.new_pointers))

    def track_value(self, is_old, value, path=""):
        """Walk value and record all references in it.

        Struct fields extend the path by external name, mapping entries
        by key and sequence items by index, as `path[i]`.
        """
        if is_reference(value) and not self.track_pointer(is_old, path, id(value)):
            # Seen before on this side, its contents are recorded already
            return

        kind = kind_of(value)
        if kind == Kind.STRUCT:
            for f in struct_fields(value):
                self.track_value(is_old, field_value(value, f.name),
                                 join_path(path, f.external_name))
        elif kind == Kind.SEQUENCE:
            for i, item in enumerate(value):
                self.track_value(is_old, item, "%s[%d]" % (path, i))
        elif kind == Kind.MAPPING:
            for key, item in value.items():
                self.track_value(is_old, item, join_path(path, str(key)))

    def check_for_sharing(self):
        """Return a PointerSharingError for the first shared address, or None."""
        for address, new_path in self.new_pointers.items():
            old_path = self.old_pointers.get(address, None)
            if old_path is not None:
                return PointerSharingError(new_path, address, old_path)
        return None

    @contextmanager
    def visiting(self, old, new, path):
        """Mark the pair (old, new) as being compared at path.

        Raises a CyclicReferenceError if the pair is already being
        compared further up the current recursion.
        """
        key = (id(old), id(new))
        if key in self._active:
            raise CyclicReferenceError(path)
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)
