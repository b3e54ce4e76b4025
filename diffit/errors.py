# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Exceptions raised while computing, validating or encoding patches.

Every failure of :func:`diffit.diff` is fatal for the whole call: no
partial patch is ever returned together with an error.
"""


class DiffError(Exception):
    "Base class for all errors raised by diffit."


class NilPairError(DiffError, ValueError):
    "Both values passed to diff are None, there is nothing to compare."

    def __init__(self, message="both values are None"):
        super(NilPairError, self).__init__(message)


class TypeMismatchError(DiffError, TypeError):
    "The compared values have different concrete types."

    def __init__(self, path, old_type, new_type):
        self.path = path
        self.old_type = old_type
        self.new_type = new_type
        super(TypeMismatchError, self).__init__(
            "type mismatch at {!r}: cannot compare {} with {}".format(
                path, old_type.__name__, new_type.__name__))


class UnsupportedKeyError(DiffError, TypeError):
    "Mappings can only be diffed when all keys are strings."

    def __init__(self, path, key):
        self.path = path
        self.key = key
        super(UnsupportedKeyError, self).__init__(
            "unsupported mapping key {!r} of type {} at {!r}, "
            "only str keys can be used in field paths".format(
                key, type(key).__name__, path))


class PointerSharingError(DiffError):
    """The old and new values reference the same mutable object.

    When both sides share backing memory, changes made through one side are
    visible through the other, so an unchanged field and a mutated field
    cannot be told apart.
    """

    def __init__(self, field_path, address, old_path=None):
        self.field_path = field_path
        self.address = address
        self.old_path = field_path if old_path is None else old_path
        self.message = (
            "pointer sharing detected at address {:#x}: old field {!r} and "
            "new field {!r} point to the same memory location".format(
                address, self.old_path, field_path))
        super(PointerSharingError, self).__init__(self.message)


class CyclicReferenceError(DiffError):
    "A value graph refers back to an object already being compared."

    def __init__(self, path):
        self.path = path
        super(CyclicReferenceError, self).__init__(
            "cyclic reference detected at {!r}".format(path))


class EmptyPatchError(DiffError, ValueError):
    "An empty patch cannot be encoded as an update document."

    def __init__(self, message="empty patch"):
        super(EmptyPatchError, self).__init__(message)


class PatchFormatError(DiffError, ValueError):
    "A serialized patch does not have the expected structure."
