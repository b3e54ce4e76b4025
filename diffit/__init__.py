# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .diffing import (
    diff, DiffConfig, ArrayStrategy, ZeroValueHandling, FieldComparer, FieldDiff)
from .errors import (
    DiffError, NilPairError, TypeMismatchError, UnsupportedKeyError,
    PointerSharingError, CyclicReferenceError, EmptyPatchError, PatchFormatError)
from .patch_format import Patch, PatchOp, PatchInfo, PatchMetadata


__all__ = [
    "__version__",
    "diff",
    "DiffConfig", "ArrayStrategy", "ZeroValueHandling",
    "FieldComparer", "FieldDiff",
    "Patch", "PatchOp", "PatchInfo", "PatchMetadata",
    "DiffError", "NilPairError", "TypeMismatchError", "UnsupportedKeyError",
    "PointerSharingError", "CyclicReferenceError", "EmptyPatchError",
    "PatchFormatError",
    ]
