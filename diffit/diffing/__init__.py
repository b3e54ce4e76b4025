# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .generic import diff
from .config import DiffConfig, ArrayStrategy, ZeroValueHandling, FieldComparer, FieldDiff

__all__ = [
    "diff",
    "DiffConfig", "ArrayStrategy", "ZeroValueHandling",
    "FieldComparer", "FieldDiff",
    ]
