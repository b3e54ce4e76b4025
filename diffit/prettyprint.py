# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import datetime
import os
import pprint
import sys

import colorama

from .encoding import to_document
from .errors import PatchFormatError
from .patch_format import PatchOp


# Indentation offset in pretty-print
IND = "  "

# Max line width used some placed in pretty-print
MAXWIDTH = 78

PATCH_ENTRY_END = '\n'

ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = '{color}   '.format(color=''),
        REMOVE = '{color}-  '.format(color=colorama.Fore.RED),
        ADD    = '{color}+  '.format(color=colorama.Fore.GREEN),
        INFO   = '{color}## '.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = '   ',
        REMOVE = '-  ',
        ADD    = '+  ',
        INFO   = '## ',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(self, out=sys.stdout, use_color=True):
        self.out = out
        self.use_color = use_color

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET

DefaultConfig = PrettyPrintConfig()


patch_header = """\
patch {afn} {bfn}
--- {afn}{atime}
+++ {bfn}{btime}
"""


def file_timestamp(filename):
    "Return modification time for filename as a string."
    if filename and os.path.exists(filename):
        t = os.path.getmtime(filename)
        dt = datetime.datetime.fromtimestamp(t)
        return dt.isoformat(str(" "))
    else:
        return "(no timestamp)"


def format_value(v):
    "Format simple value for printing, using pprint for anything but strings."
    if isinstance(v, str):
        return v
    return pprint.pformat(v)


def pretty_print_value(value, prefix="", config=DefaultConfig):
    """Print a possibly complex value with all lines prefixed.

    Calls out to generic formatters based on value
    type for dicts, lists, and multiline strings.
    Uses format_value for simple values.
    """
    if isinstance(value, dict):
        pretty_print_dict(value, (), prefix, config)
    elif isinstance(value, list) and value:
        pretty_print_list(value, prefix, config)
    else:
        pretty_print_multiline(format_value(value), prefix, config)


def pretty_print_key(k, prefix, config):
    config.out.write("%s%s:\n" % (prefix, k))


def pretty_print_key_value(k, v, prefix, config):
    config.out.write("%s%s: %s\n" % (prefix, k, v))


def pretty_print_patch_action(msg, path, config):
    config.out.write("%s%s %s:%s\n" % (config.INFO, msg, path, config.RESET))


def pretty_print_item(k, v, prefix="", config=DefaultConfig):
    if isinstance(v, dict):
        pretty_print_key(k, prefix, config)
        pretty_print_dict(v, (), prefix+IND, config)
    elif isinstance(v, list):
        pretty_print_key(k, prefix, config)
        pretty_print_list(v, prefix+IND, config)
    else:
        vstr = format_value(v)
        if "\n" in vstr:
            # Multiline strings
            pretty_print_key(k, prefix, config)
            for line in vstr.splitlines(False):
                config.out.write("%s%s\n" % (prefix+IND, line))
        else:
            # Singleline strings
            pretty_print_key_value(k, vstr, prefix, config)


def pretty_print_multiline(text, prefix="", config=DefaultConfig):
    assert isinstance(text, str), 'expected string argument'

    # Preprend prefix to lines, letting lines keep their own newlines
    lines = text.splitlines(True)
    for line in lines:
        config.out.write(prefix + line)

    # If the final line doesn't have a newline,
    # make sure we still start a new line
    if not text.endswith("\n"):
        config.out.write("\n")


def pretty_print_list(li, prefix="", config=DefaultConfig):
    listr = pprint.pformat(li)
    if len(listr) < MAXWIDTH - len(prefix) and "\\n" not in listr:
        config.out.write("%s%s\n" % (prefix, listr))
    else:
        for k, v in enumerate(li):
            pretty_print_item("item[%d]" % k, v, prefix, config)


def pretty_print_dict(d, exclude_keys=(), prefix="", config=DefaultConfig):
    """Pretty-print a dict without wrapper keys

    Instead of {'key': 'value'}, do

        key: value
        key:
          long
          value

    """
    for k in sorted(set(d) - set(exclude_keys)):
        v = d[k]
        pretty_print_item(k, v, prefix, config)


def pretty_print_operation(operator, path, value, config=DefaultConfig):
    if operator == PatchOp.SET:
        pretty_print_patch_action("set", path, config)
        pretty_print_value(to_document(value), config.ADD, config)
    elif operator == PatchOp.UNSET:
        pretty_print_patch_action("unset", path, config)
    elif operator == PatchOp.PUSH:
        if isinstance(value, dict) and PatchOp.EACH in value:
            items = value[PatchOp.EACH]
        else:
            items = [value]
        pretty_print_patch_action("pushed %d item%s to" % (
            len(items), "" if len(items) == 1 else "s"), path, config)
        for item in items:
            pretty_print_value(to_document(item), config.ADD, config)
    else:
        raise PatchFormatError("Unknown patch operator {}".format(operator))

    config.out.write(PATCH_ENTRY_END + config.RESET)


def pretty_print_patch(patch, afn=None, bfn=None, config=DefaultConfig):
    """Pretty-print a patch

    Parameters
    ----------

    patch: Patch
        The patch to print
    afn: str
        Filename of the old document, if any
    bfn: str
        Filename of the new document, if any
    config: PrettyPrintConfig
        Config object determining where things get printed
    """
    if patch.is_empty():
        return
    if afn is not None and bfn is not None:
        config.out.write(patch_header.format(
            afn=afn, bfn=bfn,
            atime="  " + file_timestamp(afn), btime="  " + file_timestamp(bfn)))

    operations = patch.operations
    printed = set()
    # Print in the order fields were first changed, then any leftovers
    ordered = list(patch.metadata.fields_changed)
    for fields in operations.values():
        ordered.extend(p for p in fields if p not in patch.metadata.operation_types)
    for path in ordered:
        for operator, fields in operations.items():
            if path in fields and (operator, path) not in printed:
                printed.add((operator, path))
                pretty_print_operation(operator, path, fields[path], config)

    for array_filter in patch.array_filters:
        pretty_print_patch_action("array filter", ", ".join(sorted(array_filter)), config)
        pretty_print_dict(to_document(array_filter), (), config.KEEP, config)
        config.out.write(PATCH_ENTRY_END + config.RESET)
