# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import sys

from .args import (
    add_generic_args, add_prettyprint_args, add_filename_args,
    prettyprint_config_from_args, ConfigBackedParser,
    )
from .encoding import decode_json
from .errors import PatchFormatError
from .log import error
from .prettyprint import pretty_print_patch
from .utils import setup_std_streams


_description = "Show a patch saved by diffit diff --out."


def main_show(args):
    fn = args.patch
    if not os.path.exists(fn):
        print("Missing file {}".format(fn))
        return 1

    with io.open(fn, encoding="utf-8") as f:
        try:
            patch = decode_json(f.read())
        except PatchFormatError as e:
            error("Could not read patch %s: %s", fn, e)
            return 2

    if patch.is_empty():
        print("Patch %s is empty" % fn)
        return 0

    # See diffapp for why print is used
    class Printer:
        def write(self, text):
            print(text, end="")
    config = prettyprint_config_from_args(args, out=Printer())
    pretty_print_patch(patch, config=config)
    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the show command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_prettyprint_args(parser)
    add_filename_args(parser, ["patch"])
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser('diffit-show').parse_args(args)
    return main_show(arguments)


if __name__ == "__main__":
    sys.exit(main())
