# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import os
import sys

from .args import (
    add_generic_args, add_diff_args, add_prettyprint_args, add_filename_args,
    diff_config_from_args, prettyprint_config_from_args, ConfigBackedParser,
    )
from .diffing import diff
from .errors import DiffError
from .log import error, info
from .prettyprint import pretty_print_patch
from .utils import EXPLICIT_MISSING_FILE, read_document, setup_std_streams


_description = "Compute the update operations turning one JSON document into another."


def main_diff(args):
    """Main handler of diff CLI"""
    old, new = args.old, args.new

    # Check that if args are filenames they either exist, or are
    # explicitly marked as missing (added/removed):
    for fn in (old, new):
        if not os.path.exists(fn) and fn != EXPLICIT_MISSING_FILE:
            print("Missing file {}".format(fn))
            return 1

    # JSON has a single number type, read all numbers as floats
    a = read_document(old, parse_int=float)
    b = read_document(new, parse_int=float)

    try:
        patch = diff(a, b, config=diff_config_from_args(args))
    except DiffError as e:
        error("Could not diff %s and %s: %s", old, new, e)
        return 2

    if args.out:
        with open(args.out, "w") as df:
            df.write(patch.to_json(indent=2, separators=(",", ": ")))
    if args.bson:
        if patch.is_empty():
            info("Nothing to write to %s, the documents are equal", args.bson)
        else:
            with open(args.bson, "wb") as df:
                df.write(patch.to_bson())
    if not (args.out or args.bson):
        # This printer is to keep the unit tests passing,
        # some tests capture output with capsys which doesn't
        # pick up on sys.stdout.write()
        class Printer:
            def write(self, text):
                print(text, end="")
        config = prettyprint_config_from_args(args, out=Printer())
        pretty_print_patch(patch, old, new, config)

    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the diff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_diff_args(parser)
    add_prettyprint_args(parser)
    add_filename_args(parser, ["old", "new"])

    parser.add_argument(
        '--out',
        default=None,
        help="if supplied, the patch is written to this file as JSON. "
             "Otherwise it is printed to the terminal.")
    parser.add_argument(
        '--bson',
        default=None,
        help="if supplied, the update document is written to this file as BSON.")

    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser('diffit-diff').parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
