# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import json
import logging
import sys

from ._version import __version__
from .config import (
    get_defaults_for_argparse, build_config, entrypoint_configurables,
)
from .diffing.config import DiffConfig, ArrayStrategy, ZeroValueHandling
from .log import init_logging, set_diffit_log_level


class ConfigBackedParser(argparse.ArgumentParser):

    def parse_known_args(self, args=None, namespace=None):
        entrypoint = self.prog.split(' ')[0]
        try:
            defs = get_defaults_for_argparse(entrypoint)
            self.set_defaults(**defs)
        except ValueError:
            pass
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    def __init__(self, option_strings, dest, default=None, **kwargs):
        # __call__ is not called if option not given:
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_diffit_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        level = getattr(logging, values)
        set_diffit_log_level(level, True)


def modify_config_for_print(config):
    output = {}
    for k, v in config.items():
        if isinstance(v, dict):
            output[k] = modify_config_for_print(v)
            if not output[k]:
                output[k] = '{}'
        else:
            output[k] = json.dumps(v)
    return output


class ConfigHelpAction(argparse.Action):
    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        from .prettyprint import pretty_print_dict, PrettyPrintConfig

        header = entrypoint_configurables[parser.prog].__name__
        config = build_config(parser.prog, True)
        pretty_print_dict(
            {
                header: modify_config_for_print(config),
            },
            config=PrettyPrintConfig(out=sys.stderr)
        )
        sys.exit(1)


def add_generic_args(parser):
    """Adds a set of arguments common to all diffit commands.
    """
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        help="list the valid config keys and their current effective values",
        action=ConfigHelpAction,
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="set the log level by name.",
        action=LogLevelAction,
    )


def add_diff_args(parser):
    """Adds a set of arguments for commands that perform diffs.
    """
    strategies = parser.add_argument_group(
        title='strategies',
        description='Set how changes are turned into update operations.')
    strategies.add_argument(
        '-a', '--array-strategy',
        default=ArrayStrategy.REPLACE,
        choices=ArrayStrategy.ALL,
        help="how arrays are reconciled: replace the whole array, append new "
             "items, smart positional updates, or merge items by identity.")
    strategies.add_argument(
        '-z', '--zero-values',
        default=ZeroValueHandling.AS_SET,
        choices=ZeroValueHandling.ALL,
        help="what to do when a field changes to its zero value.")
    strategies.add_argument(
        '-i', '--ignore',
        action='append',
        default=[],
        metavar='FIELD',
        help="ignore a field, by name, external name or full path. "
             "Can be given multiple times.")
    strategies.add_argument(
        '--detect-pointer-sharing',
        action='store_true',
        default=False,
        help="fail when the compared documents share mutable objects.")


def add_prettyprint_args(parser):
    """Adds optional arguments for controlling pretty print behavior.
    """
    parser.add_argument(
        '--no-color',
        dest='use_color',
        action="store_false",
        default=True,
        help=("prevent use of ANSI color code escapes for text output")
    )


def diff_config_from_args(args):
    "Build the DiffConfig described by parsed diff arguments."
    return DiffConfig(
        ignore_fields=args.ignore,
        array_strategy=args.array_strategy,
        zero_value_handling=args.zero_values,
        detect_pointer_sharing=args.detect_pointer_sharing,
    )


def prettyprint_config_from_args(args, **kwargs):
    from .prettyprint import PrettyPrintConfig
    return PrettyPrintConfig(use_color=getattr(args, 'use_color', True), **kwargs)


filename_help = {
    "old": "The old document filename, or /dev/null if missing.",
    "new": "The new document filename, or /dev/null if missing.",
    "patch": "The patch filename, output from diffit diff --out.",
    }


def add_filename_args(parser, names):
    """Add the old, new or patch positional arguments.

    Helps getting consistent doc strings.
    """
    for name in names:
        parser.add_argument(name, help=filename_help[name])
