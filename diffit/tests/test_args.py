import argparse
import json
import logging

import pytest

from traitlets import Enum

import diffit.log
from diffit.args import (
    ConfigBackedParser, LogLevelAction, add_diff_args, diff_config_from_args,
    modify_config_for_print,
)
from diffit.config import (
    entrypoint_configurables, build_config, recursive_update, Global, DiffitDiff,
)
from diffit.diffing.config import ArrayStrategy, ZeroValueHandling
from diffit import diffapp


class FixtureConfig(Global):
    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'WARN',
    ).tag(config=True)


@pytest.fixture
def entrypoint_config():
    entrypoint_configurables['test-prog'] = FixtureConfig
    yield
    del entrypoint_configurables['test-prog']


def test_config_parser(entrypoint_config):
    parser = ConfigBackedParser('test-prog')
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="Set the log level by name.",
        action=LogLevelAction,
    )

    # Check that log level default is taken from FixtureConfig
    arguments = parser.parse_args([])
    assert arguments.log_level == 'WARN'

    arguments = parser.parse_args(['--log-level', 'ERROR'])
    assert arguments.log_level == 'ERROR'
    assert diffit.log.logger.level == logging.ERROR


def test_unknown_entrypoint():
    with pytest.raises(ValueError):
        build_config('no-such-prog')


def test_diff_defaults(tmpdir):
    with tmpdir.as_cwd():
        config = build_config('diffit-diff')
    assert config['array_strategy'] == ArrayStrategy.REPLACE
    assert config['zero_values'] == ZeroValueHandling.AS_SET
    assert config['detect_pointer_sharing'] is False
    assert config['use_color'] is True
    assert config['log_level'] == 'INFO'


def test_diff_config_file(tmpdir):
    tmpdir.join('diffit_config.json').write_text(
        json.dumps({
            'Diff': {
                'array_strategy': 'merge',
                'ignore': ['updated_at'],
            },
            'DiffitDiff': {
                'zero_values': 'unset',
            },
        }),
        encoding='utf-8'
    )
    with tmpdir.as_cwd():
        args = diffapp._build_arg_parser('diffit-diff').parse_args(['a.json', 'b.json'])
    assert args.array_strategy == ArrayStrategy.MERGE
    assert args.zero_values == ZeroValueHandling.AS_UNSET
    assert args.ignore == ['updated_at']

    config = diff_config_from_args(args)
    assert config.array_strategy == ArrayStrategy.MERGE
    assert config.zero_value_handling == ZeroValueHandling.AS_UNSET
    assert config.ignore_fields == frozenset(['updated_at'])


def test_diff_args_override_config_file(tmpdir):
    tmpdir.join('diffit_config.json').write_text(
        json.dumps({'Diff': {'array_strategy': 'merge'}}),
        encoding='utf-8'
    )
    with tmpdir.as_cwd():
        args = diffapp._build_arg_parser('diffit-diff').parse_args(
            ['-a', 'smart', '-i', 'name', '-i', 'home.city',
             '--detect-pointer-sharing', 'a.json', 'b.json'])
    config = diff_config_from_args(args)
    assert config.array_strategy == ArrayStrategy.SMART
    assert config.ignore_fields == frozenset(['name', 'home.city'])
    assert config.detect_pointer_sharing


def test_diff_args_reject_unknown_strategy(capsys):
    parser = argparse.ArgumentParser()
    add_diff_args(parser)
    with pytest.raises(SystemExit):
        parser.parse_args(['-a', 'zip'])


def test_config_help(tmpdir, capsys):
    with tmpdir.as_cwd():
        with pytest.raises(SystemExit) as e:
            diffapp._build_arg_parser('diffit-diff').parse_args(['--config'])
    assert e.value.code == 1
    _, err = capsys.readouterr()
    assert DiffitDiff.__name__ in err
    assert 'array_strategy: "replace"' in err


def test_recursive_update():
    target = {'a': 1, 'b': {'c': 2, 'd': 3}}
    recursive_update(target, {'a': None, 'b': {'c': 5}, 'e': {}}, False)
    assert target == {'b': {'c': 5, 'd': 3}}


def test_modify_config_for_print():
    assert modify_config_for_print({'a': 'x', 'b': {}, 'c': {'d': True}}) == {
        'a': '"x"', 'b': '{}', 'c': {'d': 'true'}}
