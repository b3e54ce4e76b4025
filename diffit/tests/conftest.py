# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import logging
import os

from pytest import fixture, skip

import diffit.log


pjoin = os.path.join


def testspath():
    return os.path.abspath(os.path.dirname(__file__))


@fixture
def slow(request):
    if request.config.getoption('--quick', default=False):
        skip('skipping slow test')


@fixture(scope='session')
def filespath():
    return os.path.join(testspath(), "files")


@fixture
def write_json(tmpdir):
    """Fixture writing a JSON document into a temporary directory.

    Returns the filename as a string.
    """
    def write(name, doc):
        f = tmpdir.join(name)
        f.write_text(json.dumps(doc), encoding='utf-8')
        return str(f)
    return write


@fixture(autouse=True)
def reset_log_level():
    # The CLI argument parsers change the level of the diffit logger
    level = diffit.log.logger.level
    yield
    diffit.log.logger.setLevel(level)
    logging.getLogger().setLevel(logging.WARNING)
