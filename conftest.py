import pytest


def pytest_addoption(parser):
    parser.addoption("--quick", action="store_true",
                     default=False, help="skip tests using the slow fixture")
    parser.addoption("--slow", action="store_true",
                     default=False, help="only run tests using the slow fixture")


def pytest_report_header(config):
    import diffit
    return "diffit %s" % diffit.__version__


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--slow"):
        return
    skip_quick = pytest.mark.skip(reason="skipping all tests that are not slow")
    for item in items:
        if 'slow' not in getattr(item, 'fixturenames', ()):
            item.add_marker(skip_quick)
