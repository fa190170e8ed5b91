"""Pytest configuration and fixtures."""

import logging

import pytest

from shouldspec import BufferedReporter, SpecTest


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset shouldspec loggers after each test so handlers don't leak."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("shouldspec"):
            continue
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def reporter():
    return BufferedReporter()


@pytest.fixture
def s(reporter):
    """A SpecTest that records scope results instead of failing the test."""
    return SpecTest(reporter)
