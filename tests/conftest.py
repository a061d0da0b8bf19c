"""Shared pytest fixtures for depwire tests."""

import logging

import pytest

from depwire import Registry


@pytest.fixture()
def registry() -> Registry:
    """Empty registry."""
    return Registry()


@pytest.fixture()
def discard_logger() -> logging.Logger:
    """Logger that drops everything, used as a registered dependency."""
    logger = logging.getLogger("tests.discard")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
