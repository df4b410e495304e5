"""Tests for logging configuration."""

import logging

import pytest

from mock_hls import logging_setup
from mock_hls.logging_setup import LOGGER, configure_logging


@pytest.fixture(autouse=True)
def restore_level():
    level = LOGGER.level
    yield
    LOGGER.setLevel(level)


def test_debug_flag_lowers_log_level():
    assert configure_logging(debug=True) is LOGGER
    assert LOGGER.getEffectiveLevel() == logging.DEBUG

    configure_logging(debug=False)
    assert LOGGER.getEffectiveLevel() == logging.INFO


def test_default_follows_environment_flag(monkeypatch):
    monkeypatch.setattr(logging_setup, "DEBUG", True)

    configure_logging()

    assert LOGGER.level == logging.DEBUG
