"""
Tests for logging configuration.
"""

import logging

import pytest

from battlelog.logging_setup import LOG_FORMAT, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_sets_level_and_format(restore_root_logger):
    logger = configure_logging("debug")

    assert logger.name == "battlelog"
    assert restore_root_logger.level == logging.DEBUG
    assert restore_root_logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_unknown_level_falls_back_to_info(restore_root_logger):
    configure_logging("chatty")
    assert restore_root_logger.level == logging.INFO
