"""
Tests for the central logging setup.
"""

import logging

from readiness_report.logging_config import LOG_FORMAT, setup_logging


def test_setup_logging_configures_root():
    root = setup_logging("DEBUG")

    assert root is logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == LOG_FORMAT


def test_setup_logging_is_idempotent():
    setup_logging("INFO")
    root = setup_logging("WARNING")

    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
    assert logging.getLogger("playwright").level == logging.WARNING
