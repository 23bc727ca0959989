"""Shared pytest configuration for numderive tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _numderive_debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Capture numderive debug logs so failures show the pipeline steps."""
    caplog.set_level(logging.DEBUG, logger="numderive")
