"""Configuration for unit tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Capture everything the package logs, from DEBUG up."""
    caplog.set_level(logging.DEBUG, logger="photo_frame")
    yield
