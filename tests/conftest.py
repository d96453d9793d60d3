import logging
from unittest.mock import Mock, patch

import pytest

from timed_operations import TRACE

LOGGER_NAME = "timed_operations.tests"


@pytest.fixture
def logger(caplog):
    """Fixture for a logger whose records are captured at every level."""
    caplog.set_level(TRACE, logger=LOGGER_NAME)
    return logging.getLogger(LOGGER_NAME)


@pytest.fixture
def events(caplog):
    """Fixture returning a callable that lists the records written to the test logger."""

    def _events():
        return [record for record in caplog.records if record.name == LOGGER_NAME]

    return _events


@pytest.fixture
def mock_logger():
    """Fixture for a collaborator that records calls instead of writing them."""
    return Mock(spec=logging.Logger)


@pytest.fixture
def clock():
    """Fixture for a controllable monotonic clock, in seconds."""
    now = [100.0]

    def monotonic():
        return now[0]

    with patch("timed_operations.operation.time.monotonic", side_effect=monotonic):
        yield now
