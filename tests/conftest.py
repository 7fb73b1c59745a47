import logging
import sys
from unittest.mock import MagicMock

import pytest

from pivotal_tracker.core.transport import TrackerTransport

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)
logger.info("Test logging configured: level=DEBUG")


@pytest.fixture(autouse=True)
def log_test_start(request):
    """Log test start and end for each test."""
    logger.info("=" * 80)
    logger.info("Starting test: %s", request.node.name)
    yield
    logger.info("Completed test: %s", request.node.name)
    logger.info("=" * 80)


@pytest.fixture
def stub_transport():
    """TrackerTransport stand-in; tests set return values per call"""
    return MagicMock(spec=TrackerTransport)
