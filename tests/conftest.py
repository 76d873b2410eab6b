"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['PLOTVIEW_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # Clamping and skipped-region warnings are expected in some tests
    for logger_name in ['plotview.image.extraction', 'plotview.regions.collection']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
