"""Global configuration for pytest"""

import pytest

from shaderlib import logger


@pytest.fixture(autouse=True)
def restore_log_level():
    """
    Called around each test, so that tests that change the level of the
    shaderlib logger (e.g. to check what gets logged) don't affect each other.
    """
    level = logger.level
    yield
    logger.setLevel(level)

