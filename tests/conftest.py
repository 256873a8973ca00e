import logging

import pytest


@pytest.fixture(autouse=True)
def restore_bfi_logger():
    logger = logging.getLogger('bfi')
    handlers, level = logger.handlers[:], logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
