"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so records reach pytest's capture handler."""
    yield
    logger = logging.getLogger("semantic_markdown")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
