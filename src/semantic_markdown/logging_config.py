import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "semantic_markdown"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the ``semantic_markdown`` logger.

    Converted Markdown is written to stdout by the CLI, so log records go to
    stderr and, optionally, to ``log_file``. Existing handlers are kept
    unless ``force`` is set; the level is always updated.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number
        log_file: Optional file receiving the same records
        format_string: Optional custom format string for log messages
        force: Replace handlers installed by an earlier call

    Returns:
        The package logger
    """
    numeric_level = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    if force:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(numeric_level)
    else:
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
        logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), numeric_level, formatter))
        if log_file:
            logger.addHandler(_make_handler(logging.FileHandler(log_file), numeric_level, formatter))

    # Records stop here; the root logger may belong to the host application
    logger.propagate = False

    return logger
