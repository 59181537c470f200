"""Logging setup for the webpage command line tool.

The library only creates module loggers; handlers are installed here.
"""

import logging
import sys

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure the ``webpage`` logger with a single stderr handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
    """
    logger = logging.getLogger("webpage")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Reset handlers so repeated calls do not duplicate output
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
