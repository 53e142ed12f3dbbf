# metadata_enrichment/logging/logger.py
"""
Unified logging setup for metadata_enrichment.

All modules use:
    from metadata_enrichment.logging import get_logger
    logger = get_logger(__name__)

Configuration happens once, in configure_logging(), usually from the CLI
entrypoint. Library code only asks for loggers.
"""

import logging
import sys

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=sys.stderr,
):
    """
    Configure the root logging handler.

    Safe to call multiple times; a second handler is never added.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Example:
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
