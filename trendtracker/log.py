"""Console logging setup shared by the CLI and the web app."""

import logging
import sys

from trendtracker.config import DEBUG, LOG_LEVEL

_configured = False


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a console handler to the package logger (once).

    Args:
        verbose: Force DEBUG level regardless of LOG_LEVEL.

    Returns:
        The ``trendtracker`` package logger.
    """
    global _configured
    logger = logging.getLogger("trendtracker")

    level = logging.DEBUG if (verbose or DEBUG) else getattr(logging, LOG_LEVEL, logging.INFO)
    logger.setLevel(level)

    if _configured:
        return logger

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(console)
    _configured = True
    return logger
