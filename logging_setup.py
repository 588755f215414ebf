#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and a rotating file
handler (``rayscan.log``, 1 MB, 2 backups).

Call :func:`setup_logging` once at startup before any other ``import``
triggers ``logging.getLogger()``.
"""

import logging
from logging.handlers import RotatingFileHandler

from config import DRIVING_DEBUG_LOG_FILE, LOG_FILE


def setup_logging(
    level: int = logging.INFO,
    log_file: str = LOG_FILE,
    driving_log_file: str = DRIVING_DEBUG_LOG_FILE,
) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    log_file : str
        Path of the main rotating log.
    driving_log_file : str
        Path of the DEBUG-level log for the ``driving`` logger.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)

    fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=2)
    fh.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)
    root.addHandler(fh)

    # ── Dedicated debug file for the driving state machine ────────────
    driving_logger = logging.getLogger("driving")
    driving_logger.setLevel(logging.DEBUG)
    for handler in list(driving_logger.handlers):
        driving_logger.removeHandler(handler)
        handler.close()
    dfh = RotatingFileHandler(
        driving_log_file, maxBytes=5_000_000, backupCount=2
    )
    dfh.setLevel(logging.DEBUG)
    dfh.setFormatter(fmt)
    driving_logger.addHandler(dfh)
    # Console / main file still honour *level*
    ch.setLevel(level)
    fh.setLevel(level)
