#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and a rotating file
handler (``traffic_sim.log``, 1 MB, 2 backups).

Call :func:`setup_logging` once at startup before any other ``import``
triggers ``logging.getLogger()``.
"""

import logging
from logging.handlers import RotatingFileHandler

from config import LOG_FILE, MOTION_DEBUG_LOG_FILE


def setup_logging(level: int = logging.INFO,
                  log_file: str = LOG_FILE,
                  debug_file: str = MOTION_DEBUG_LOG_FILE) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    log_file : str
        Rotating file shared by every logger.
    debug_file : str
        Rotating DEBUG file for the ``motion`` logger (holds, removals).
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)

    fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=2)
    fh.setLevel(level)
    fh.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)
    root.addHandler(fh)

    # ── Dedicated debug file for the motion engine ────────────────────
    motion_logger = logging.getLogger("motion")
    for handler in list(motion_logger.handlers):
        motion_logger.removeHandler(handler)
        handler.close()
    motion_logger.setLevel(logging.DEBUG)
    dfh = RotatingFileHandler(
        debug_file, maxBytes=5_000_000, backupCount=2
    )
    dfh.setLevel(logging.DEBUG)
    dfh.setFormatter(fmt)
    motion_logger.addHandler(dfh)
