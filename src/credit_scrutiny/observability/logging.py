"""Shared logging utilities for consistent scrutiny observability.

Usage example:
    from credit_scrutiny.observability.logging import get_logger

    logger = get_logger("credit_scrutiny.underwriting")
    logger.info("Scored %s as %s", account_name, tier)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_ROOT_NAME = "credit_scrutiny"


def get_logger(name: str) -> logging.Logger:
    """Return a standard logger configured for UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stream handler and a consistent UTC format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def set_log_level(level: str, *, prefix: str = _ROOT_NAME) -> None:
    """Apply a level to every already-created logger under ``prefix``.

    Placeholder entries in the logger registry are skipped, not materialised.
    """
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name == prefix or name.startswith(f"{prefix}."):
            logger.setLevel(level.upper())
