"""Logger hierarchy shared by the scanner, engine, rewriter and CLI."""

from __future__ import annotations

import logging

LOGGER_NAME = "spapage"
LOG_FORMAT = "[spapage] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `spapage.<name>`, or the package logger when no name is given."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Route spapage records to stderr at DEBUG when verbose, INFO otherwise."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    # main() can run several times in one process; keep a single handler.
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["LOG_FORMAT", "LOGGER_NAME", "configure_logging", "get_logger"]
