from __future__ import annotations

import logging
import os
import sys

ENV_LOG_LEVEL = "MDCELLS_LOG_LEVEL"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Output goes to stderr as ``[time] [LEVEL] [name] message``. The level comes
    from the argument, then ``MDCELLS_LOG_LEVEL``, then defaults to WARNING.
    """
    level_str = (level or os.environ.get(ENV_LOG_LEVEL) or "WARNING").upper()
    log_level = getattr(logging, level_str, logging.WARNING)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger("mdcells")
    logger.setLevel(log_level)
    # Avoid duplicate handlers when main() runs more than once in a process
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
