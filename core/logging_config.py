# core/logging_config.py

"""
Logging setup for the Student Records application.

Modules log through `logging.getLogger(__name__)`. The CLI entry point calls `setup_logging()` once
to attach a single stderr handler to the root logger. The level is read from the
`STUDENT_RECORDS_LOG_LEVEL` environment variable and defaults to WARNING, so import diagnostics
reach the terminal while routine INFO messages stay quiet.
"""

import logging
import os
import sys

LOG_LEVEL_ENV = "STUDENT_RECORDS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def resolve_log_level(level_name: str | None = None) -> int:
    name = (level_name or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)

    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level_name: str | None = None) -> logging.Logger:
    """
    Configures the root logger with a plain-text stderr handler.

    Args:
        level_name (str | None): Optional explicit level name. Falls back to the environment variable, then WARNING.

    Returns:
        The configured root logger.

    Notes:
        - Replaces any handlers already attached to the root logger, so repeated calls do not duplicate output.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_log_level(level_name))
    root_logger.handlers = [handler]

    return root_logger
