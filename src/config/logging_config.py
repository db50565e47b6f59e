# src/config/logging_config.py

"""Logging for sales_watch runs.

A launch gets one log file under ``logs/`` (``run_YYYYMMDD_HHMMSS.log``)
that collects DEBUG output from every ``sales_watch.*`` logger, including
coerced counters and skipped duplicates.  The console handler writes to
stderr, so JSON printed on stdout stays parseable, and only shows records
at ``Settings.CONSOLE_LOG_LEVEL`` or above.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "sales_watch"

_FILE_FORMAT = (
    "%(asctime)s %(levelname)-8s [%(name)s] %(message)s "
    "(%(filename)s:%(lineno)d, %(threadName)s)"
)
_CONSOLE_FORMAT = "%(levelname)s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _active_log_file(logger: logging.Logger) -> Path | None:
    """Return the file an already-configured logger writes to."""
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(
    logs_dir: Path | None = None,
    console_level: str | int | None = None,
) -> Path:
    """Attach the run-log and console handlers to ``sales_watch``.

    Calling it again in the same process leaves the handlers alone and
    returns the log file already in use.

    Args:
        logs_dir: Directory for the run log.  Defaults to
            ``Settings.LOGS_DIR``.
        console_level: Minimum level echoed to stderr.  Defaults to
            ``Settings.CONSOLE_LOG_LEVEL``.

    Returns:
        Path of the log file this process writes to.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    active = _active_log_file(root_logger)
    if active is not None:
        return active

    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    root_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level or Settings.CONSOLE_LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    root_logger.debug("Run log: %s", log_file)
    return log_file
