"""
Diagnostics sink.

Every module logs through logging.getLogger(__name__), i.e. below the
"coursemgr" logger. open_diagnostics() attaches the log file handler to that
logger for the duration of one CLI invocation and detaches it afterwards:

    with open_diagnostics(settings):
        status = dispatch(...)

Errors end up as one line each in ~/.schedule-manager/log.txt.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator

from coursemgr.config import Settings

PACKAGE_LOGGER = "coursemgr"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    return handler


@contextmanager
def open_diagnostics(settings: Settings) -> Iterator[logging.Logger]:
    """
    Open the log file (creating its directory) and route package logs into it.

    If the file cannot be opened, logs go to stderr instead.
    Handlers are always removed and closed when the block exits.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers: list[logging.Handler] = []
    open_error: OSError | None = None

    try:
        settings.program_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(file_handler)
    except OSError as exc:
        open_error = exc

    if open_error is not None or settings.echo_errors:
        handlers.append(_stderr_handler())

    old_level = logger.level
    old_propagate = logger.propagate
    logger.setLevel(logging.INFO)
    logger.propagate = False
    for h in handlers:
        logger.addHandler(h)

    if open_error is not None:
        logger.error("Could not open log file %s: %s", settings.log_file, open_error)

    try:
        yield logger
    finally:
        for h in handlers:
            logger.removeHandler(h)
            h.close()
        logger.setLevel(old_level)
        logger.propagate = old_propagate
