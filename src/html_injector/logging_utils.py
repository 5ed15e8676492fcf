"""Logging setup for the html-injector command line.

Handlers are attached to the ``html_injector`` package logger rather than the
root logger, so embedding applications keep control of their own logging
tree. Every module logs through ``logging.getLogger(__name__)`` and inherits
these handlers.

Standard output carries the converted tree. All diagnostics go to standard
error, optionally duplicated to a log file.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "html_injector"
HANDLER_NAME_PREFIX = f"{PACKAGE_LOGGER_NAME}."

CONSOLE_FORMAT = "html-injector: %(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str | None) -> int:
    """Turn a level number, numeric string or level name into a level number.

    Unknown names fall back to INFO.

    Examples
    --------
    >>> resolve_log_level("warning")
    30
    >>> resolve_log_level("10")
    10
    >>> resolve_log_level("chatty")
    20

    """
    if isinstance(log_level, int) and not isinstance(log_level, bool):
        return log_level
    name = str(log_level or "").strip()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _stderr_handler(formatter: logging.Formatter, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(f"{HANDLER_NAME_PREFIX}stderr")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _drop_owned_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if (handler.get_name() or "").startswith(HANDLER_NAME_PREFIX):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the package logger for a command-line run.

    Calling this again replaces the handlers installed by an earlier call;
    handlers added by anyone else are left alone.

    Parameters
    ----------
    log_level : int | str
        Level number, numeric string or level name (e.g. "INFO")
    log_file : str, optional
        Path of a file that receives a copy of every record
    trace_mode : bool, default False
        Add timestamps and logger names to every record

    Returns
    -------
    logging.Logger
        The ``html_injector`` package logger

    """
    level = resolve_log_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    _drop_owned_handlers(package_logger)
    package_logger.setLevel(level)
    package_logger.propagate = False
    package_logger.addHandler(_stderr_handler(formatter, level))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.set_name(f"{HANDLER_NAME_PREFIX}file")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.debug("Logging to file: %s", log_file)

    return package_logger
