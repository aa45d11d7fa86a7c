#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/logging_utils.py
"""Logging setup for the bbcode2html command.

The library itself only creates module loggers under the ``bbcode2html``
namespace and never installs handlers. The command calls
:func:`configure_logging` once, which attaches a stderr handler (and
optionally a file handler) to the root logger.

Trace mode adds timestamps and logger names. It also narrows output to the
renderer's own loggers, so DEBUG chatter from third-party libraries (jinja2,
rich, yaml) does not bury the rule and pass messages; their warnings still
come through.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "bbcode2html"
HANDLER_NAME = "bbcode2html-cli"

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(module_path)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class PackageTraceFilter(logging.Filter):
    """Keep records from bbcode2html loggers plus warnings from anything else.

    Accepted records get a ``module_path`` attribute: the logger name with
    the ``bbcode2html.`` prefix removed (``rules``, ``cli.config``, ...).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + "."):
            record.module_path = name[len(PACKAGE_LOGGER_NAME) + 1 :] or PACKAGE_LOGGER_NAME
            return True
        if record.levelno >= logging.WARNING:
            record.module_path = name
            return True
        return False


def resolve_log_level(log_level: int | str = "WARNING", verbose: bool = False, trace: bool = False) -> int:
    """Work out the effective level from the command's logging flags.

    ``--trace`` wins, then ``--verbose`` (only while ``--log-level`` is left at
    its WARNING default), then ``--log-level`` itself.

    Parameters
    ----------
    log_level : int or str, default "WARNING"
        Numeric level or level name
    verbose : bool, default False
        The ``--verbose`` flag
    trace : bool, default False
        The ``--trace`` flag

    Returns
    -------
    int
        Numeric logging level; unknown names fall back to WARNING

    """
    if trace:
        return logging.DEBUG

    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING

    if verbose and level == logging.WARNING:
        return logging.DEBUG
    return level


def _make_handler(handler: logging.Handler, level: int, trace: bool) -> logging.Handler:
    handler.set_name(HANDLER_NAME)
    handler.setLevel(level)
    if trace:
        handler.setFormatter(logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT))
        handler.addFilter(PackageTraceFilter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def configure_logging(
    log_level: int | str = "WARNING",
    verbose: bool = False,
    trace: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Install the command's log handlers on the root logger.

    Handlers installed by an earlier call are replaced; handlers that other
    code attached to the root logger are left alone.

    Parameters
    ----------
    log_level : int or str, default "WARNING"
        Level from ``--log-level``
    verbose : bool, default False
        The ``--verbose`` flag
    trace : bool, default False
        The ``--trace`` flag; timestamped, package-only output at DEBUG
    log_file : str, optional
        Also append log records to this file

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_log_level(log_level, verbose=verbose, trace=trace)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
            existing.close()
    root_logger.setLevel(level)

    root_logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level, trace))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            root_logger.addHandler(_make_handler(file_handler, level, trace))
            logging.getLogger(PACKAGE_LOGGER_NAME).debug("Logging to file: %s", log_file)

    return root_logger


__all__ = [
    "CONSOLE_FORMAT",
    "HANDLER_NAME",
    "PackageTraceFilter",
    "TRACE_FORMAT",
    "configure_logging",
    "resolve_log_level",
]
