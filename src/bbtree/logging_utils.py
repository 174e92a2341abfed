"""Logging setup for the bbtree command-line entry point.

Handlers are attached to the ``bbtree`` package logger only. The root logger
and any handlers a host application installed on it are left untouched, so
calling :func:`bbtree.cli.main` from inside another program does not take
over that program's logging.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "bbtree"
_HANDLER_NAME_PREFIX = "bbtree.cli."


def resolve_log_level(log_level: int | str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value, defaulting to INFO."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _remove_installed_handlers(package_logger: logging.Logger) -> None:
    for handler in package_logger.handlers[:]:
        if (handler.get_name() or "").startswith(_HANDLER_NAME_PREFIX):
            package_logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the package logger for the CLI.

    Calling this again replaces the handlers installed by the previous call
    instead of stacking new ones next to them.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.

    Returns
    -------
    logging.Logger
        The configured ``bbtree`` logger.

    """
    resolved_level = resolve_log_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(resolved_level)
    _remove_installed_handlers(package_logger)

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(f"{_HANDLER_NAME_PREFIX}console")
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.set_name(f"{_HANDLER_NAME_PREFIX}file")
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
