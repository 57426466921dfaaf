#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/logging_utils.py
"""Logging setup for the ``mdprint`` command.

Handlers are attached to the ``mdprint`` package logger only, so embedding
applications keep control of the root logger. Library modules log through
``logging.getLogger(__name__)`` and reach these handlers by name.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mdprint"

# Console: "mdprint WARNING: Could not use image chart.png: ..."
CONSOLE_FORMAT = "mdprint %(levelname)s: %(message)s"

# Trace: "[2025-01-01 12:00:00] [DEBUG] [mdprint.walker] ..."
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str, default: int = logging.WARNING) -> int:
    """Return a numeric level for ``log_level``, or ``default`` for unknown names."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the ``mdprint`` logger for a command line run.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "info")
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Use the timestamped trace format

    Returns
    -------
    logging.Logger
        The configured ``mdprint`` logger

    """
    resolved_level = resolve_log_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved_level)
    package_logger.handlers.clear()
    package_logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            package_logger.warning(f"Could not open log file {log_file}: {e}")
        else:
            # Log files always use the trace format
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT))
            package_logger.addHandler(file_handler)
            package_logger.debug(f"Logging to file: {log_file}")

    return package_logger
