#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/logging_utils.py
"""Logging setup for the qbank command line.

Library modules only create module-level loggers; handlers are installed
here, once, by the CLI. Parse progress is reported through the
``qbank.progress`` logger so a long conversion can be followed with
``--log-level INFO`` without a custom callback.

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from qbank.progress import ProgressEvent

PROGRESS_LOGGER_NAME = "qbank.progress"

_PROGRESS_LEVELS = {
    "started": logging.INFO,
    "item_done": logging.DEBUG,
    "finished": logging.INFO,
    "error": logging.WARNING,
}


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the qbank console handler (and optional file handler) on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO"). Unknown names
        resolve to INFO.
    log_file : str, optional
        Path of a file that receives the same records as stderr.
    trace_mode : bool, default False
        When true, prefix records with a timestamp and the logger name.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    if isinstance(log_level, int):
        resolved_level = log_level
    else:
        resolved_level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%H:%M:%S")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning("Could not create log file %s: %s", log_file, file_error)
    elif log_file:
        root_logger.info("Logging to file: %s", log_file)

    return root_logger


def log_progress_event(event: ProgressEvent) -> None:
    """Progress callback that writes each event to the ``qbank.progress`` logger.

    Section commits are logged at DEBUG, the start and end of a pass at INFO
    and a stopped pass at WARNING.
    """
    level = _PROGRESS_LEVELS.get(event.event_type, logging.INFO)
    logging.getLogger(PROGRESS_LOGGER_NAME).log(level, "%s", event)
