"""Logging setup for the ``mdnormalize`` command.

The normalizer reports through the ``mdnormalize.*`` loggers and never
installs handlers itself. The one diagnostic users normally see is the
ERROR record written when a ```` ```markdown ```` block cannot be formatted;
everything else is DEBUG detail such as how many nested blocks were touched.
:func:`configure_logging` routes those records to stderr so they never mix
with the normalized document on stdout, and optionally to a log file.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Translate a ``--log-level`` value such as ``"info"`` into its number.

    Unknown names fall back to ``logging.INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _build_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    return logging.Formatter(PLAIN_FORMAT)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send normalizer diagnostics to stderr for one CLI run.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output. A log file that cannot be opened is reported on stderr
    and skipped; normalizing the document still goes ahead.

    Parameters
    ----------
    log_level : int | str
        Level from ``--log-level`` or the config file, by name or number.
    log_file : str, optional
        Path that receives a copy of every record (``--log-file``).
    trace_mode : bool, default False
        ``--trace`` output: timestamps and the emitting logger's name.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    level = resolve_log_level(log_level)
    formatter = _build_formatter(trace_mode)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    if not log_file:
        return root_logger

    try:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as exc:
        root_logger.warning("Could not create log file %s: %s", log_file, exc)
        return root_logger

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    root_logger.debug("Logging to file: %s", log_file)
    return root_logger
