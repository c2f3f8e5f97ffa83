"""Logging setup shared by the CLI commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER_NAME = "fastq_manifest"


def resolve_level(level: int | str) -> int:
    """Turn ``"info"``/``"DEBUG"``/``20`` into a logging level number."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(log_file: Path | None = None, level: int | str = logging.INFO) -> logging.Logger:
    """Route records to stderr and, when ``log_file`` is given, to that file.

    Handlers installed by an earlier call are closed first, so repeated CLI
    invocations in one process never write a record twice. Stdout stays free
    for command output such as a dry-run manifest.
    """

    numeric_level = resolve_level(level)
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(numeric_level)
        root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(numeric_level)
    return logger
