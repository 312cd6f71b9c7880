"""Logging setup for the Textpad application.

Records go to a rotating file under ``~/.textpad/logs`` (or
``$TEXTPAD_LOG_DIR``) and, unless disabled, to stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

__all__ = ["LOG_FILE_NAME", "setup_logging", "get_log_path"]

LOG_FILE_NAME = "textpad.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_DEFAULT_LOG_DIR = Path.home() / ".textpad" / "logs"
# Held at WARNING or above.
_LOOP_LOGGERS: tuple[str, ...] = ("asyncio", "qasync")

_active_log_path: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Install the file (and console) handlers on the root logger.

    Repeated calls are no-ops returning the existing log path unless
    ``force`` is set.
    """

    global _active_log_path
    if _active_log_path is not None and not force:
        return _active_log_path

    directory = _log_directory(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / LOG_FILE_NAME

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [_file_handler(log_path, max_bytes, backup_count)]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    for name in _LOOP_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _active_log_path = log_path
    return log_path


def get_log_path() -> Path | None:
    """Return the file that :func:`setup_logging` writes to, if configured."""

    return _active_log_path


def _log_directory(log_dir: Path | str | None) -> Path:
    chosen = log_dir or os.environ.get("TEXTPAD_LOG_DIR") or _DEFAULT_LOG_DIR
    return Path(chosen).expanduser()


def _file_handler(path: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    return logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
