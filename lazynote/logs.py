"""File-backed logging setup.

The TUI owns the terminal, so log records go to a file under the user log
directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazynote"
LOG_FILENAME = "lazynote.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(process)d %(name)s %(message)s"
LOG_LEVEL_ENV = "LAZYNOTE_LOG_LEVEL"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return logging.INFO
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(logfile: Path | None = None, level: int | None = None) -> logging.Logger:
    """Configure the ``lazynote`` logger and return it.

    Existing handlers are replaced. When the log file cannot be opened the
    logger gets a ``NullHandler`` so startup continues.
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level if level is not None else _level_from_env())
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    target = logfile if logfile is not None else default_log_path()
    handler: logging.Handler
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.debug("logging initialized at %s", target)
    return logger
