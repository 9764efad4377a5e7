from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .paths import log_path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, path: Path | None = None) -> Path:
    """Send the package's log records to a rotating file.

    The TUI owns the terminal, so nothing is written to stderr here.
    """
    path = path or log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger("librarytui")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handler = RotatingFileHandler(path, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return path
