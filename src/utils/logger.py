"""
src/utils/logger.py
Named loggers for the analysis pipeline: Rich console output, plus a
rotating per-area log file unless LOG_TO_FILE is off.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from src.utils.config import LOG_DIR, LOG_LEVEL, LOG_TO_FILE

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

_loggers: dict[str, logging.Logger] = {}


def _console_handler() -> logging.Handler:
    handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
    handler.setLevel(logging.DEBUG)
    return handler


def _file_handler(area: str) -> logging.Handler:
    os.makedirs(LOG_DIR, exist_ok=True)
    # "pipeline.archive" → logs/pipeline_archive.log
    path = os.path.join(LOG_DIR, f"{area.replace('.', '_')}.log")
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def get_logger(area: str = "lotofacil") -> logging.Logger:
    """Return the cached logger for an area such as "engine" or "pipeline.archive"."""
    if area in _loggers:
        return _loggers[area]

    logger = logging.getLogger(f"lotofacil.{area}")
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.propagate = False

    if not logger.handlers:
        logger.addHandler(_console_handler())
        if LOG_TO_FILE:
            logger.addHandler(_file_handler(area))

    _loggers[area] = logger
    return logger
