# utils/logger.py
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List, Optional, Union

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_ROTATE_BYTES = int(os.getenv("LOG_MAX_MB", "1")) * 1024 * 1024
LOG_BACKUPS = int(os.getenv("LOG_BACKUPS", "8"))

LOG_FILE_NAME = "tradeproxy.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# third-party loggers that are too chatty at INFO
_QUIET = ("aiohttp.access", "asyncio")


def log_file_for(log_dir: str) -> str:
    return os.path.join(log_dir, LOG_FILE_NAME)


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _build_handlers(log_file: Optional[str], to_console: bool) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if log_file:
        parent = os.path.dirname(log_file)
        if parent:
            os.makedirs(parent, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file, maxBytes=LOG_ROTATE_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        ))
    if to_console:
        handlers.append(logging.StreamHandler())
    return handlers


def setup_logger(name: Optional[str],
                 level: Union[str, int] = LOG_LEVEL,
                 log_file: Optional[str] = None,
                 to_console: bool = True) -> logging.Logger:
    """
    Configure ``name`` (``None`` = root, so module loggers inherit it) with a
    rotating log file and/or stderr output.  A logger that already has
    handlers is returned untouched.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = _resolve_level(level)
    logger.setLevel(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in _build_handlers(log_file, to_console):
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    for noisy in _QUIET:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return logger
