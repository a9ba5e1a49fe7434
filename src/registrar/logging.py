"""Logging setup for the Registrar service.

Everything under the ``registrar`` logger goes to a rotating file and,
optionally, the console. Modules log through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE = "registrar.log"
MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Database credentials as they show up in driver errors and URLs
_SECRET_PATTERNS = [
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+):[^@\s]+@"), r"\1:***@"),
    (re.compile(r"(?i)(password=)[^\s&;]+"), r"\1[REDACTED]"),
    (re.compile(r"(?i)(PGPASSWORD[:=]\s*)\S+"), r"\1[REDACTED]"),
]


def setup_logging(
    log_dir: str | Path,
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """Attach file (and console) handlers to the ``registrar`` logger.

    Called from the app factory, so every process that serves requests
    (including uvicorn reload workers) configures itself. Calling it again
    replaces the previous handlers.

    Args:
        log_dir: Directory for ``registrar.log``; created if missing.
        level: Level name such as DEBUG or INFO.
        console: Also write to stderr.

    Returns:
        The ``registrar`` logger.
    """
    log_path = Path(log_dir) / LOG_FILE
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger("registrar")
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s at %s", log_path, logging.getLevelName(log_level))
    return logger


def sanitize_for_log(text: str) -> str:
    """Mask database passwords in ``text``."""
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text
