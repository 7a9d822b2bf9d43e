"""Constants, label tables and logging setup for serverstats."""

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler

from serverstats.errors import ConfigError

SERVER_HOST = "10.0.2.2"
SERVER_PORT = 61208
STATS_URL = f"http://{SERVER_HOST}:{SERVER_PORT}/api/4/all"

CONNECT_TIMEOUT = 3.0  # Seconds
POLL_RATE = 1.0  # Seconds between cycles

BYTES_PER_GB = 1024**3
SEPARATOR = "-------------------"

LOG_FILE_NAME = "serverstats.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3


@dataclass(slots=True, frozen=True)
class Labels:
    """User-visible strings for one display language."""

    server: str
    release: str
    disks: str
    disk_of: str
    error: str
    connecting: str  # Formatted with host=


EN = Labels(
    server="Server: ",
    release="Release: ",
    disks="Disks:",
    disk_of="of",
    error="Error:",
    connecting="Connecting to {host}...",
)

# Russian UI strings, kept byte-for-byte.
RU = Labels(
    server="Сервер: ",
    release="Релиз: ",
    disks="Диски:",
    disk_of="из",
    error="Ошибка:",
    connecting="Подключение к {host}...",
)

LABELS: dict[str, Labels] = {"en": EN, "ru": RU}


def get_labels(locale: str) -> Labels:
    """Return the label table for a locale code such as ``"en"`` or ``"ru"``."""
    try:
        return LABELS[locale.lower()]
    except KeyError:
        known = ", ".join(sorted(LABELS))
        raise ConfigError(f"Unknown locale {locale!r} (expected one of: {known})") from None


def _create_log_handler(path: str) -> RotatingFileHandler:
    try:
        return RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT)
    except OSError:
        # Fall back to the user's home if the folder is not writable
        fallback_dir = os.path.join(os.path.expanduser("~"), ".serverstats")
        os.makedirs(fallback_dir, exist_ok=True)
        fallback_path = os.path.join(fallback_dir, LOG_FILE_NAME)
        return RotatingFileHandler(
            fallback_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
        )


def setup_logging(log_file: str | None = None, level: int = logging.INFO) -> logging.Handler:
    """
    Route the ``serverstats`` loggers to a rotating log file.

    The terminal belongs to the TUI, so nothing is written to stderr.

    Args:
        log_file: Path of the log file. Defaults to ``serverstats.log`` in the
            current directory.
        level: Logging level for the package logger.

    Returns:
        The installed handler.
    """
    handler = _create_log_handler(log_file or LOG_FILE_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    logger = logging.getLogger("serverstats")
    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return handler
