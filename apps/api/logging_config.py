"""
Logging setup: console output plus optional rotating log files.

The ``security`` logger receives rejected uploads and is written to its own
file so it can be retained longer than the application log.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from config import Settings

SECURITY_LOGGER_NAME = "security"

_CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_SECURITY_CONSOLE_FORMAT = "%(asctime)s [SECURITY] %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _rotating_handler(path: Path, backup_days: int, level: int) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(path, when="midnight", backupCount=backup_days, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def resolve_log_level(settings: Settings) -> int:
    explicit = (settings.LOG_LEVEL or "").strip().upper()
    if explicit:
        level = logging.getLevelName(explicit)
        if isinstance(level, int):
            return level
    return logging.INFO if settings.is_production else logging.DEBUG


def configure_logging(settings: Settings) -> None:
    """Install handlers on the root and security loggers. Safe to call twice."""
    level = resolve_log_level(settings)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_video_checker", False):
            root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    console._video_checker = True
    root.addHandler(console)

    security = logging.getLogger(SECURITY_LOGGER_NAME)
    security.setLevel(logging.INFO)
    security.propagate = False
    for handler in list(security.handlers):
        if getattr(handler, "_video_checker", False):
            security.removeHandler(handler)

    security_console = logging.StreamHandler()
    security_console.setFormatter(logging.Formatter(_SECURITY_CONSOLE_FORMAT))
    security_console._video_checker = True
    security.addHandler(security_console)

    if not settings.LOG_TO_FILE:
        return

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handlers = [
        (root, _rotating_handler(log_dir / "app.log", 14, level)),
        (root, _rotating_handler(log_dir / "error.log", 30, logging.ERROR)),
        (security, _rotating_handler(log_dir / "security.log", 90, logging.INFO)),
    ]
    for logger, handler in file_handlers:
        handler._video_checker = True
        logger.addHandler(handler)


def get_security_logger() -> logging.Logger:
    return logging.getLogger(SECURITY_LOGGER_NAME)
