from __future__ import annotations

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pocket_notes.settings import LOG_PATH

# Every module logs under this package logger via get_logger(__name__).
PACKAGE_LOGGER = "pocket_notes"

SESSION_ID = uuid.uuid4().hex[:8]

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(session)s] %(name)s: %(message)s"


class _SessionStamp(logging.Filter):
    """Records from third-party loggers arrive without a session field."""
    def filter(self, record: logging.LogRecord) -> bool:
        record.__dict__.setdefault("session", SESSION_ID)
        return True


class NotesLogger(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {}).setdefault("session", SESSION_ID)
        return msg, kwargs


def get_logger(name: str) -> NotesLogger:
    return NotesLogger(logging.getLogger(name), {})


def setup_logging(*, log_path: Path = LOG_PATH, verbose: bool = False) -> logging.Logger:
    """
    Attach handlers to the package logger. Called once from main();
    importing pocket_notes never touches the filesystem.

    The note log is small: INFO and up go to a 512 KiB file kept in three
    generations, warnings go to stderr. ``verbose`` drops both to DEBUG.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if logger.handlers:
        return logger

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)
    stamp = _SessionStamp()

    file_handler = RotatingFileHandler(
        log_path, maxBytes=512 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.addFilter(stamp)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(formatter)
    console.addFilter(stamp)

    logger.addHandler(file_handler)
    logger.addHandler(console)

    logger.info("Session %s logging to %s", SESSION_ID, log_path)
    return logger


def install_global_exception_hooks() -> None:
    log = get_logger(PACKAGE_LOGGER)

    def _log_uncaught(exc_type, exc, tb):
        log.critical("Unhandled %s", exc_type.__name__, exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _log_uncaught

    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }
    qt_log = get_logger(f"{PACKAGE_LOGGER}.qt")

    def _forward_qt_message(mode, context, message):
        where = f"{getattr(context, 'file', None) or '?'}:{getattr(context, 'line', 0)}"
        qt_log.log(levels.get(mode, logging.WARNING), "%s (%s)", message, where)

    qInstallMessageHandler(_forward_qt_message)
