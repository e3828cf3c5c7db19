# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

# Optional: capture warnings.* into logging
logging.captureWarnings(True)


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[34m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Keep plain levelname for files; only colorize for console
        if getattr(record, "_colorize", False):
            lvl = record.levelname
            record.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        return super().format(record)


def init_logger(force: bool = False) -> logging.Logger:
    """
    Idempotent logger init:
    - The deploy host usually owns logging: a root logger that already has
      handlers is left untouched unless `force` is set.
    - Otherwise logs to stdout, plus logs/<LOG_FILE_NAME> when settings.LOG_TO_FILE.
    - Rotates file logs by size (maxBytes/backupCount in settings).
    - Respects settings.LOG_LEVEL.
    """
    root = logging.getLogger()
    logger = logging.getLogger(settings.LOGGER_NAME)
    if getattr(root, "_kv_index_inited", False) and not force:
        return logger
    if root.handlers and not force:
        return logger

    # Base level
    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)

    # Clear any default handlers to avoid duplicates
    for h in list(root.handlers):
        root.removeHandler(h)

    # Formatters
    text_fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    date_fmt = "%Y-%m-%dT%H:%M:%S%z"
    plain = logging.Formatter(text_fmt, datefmt=date_fmt)
    colored = ColoredFormatter(text_fmt, datefmt=date_fmt)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(colored)

    # Tag console records to colorize levelname, leave files plain
    old_emit = ch.emit

    def emit_with_flag(record: logging.LogRecord):
        record._colorize = True  # type: ignore[attr-defined]
        return old_emit(record)

    ch.emit = emit_with_flag  # type: ignore[assignment]
    root.addHandler(ch)

    # File handler (optional)
    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.setFormatter(plain)
        root.addHandler(fh)

    # Store clients log every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    root._kv_index_inited = True  # mark as initialized
    logger.debug("Logger initialized", extra={"component": "bootstrap"})
    return logger
