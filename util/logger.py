# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any
from config.settings import Settings, settings as default_settings
from util.enums import Color

logging.captureWarnings(True)

LINE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Attributes every LogRecord carries; anything else arrived through `extra`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
    "color_message",  # uvicorn
}

_inited = False


def _render(value: Any) -> str:
    text = str(value)
    if not text or any(c.isspace() for c in text):
        return repr(text)
    return text


class EventFormatter(logging.Formatter):
    """
    Renders "<time> <LEVEL> <logger> <event> key=val ...".

    Messages already carry their own `event key=val` text; fields passed via
    `extra=` are appended in the same shape. With `colorize`, only the level
    name is colored and the record itself is left untouched for other
    handlers.
    """

    LEVEL_COLORS = {
        "INFO": str(Color.GREEN),
        "WARNING": str(Color.YELLOW),
        "ERROR": str(Color.RED),
        "CRITICAL": f"{Color.BOLD}{Color.RED}",
    }

    def __init__(self, colorize: bool = False) -> None:
        super().__init__(LINE_FORMAT, datefmt=DATE_FORMAT)
        self.colorize = colorize

    def format(self, record: logging.LogRecord) -> str:
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if self.colorize and record.levelname in self.LEVEL_COLORS:
            record = logging.makeLogRecord(vars(record))
            record.levelname = (
                f"{self.LEVEL_COLORS[record.levelname]}{record.levelname}{Color.RESET}"
            )
        line = super().format(record)
        if not fields:
            return line
        suffix = " ".join(f"{k}={_render(v)}" for k, v in fields.items())
        # Keep fields on the event line, ahead of any traceback
        head, sep, tail = line.partition("\n")
        return f"{head} {suffix}{sep}{tail}"


def init_logger(settings: Settings = default_settings) -> logging.Logger:
    """
    Root logger setup, once per process. Console output goes to stdout;
    LOG_TO_FILE adds a size-rotated plain-text file under LOG_DIR.
    """
    global _inited
    if _inited:
        return logging.getLogger(settings.LOGGER_NAME)

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(EventFormatter(colorize=sys.stdout.isatty()))
    root.addHandler(console)

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.setFormatter(EventFormatter())
        root.addHandler(fh)

    # watchdog logs every inotify event at DEBUG
    logging.getLogger("watchdog").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    _inited = True
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug(
        "logger.ready", extra={"level": logging.getLevelName(level), "file": settings.LOG_TO_FILE}
    )
    return logger
