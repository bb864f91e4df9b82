# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class CountMode(str, Enum):
    CACHED = "cached"
    LIVE = "live"


class WatcherStatus(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    FAILED = "failed"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    NOT_FOUND = ErrorInfo("Not Found", status.HTTP_404_NOT_FOUND)
    IMAGE_NOT_FOUND = ErrorInfo("Image not found", status.HTTP_404_NOT_FOUND)
    DOCS_NOT_FOUND = ErrorInfo("Documentation not found", status.HTTP_404_NOT_FOUND)
