# util/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


class LineSourceError(Exception):
    """Base for failures while loading a JSON line collection."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.message = message


class SourceUnavailable(LineSourceError):
    pass


class MalformedSource(LineSourceError):
    pass


class EmptyCollection(LineSourceError):
    pass
