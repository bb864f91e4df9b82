# service/line_service.py
import logging
from fastapi import status
from model.api import JokeResponse, QuoteResponse
from repository.line_repository import LineStore
from util.errors import AppError, EmptyCollection, LineSourceError

logger = logging.getLogger(__name__)


class LineService:
    def __init__(self, quotes: LineStore, jokes: LineStore) -> None:
        self._quotes = quotes
        self._jokes = jokes

    def random_quote(self) -> QuoteResponse:
        return QuoteResponse(quote=self._random_line(self._quotes, "quote"))

    def random_joke(self) -> JokeResponse:
        return JokeResponse(joke=self._random_line(self._jokes, "joke"))

    @staticmethod
    def _random_line(store: LineStore, kind: str) -> str:
        try:
            return store.random_line()
        except EmptyCollection as e:
            logger.warning("%s.empty path=%s", kind, e.path)
            raise AppError(e.message, status.HTTP_500_INTERNAL_SERVER_ERROR)
        except LineSourceError as e:
            # SourceUnavailable / MalformedSource: the source itself is broken
            logger.error("%s.source.error kind=%s path=%s", kind, type(e).__name__, e.path)
            raise AppError(e.message, status.HTTP_500_INTERNAL_SERVER_ERROR)
