# model/api.py
from pydantic import BaseModel


class ImageUrlResponse(BaseModel):
    url: str
    number: int


class CountResponse(BaseModel):
    count: int


class QuoteResponse(BaseModel):
    quote: str


class JokeResponse(BaseModel):
    joke: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    ok: bool
    watchers: dict[str, str]
