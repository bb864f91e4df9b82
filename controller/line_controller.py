# controller/line_controller.py
from fastapi import APIRouter, Depends
from model.api import ErrorResponse, JokeResponse, QuoteResponse
from service.line_service import LineService
from util.constants import InternalURIs
from controller.controller_dependencies import get_line_service

line_router = APIRouter(responses={500: {"model": ErrorResponse}})


@line_router.get(InternalURIs.QUOTE, response_model=QuoteResponse)
def random_quote(service: LineService = Depends(get_line_service)) -> QuoteResponse:
    return service.random_quote()


@line_router.get(InternalURIs.JOKE, response_model=JokeResponse)
def random_joke(service: LineService = Depends(get_line_service)) -> JokeResponse:
    return service.random_joke()
