# controller/docs_controller.py
import os
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from core.context import AppContext
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError
from controller.controller_dependencies import get_context

docs_router = APIRouter()


@docs_router.get(InternalURIs.DOCS, response_class=FileResponse, include_in_schema=False)
def docs_page(context: AppContext = Depends(get_context)) -> FileResponse:
    path = context.settings.DOCS_FILE
    if not path or not os.path.isfile(path):
        raise AppError(
            ErrorMessage.DOCS_NOT_FOUND.value.message,
            ErrorMessage.DOCS_NOT_FOUND.value.http_status,
        )
    return FileResponse(path, media_type="text/html; charset=utf-8")
