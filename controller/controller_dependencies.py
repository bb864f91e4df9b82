# controller/controller_dependencies.py
from fastapi import Depends, Request
from core.context import AppContext
from service.image_service import ImageService
from service.line_service import LineService
from util.enums import ErrorMessage
from util.errors import AppError


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_image_service(
    namespace: str, context: AppContext = Depends(get_context)
) -> ImageService:
    if namespace not in context.cache.namespaces:
        raise AppError(
            ErrorMessage.NOT_FOUND.value.message,
            ErrorMessage.NOT_FOUND.value.http_status,
        )
    return ImageService(
        context.cache,
        namespace,
        context.settings.COUNT_MODE,
        fallback_image=context.fallbacks.get(namespace),
    )


def get_line_service(context: AppContext = Depends(get_context)) -> LineService:
    return LineService(context.quotes, context.jokes)
