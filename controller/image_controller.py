# controller/image_controller.py
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, Response
from core.entities import FallbackImage
from model.api import CountResponse, ErrorResponse, ImageUrlResponse
from service.image_service import ImageService
from util.constants import Headers, InternalURIs
from controller.controller_dependencies import get_image_service

image_router = APIRouter()


@image_router.get(InternalURIs.URL, response_model=ImageUrlResponse)
async def random_image_url(
    service: ImageService = Depends(get_image_service),
) -> ImageUrlResponse:
    return service.random_url()


# Plain def: live count mode scans the directory on the worker thread
@image_router.get(InternalURIs.COUNT, response_model=CountResponse)
def image_count(service: ImageService = Depends(get_image_service)) -> CountResponse:
    return service.count()


@image_router.get(
    InternalURIs.IMAGE,
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}},
)
def random_image(service: ImageService = Depends(get_image_service)) -> Response:
    headers = {Headers.CACHE_CONTROL: Headers.NO_STORE}
    image = service.random_image()
    if isinstance(image, FallbackImage):
        return Response(image.content, media_type=image.media_type, headers=headers)
    return FileResponse(image, headers=headers)


# Older clients append a cache-busting segment, e.g. /gary/image/123
@image_router.get(
    InternalURIs.IMAGE_WITH_PATH, response_class=FileResponse, include_in_schema=False
)
def random_image_with_path(
    path: str, service: ImageService = Depends(get_image_service)
) -> Response:
    return random_image(service)
