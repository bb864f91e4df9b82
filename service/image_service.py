# service/image_service.py
import logging
import os
from typing import Optional, Union
from core.entities import FallbackImage, Namespace
from core.file_name_cache import FileNameCache
from core.random_picker import extract_leading_number, pick
from model.api import CountResponse, ImageUrlResponse
from repository import directory_repository
from util.enums import CountMode, ErrorMessage
from util.errors import AppError
from util.functions import join_url

logger = logging.getLogger(__name__)


class ImageService:
    """
    Random image selection for one namespace. Reads only cached listings,
    except for live counts and the final file lookup for image transfer.
    """

    def __init__(
        self,
        cache: FileNameCache,
        namespace: str,
        count_mode: CountMode = CountMode.CACHED,
        fallback_image: Optional[FallbackImage] = None,
    ) -> None:
        self._cache = cache
        self._ns: Namespace = cache.namespace(namespace)
        self._count_mode = count_mode
        self._fallback_image = fallback_image

    @property
    def namespace(self) -> Namespace:
        return self._ns

    def random_filename(self) -> str:
        return pick(self._cache.snapshot(self._ns.name), self._ns.fallback)

    def random_url(self) -> ImageUrlResponse:
        filename = self.random_filename()
        return ImageUrlResponse(
            url=join_url(self._ns.base_url, filename),
            number=extract_leading_number(filename),
        )

    def count(self) -> CountResponse:
        if self._count_mode == CountMode.LIVE:
            files = directory_repository.list_files(self._ns.directory)
            if files is not None:
                return CountResponse(count=len(files))
            logger.warning("count.live.unavailable ns=%s using=cached", self._ns.name)
        return CountResponse(count=self._cache.count(self._ns.name))

    def random_image(self) -> Union[str, FallbackImage]:
        """
        Path of a random image on disk. A file that vanished after the last
        rescan is replaced by the fallback image, read from disk when it is
        still there and from the startup copy otherwise.
        """
        filename = self.random_filename()
        path = self._existing_path(self._ns.directory, filename)
        if path is not None:
            return path

        if filename != self._ns.fallback:
            logger.info(
                "image.missing ns=%s file=%s using=fallback", self._ns.name, filename
            )
        path = self._fallback_path()
        if path is not None:
            return path
        if self._fallback_image is not None:
            logger.debug("image.fallback.memory ns=%s", self._ns.name)
            return self._fallback_image

        logger.error(
            "image.fallback.missing ns=%s file=%s", self._ns.name, self._ns.fallback
        )
        raise AppError(
            ErrorMessage.IMAGE_NOT_FOUND.value.message,
            ErrorMessage.IMAGE_NOT_FOUND.value.http_status,
        )

    def _fallback_path(self) -> Optional[str]:
        for directory in (self._ns.directory, self._ns.fallback_dir):
            if directory:
                path = self._existing_path(directory, self._ns.fallback)
                if path is not None:
                    return path
        return None

    @staticmethod
    def _existing_path(directory: str, filename: str) -> Optional[str]:
        path = os.path.join(directory, filename)
        return path if os.path.isfile(path) else None
