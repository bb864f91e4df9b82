# routes.py
import logging
import os
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from config.settings import Settings
from core.context import build_namespaces
from controller.docs_controller import docs_router
from controller.image_controller import image_router
from controller.line_controller import line_router

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register static mounts & controllers here. Fixed paths go before /{namespace}."""
    for ns in build_namespaces(settings):
        if os.path.isdir(ns.directory):
            app.mount(ns.static_prefix, StaticFiles(directory=ns.directory), name=ns.name)
        else:
            logger.warning(
                "routes.static.skipped prefix=%s dir=%s", ns.static_prefix, ns.directory
            )

    if settings.DOCS_FILE:
        app.include_router(docs_router)
    app.include_router(line_router)
    app.include_router(image_router)
