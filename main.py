# main.py
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color, ErrorMessage
from fastapi import FastAPI, Request
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware
from config.settings import Settings, settings
from core.context import build_context
from model.api import HealthResponse
from fastapi.responses import JSONResponse
from util.constants import InternalURIs
from util.logger import init_logger


def create_app(app_settings: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(fastApi: FastAPI):
        init_logger(app_settings)
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        context = build_context(app_settings)
        # Warm every namespace before the listener accepts connections
        await run_in_threadpool(context.start)
        fastApi.state.context = context
        print(f"{Color.BLUE}Server Started on {app_settings.server_address()}{Color.RESET}")

        try:
            yield
        finally:
            try:
                await run_in_threadpool(context.stop)
            except Exception as e:
                print("Error stopping watchers:", e)

            print(f"{Color.RED}Server Shutdown{Color.RESET}")

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.ALLOWED_ORIGIN],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["Content-Type", "Accept"],
    )

    @app.get(InternalURIs.HEALTH, response_model=HealthResponse)
    async def healthz(request: Request) -> HealthResponse:
        return HealthResponse(ok=True, watchers=request.app.state.context.watcher_statuses())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Every error body is {"error": "..."}; AppError included
        message = exc.detail
        if exc.status_code == 404 and not isinstance(message, str):
            message = ErrorMessage.NOT_FOUND.value.message
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(message)},
            headers=getattr(exc, "headers", None),
        )

    routes.register_routes(app, app_settings)
    return app


app: FastAPI = create_app()

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host=settings.BIND_ADDRESS, port=settings.PORT, reload=reload)
