"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from config.settings import settings
from src.bootstrap import AppContainer, close_container, get_container, init_container
from src.cb_catalog.api.router import router as catalog_router
from src.cb_common.errors import AppError, InternalError, InvalidRequestError
from src.cb_common.logging_config import configure_logging
from src.cb_common.response import error_response
from src.cb_gateway.middleware.request_log import RequestLogMiddleware
from src.cb_order.api.router import router as order_router
from src.cb_order.application.schemas import StatusResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: pick stores, start the status worker. Shutdown: stop it, dispose."""
    configure_logging(settings.LOG_LEVEL)
    container = await init_container(settings)
    app.state.container = container

    worker_task: asyncio.Task[None] | None = None
    if settings.STATUS_WORKER_ENABLED:
        worker_task = asyncio.create_task(
            container.worker.run_forever(settings.STATUS_WORKER_INTERVAL_SECONDS)
        )
    logger.info("%s started on %s stores", settings.APP_NAME, container.backend)
    yield
    if worker_task is not None:
        worker_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await worker_task
    await close_container(container)


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)

if settings.METRICS_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    resp = error_response(exc.code, exc.message, _request_id(request))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return await app_error_handler(request, InternalError())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        detail = "Invalid request"
    return await app_error_handler(request, InvalidRequestError(detail))


app.include_router(catalog_router, prefix="/api")
app.include_router(order_router, prefix="/api")


async def _status(container: AppContainer) -> StatusResponse:
    return await container.order_service.status_summary()


@app.get("/", response_model=StatusResponse, response_model_exclude_none=True)
async def root_status(request: Request) -> StatusResponse:
    return await _status(get_container(request))


@app.get("/api", response_model=StatusResponse, response_model_exclude_none=True)
async def api_status(request: Request) -> StatusResponse:
    return await _status(get_container(request))


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
