from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import Response

from consolekit.config import settings
from consolekit.observability import (
    configure_logging,
    log_event,
    metrics_store,
    observe_timing,
    set_request_id,
)
from consolekit.routers.console import router as console_router
from consolekit.routers.health import router as health_router
from consolekit.routers.metrics import router as metrics_router


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    yield


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Read-only diagnostics for the process console: timers, counters and metrics",
    lifespan=lifespan,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    set_request_id(request_id)

    with observe_timing("http_request_duration_seconds"):
        response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    metrics_store.increment("http_requests_total")
    log_event("http_request", operation=f"{request.method} {request.url.path}")
    return response


app.include_router(health_router)
app.include_router(console_router)
app.include_router(metrics_router)
