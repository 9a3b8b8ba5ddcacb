"""Rankline HTTP application.

Serves the rank tier table and resolves XP totals into ranks, levels and
leaderboards. Build an app with ``create_app()``; ``app`` is the instance
uvicorn loads.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rankline import __version__
from rankline.progression.api import router as ranks_router
from rankline.progression.config import get_settings, get_tier_table
from rankline.progression.exceptions import (
    InvalidArgumentError,
    RankError,
    TierNotFoundError,
)
from rankline.shared.schemas.base import ErrorDetail
from rankline.shared.utils.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)

logger = get_logger(__name__)

APP_TITLE = "Rankline"
APP_VERSION = __version__
API_PREFIX = "/api/v1"

# RankError subclass -> HTTP status; first match wins, anything else is a 500
ERROR_STATUS: list[tuple[type[RankError], int]] = [
    (InvalidArgumentError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (TierNotFoundError, status.HTTP_404_NOT_FOUND),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    table = get_tier_table()
    logger.info(
        "rankline_started",
        version=APP_VERSION,
        tiers=len(table),
        max_rank=table.terminal.name,
        max_rank_xp=table.terminal.base_xp,
    )
    yield
    logger.info("rankline_stopped")


def status_for(exc: RankError) -> int:
    for exc_type, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def rank_error_handler(request: Request, exc: RankError) -> JSONResponse:
    code = status_for(exc)
    log = logger.error if code >= 500 else logger.info
    log("rank_error", status=code, error_type=exc.error_type, detail=exc.message)
    body = ErrorDetail(error=exc.error_type, detail=exc.message)
    return JSONResponse(status_code=code, content=body.model_dump(exclude_none=True))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path)
    detail = str(exc) if request.app.debug else "An unexpected error occurred"
    body = ErrorDetail(error="internal_error", detail=detail)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


async def request_context(request: Request, call_next):
    """Tag each request with an id (echoed back) and its handling time."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    bind_request_context(request_id, path=request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
    finally:
        clear_request_context()
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = f"{time.perf_counter() - started:.6f}"
    return response


health_router = APIRouter(tags=["health"])


@health_router.get("/")
async def root() -> dict[str, Any]:
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "docs": "/docs",
        "api_prefix": API_PREFIX,
    }


@health_router.get("/health")
async def health() -> dict[str, Any]:
    return {"status": "healthy", "version": APP_VERSION, "timestamp": time.time()}


@health_router.get("/health/live")
async def live() -> dict[str, Any]:
    return {"alive": True, "timestamp": time.time()}


@health_router.get("/health/ready")
async def ready() -> JSONResponse:
    """Ready once the configured tier table loads and validates."""
    try:
        table = get_tier_table()
    except RankError as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ready": False, "checks": {"tier_table": e.message}},
        )
    return JSONResponse(content={"ready": True, "checks": {"tier_table": f"{len(table)} tiers"}})


@health_router.get("/version")
async def version() -> dict[str, Any]:
    return {"version": APP_VERSION, "api_version": API_PREFIX.rsplit("/", 1)[-1]}


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, error mapping and routes."""
    app = FastAPI(
        title=APP_TITLE,
        description="Maps lifetime XP totals onto rank tiers, levels and leaderboards.",
        version=APP_VERSION,
        openapi_tags=[
            {"name": "health", "description": "Liveness, readiness and version"},
            {"name": "ranks", "description": "Rank tiers, XP lookups and leaderboards"},
        ],
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_context)

    app.add_exception_handler(RankError, rank_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health_router)
    app.include_router(ranks_router, prefix=API_PREFIX)
    return app


app = create_app()
