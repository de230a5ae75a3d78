"""FastAPI application factory."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dbe_shared.config import settings
from dbe_shared.errors import ExportFailure, InvalidArgument, UpstreamFetchFailure

from dbe_api.middleware.logging import LoggingMiddleware
from dbe_api.responses import error_response
from dbe_api.routers.health import router as health_router
from dbe_api.routers.v1 import v1_router

logger = structlog.get_logger(__name__)

# error class -> (HTTP status, error code)
_ERROR_STATUS: dict[type[Exception], tuple[int, str]] = {
    InvalidArgument: (422, "invalid_argument"),
    ExportFailure: (400, "export_failed"),
    UpstreamFetchFailure: (502, "upstream_unavailable"),
}


async def _report_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status, code = next(
        mapped for error_class, mapped in _ERROR_STATUS.items()
        if isinstance(exc, error_class)
    )
    logger.warning("report_error", path=request.url.path, code=code, error=str(exc))
    return JSONResponse(status_code=status, content=error_response(code, str(exc)))


def create_app() -> FastAPI:
    app = FastAPI(
        title="DBE Reports API",
        description="DBE participation statistics and contract reports",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    for error_class in _ERROR_STATUS:
        app.add_exception_handler(error_class, _report_error_handler)

    app.include_router(health_router)
    app.include_router(v1_router)

    logger.info("app_created", cors_origins=settings.cors_origins_list)
    return app


app = create_app()
