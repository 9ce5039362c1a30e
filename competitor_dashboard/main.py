from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from competitor_dashboard.db import Stores, build_stores
from competitor_dashboard.utils.config import LOG_LEVEL
from competitor_dashboard.utils.cors import PUBLIC_CORS_HEADERS, is_public_path, setup_cors_middleware
from competitor_dashboard.utils.errors import AppError
from competitor_dashboard.routes.competitors import router as competitors_router
from competitor_dashboard.routes.research_results import router as research_results_router
from competitor_dashboard.routes.social_content import router as social_content_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            return "Request body must be valid JSON"
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": _describe_validation_error(exc)})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s", request.method, request.url.path)
    # Runs outside the CORS middleware, so public paths need their headers added here.
    headers = PUBLIC_CORS_HEADERS if is_public_path(request.url.path) else None
    return JSONResponse(status_code=500, content={"detail": str(exc) or "Internal error"}, headers=headers)


def create_app(stores: Optional[Stores] = None) -> FastAPI:
    _configure_logging()

    application = FastAPI(title="Competitor Dashboard API")
    application.state.stores = stores or build_stores()

    setup_cors_middleware(application)

    application.add_exception_handler(AppError, _app_error_handler)
    application.add_exception_handler(RequestValidationError, _validation_error_handler)
    application.add_exception_handler(Exception, _unhandled_error_handler)

    @application.get("/health")
    async def health():
        return {"status": "ok"}

    application.include_router(competitors_router)
    application.include_router(research_results_router)
    application.include_router(social_content_router)
    return application


app = create_app()
