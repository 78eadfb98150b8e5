"""
creatorops: FastAPI application

Influencer content review workflow over a document store.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from creatorops.api.routes import analytics, contracts, influencers, review
from creatorops.api.routes import content as content_routes
from creatorops.config import Settings, get_settings
from creatorops.errors import (
    CreatorOpsError,
    InvalidTransition,
    ResourceNotFoundError,
    StaleRecordError,
    ValidationError,
)
from creatorops.llm.client import ClaudeClient
from creatorops.log import configure_logging
from creatorops.review.ai import AIReviewer
from creatorops.storage.database import create_db_engine

logger = structlog.get_logger(__name__)

API_PREFIX = "/api"

ERROR_STATUS: dict[type[CreatorOpsError], int] = {
    ValidationError: 400,
    ResourceNotFoundError: 404,
    InvalidTransition: 409,
    StaleRecordError: 409,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def on_request_validation(request: Request, exc: RequestValidationError):
        return _error(400, _format_validation(exc))

    @app.exception_handler(CreatorOpsError)
    async def on_domain_error(request: Request, exc: CreatorOpsError):
        status_code = next(
            (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500
        )
        if status_code == 500:
            logger.error("request.failed", path=request.url.path, error=exc.to_dict())
            return _error(500, "Something broke!")
        return _error(status_code, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def on_unexpected(request: Request, exc: Exception):
        logger.exception("request.crashed", path=request.url.path)
        return _error(500, "Something broke!")


def create_app(settings: Settings | None = None, reviewer: AIReviewer | None = None) -> FastAPI:
    """Build the application and the services it shares across requests.

    The database engine and AI reviewer are created here once and live on
    ``app.state``; handlers reach them through ``creatorops.api.deps``.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting creatorops", db_path=str(settings.db_path), model=settings.model)
        yield
        app.state.db_engine.dispose()
        logger.info("Shutting down creatorops")

    app = FastAPI(
        title="creatorops",
        description="Influencer content review workflow",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_engine = create_db_engine(settings.db_path)
    app.state.reviewer = reviewer or AIReviewer(
        ClaudeClient(settings), settings.review_guidelines
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(content_routes.router, prefix=API_PREFIX)
    app.include_router(influencers.router, prefix=API_PREFIX)
    app.include_router(contracts.router, prefix=API_PREFIX)
    app.include_router(analytics.router, prefix=API_PREFIX)
    app.include_router(review.router, prefix=API_PREFIX)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
