"""FastAPI application factory."""

import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from footyrater import __version__
from footyrater.api.routes import matches, ratings
from footyrater.config import Settings
from footyrater.core import (
    InvalidMatchError,
    MatchSource,
    ProviderConfigError,
    ProviderError,
    ProviderNotFoundError,
    ProviderRateLimitError,
)
from footyrater.database import init_db

logger = logging.getLogger(__name__)

# Endpoints whose body is a match to rate; malformed bodies are invalid match input
MATCH_INPUT_PATHS = frozenset({"/api/rate-match"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    init_db(settings.db_path, seed_sample=settings.seed_sample)
    logger.info("[STARTUP] Footy Rater %s ready", __version__)
    yield
    provider = getattr(app.state, "provider", None)
    if provider is not None:
        provider.close()
    logger.info("[SHUTDOWN] Closed match source")


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def _describe_validation_error(exc: RequestValidationError) -> str:
    """First validation problem as "field.path: message"."""
    errors = exc.errors()
    if not errors:
        return "malformed request body"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    message = first.get("msg", "invalid value")
    return f"{'.'.join(loc)}: {message}" if loc else message


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidMatchError)
    async def invalid_match_handler(request: Request, exc: InvalidMatchError):
        return _error(status.HTTP_400_BAD_REQUEST, f"Invalid match input: {exc}")

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        if request.url.path in MATCH_INPUT_PATHS:
            return _error(
                status.HTTP_400_BAD_REQUEST,
                f"Invalid match input: {_describe_validation_error(exc)}",
            )
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(ProviderRateLimitError)
    async def rate_limit_handler(request: Request, exc: ProviderRateLimitError):
        logger.warning("[API] Match source rate limited: %s", exc)
        return _error(status.HTTP_429_TOO_MANY_REQUESTS, str(exc))

    @app.exception_handler(ProviderNotFoundError)
    async def not_found_handler(request: Request, exc: ProviderNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ProviderConfigError)
    async def config_handler(request: Request, exc: ProviderConfigError):
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))

    @app.exception_handler(ProviderError)
    async def provider_handler(request: Request, exc: ProviderError):
        logger.error("[API] Match source failed: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(sqlite3.Error)
    async def storage_handler(request: Request, exc: sqlite3.Error):
        logger.error("[API] Storage error: %s", exc)
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Storage unavailable")


def create_app(settings: Settings | None = None, provider: MatchSource | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Application settings (read from the environment if None)
        provider: Match source to use instead of football-data.org

    Returns:
        Configured FastAPI app
    """
    settings = settings or Settings.from_env()

    app = FastAPI(title="Footy Rater", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.provider = provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(matches.router, prefix="/api", tags=["matches"])
    app.include_router(ratings.router, prefix="/api", tags=["ratings"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
