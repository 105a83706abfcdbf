"""
FastAPI application for the DSA Analyzer.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, configure_logging, get_settings
from .core.models import (
    AnalysisRequest,
    AnalysisResult,
    DebugRequest,
    DebugResult,
    ErrorResponse,
)
from .core.pipeline import AnalysisPipeline, DebugPipeline
from .providers import ContentGenerator, create_provider


logger = logging.getLogger("dsaanalyzer")

SERVICE_NAME = "DSA Analyzer Backend"


def _error_body(message: str) -> dict[str, str]:
    return ErrorResponse(error=message).model_dump()


def _check_code_length(code: str, settings: Settings) -> None:
    if len(code) > settings.MAX_CODE_LENGTH:
        raise HTTPException(
            status_code=422,
            detail=f"Code exceeds {settings.MAX_CODE_LENGTH} characters",
        )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------


analysis_router = APIRouter()


@analysis_router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_code(payload: AnalysisRequest, request: Request):
    """
    Analyze code complexity.

    Always answers with a complete AnalysisResult; model failures produce the
    generic fallback result rather than an error.
    """
    _check_code_length(payload.code, request.app.state.settings)
    logger.info("Received code analysis request for language: %s", payload.language)
    pipeline: AnalysisPipeline = request.app.state.analysis_pipeline
    return await pipeline.run(payload)


@analysis_router.post(
    "/debug",
    response_model=DebugResult,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def debug_code(payload: DebugRequest, request: Request):
    """Debug code and list issues with suggested fixes."""
    _check_code_length(payload.code, request.app.state.settings)
    logger.info("Received code debug request for language: %s", payload.language)
    pipeline: DebugPipeline = request.app.state.debug_pipeline
    return await pipeline.run(payload)


health_router = APIRouter()


@health_router.get("/health")
async def health(request: Request):
    """Health check."""
    generator = request.app.state.generator
    available = getattr(generator, "is_available", lambda: True)()
    settings: Settings = request.app.state.settings
    return {
        "status": "UP",
        "service": SERVICE_NAME,
        "version": __version__,
        "provider": settings.LLM_PROVIDER,
        "model": settings.model_name,
        "providerAvailable": available,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# App assembly
# ---------------------------------------------------------------------------


def create_app(
    settings: Optional[Settings] = None,
    generator: Optional[ContentGenerator] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use, defaults to environment settings
        generator: Model collaborator; when omitted one is created from
            settings at startup and closed at shutdown
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s v%s starting", SERVICE_NAME, __version__)
        logger.info("Provider: %s (model=%s)", settings.LLM_PROVIDER, settings.model_name)

        owned = generator is None
        active = create_provider(settings) if owned else generator
        if owned and not active.is_available():
            logger.error("LLM provider unavailable - requests will get fallback results")

        app.state.generator = active
        app.state.analysis_pipeline = AnalysisPipeline(active)
        app.state.debug_pipeline = DebugPipeline(active)

        yield

        logger.info("Shutting down")
        if owned:
            await active.close()

    app = FastAPI(
        title="DSA Analyzer API",
        description="AI-powered DSA analysis and debugging",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Field names and error types only, never submitted values
        error_details = [
            {"field": err.get("loc", [])[-1] if err.get("loc") else "unknown", "type": err.get("type")}
            for err in exc.errors()[:5]
        ]
        logger.warning("Validation error on %s %s: %s", request.method, request.url.path, error_details)
        messages = "; ".join(str(err.get("msg", "invalid value")) for err in exc.errors()[:5])
        return JSONResponse(status_code=422, content=_error_body(messages or "Invalid request format"))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=_error_body(str(exc.detail)))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception on %s %s: %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            str(exc)[:200],
        )
        return JSONResponse(status_code=500, content=_error_body("An unexpected error occurred"))

    cors_origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {
            "name": "DSA Analyzer API",
            "version": __version__,
            "status": "running",
            "endpoints": {
                "/api/v1/analyze": "POST - Complexity analysis",
                "/api/v1/debug": "POST - Debugging",
                "/api/v1/health": "GET - Health check",
            },
        }

    app.include_router(health_router, prefix="/api/v1", tags=["health"])
    app.include_router(analysis_router, prefix="/api/v1", tags=["analysis"])

    return app


configure_logging(get_settings())
app = create_app()
