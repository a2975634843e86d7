"""
FastAPI application for the transcript analysis service.

Wires the heuristic analysis, report and AI-assisted analysis endpoints
together with logging and error-handling middleware.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..logging_config import setup_logging
from ..version import API_VERSION, get_current_pipeline_version
from .middleware import (
    setup_error_handling_middleware,
    setup_exception_handlers,
    setup_logging_middleware,
)
from .routes import ai, analysis, health, version

# Setup logging on module import
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info(
        "Starting Transcript Analysis API",
        version=API_VERSION,
        log_level=settings.log_level,
        llm_provider=settings.llm_provider,
        llm_model=settings.llm_model,
        llm_api_key_configured=bool(settings.llm_api_key),
        pipeline_version=get_current_pipeline_version().to_repr(),
    )
    yield
    logger.info("Shutting down Transcript Analysis API")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Transcript Analysis Service",
        description=(
            "Heuristic qualitative analysis of interview transcripts (keywords, auto-codes, "
            "co-occurrence, sentiment, themes), Markdown reports and AI-assisted thematic analysis"
        ),
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added = outermost (request logging wraps error handling)
    setup_error_handling_middleware(app)
    setup_logging_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(analysis.router)
    app.include_router(ai.router)

    return app


app = create_app()


def main() -> None:
    """
    Entry point for running the API server directly.

    For development use. In production, run uvicorn against
    ``transcript_analysis.api.app:app``.
    """
    import uvicorn

    uvicorn.run(
        "transcript_analysis.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
