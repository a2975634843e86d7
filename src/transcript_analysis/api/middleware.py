"""
FastAPI middleware and exception handlers for logging and error handling.
"""

import time
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from ..exceptions import (
    AIAnalysisError,
    AIProviderNetworkError,
    AIResponseFormatError,
    InvalidAPIKeyError,
    NoDocumentsError,
    ResearchQuestionRequiredError,
    TranscriptAnalysisError,
)
from ..models.api_models import ErrorResponse

logger = structlog.get_logger(__name__)

# Most specific class first
ERROR_STATUS_CODES = [
    (NoDocumentsError, status.HTTP_400_BAD_REQUEST),
    (ResearchQuestionRequiredError, status.HTTP_400_BAD_REQUEST),
    (InvalidAPIKeyError, status.HTTP_401_UNAUTHORIZED),
    (AIProviderNetworkError, status.HTTP_502_BAD_GATEWAY),
    (AIResponseFormatError, status.HTTP_502_BAD_GATEWAY),
    (AIAnalysisError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_code_for(error: TranscriptAnalysisError) -> int:
    """HTTP status for a service error (500 when unmapped)."""
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def setup_logging_middleware(app: FastAPI) -> None:
    """
    Setup request/response logging middleware.

    Logs all requests with:
    - Request method and path
    - Response status code
    - Processing time
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=round(process_time * 1000, 2),
            )

            response.headers["X-Process-Time"] = str(process_time)

            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                process_time_ms=round(process_time * 1000, 2),
                error=str(e),
                exc_info=True,
            )
            raise


def setup_error_handling_middleware(app: FastAPI) -> None:
    """
    Setup global error handling middleware.

    Catches unhandled exceptions and returns consistent error responses.
    """

    @app.middleware("http")
    async def handle_errors(request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "Unhandled exception",
                method=request.method,
                path=request.url.path,
                error=str(e),
                exc_info=True,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(error="Internal server error").model_dump(),
            )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Translate service errors into ErrorResponse payloads.

    Input errors map to 400, rejected credentials to 401, provider
    failures to 502 and any other analysis failure to 500.
    """

    @app.exception_handler(TranscriptAnalysisError)
    async def handle_service_error(
        request: Request, exc: TranscriptAnalysisError
    ) -> JSONResponse:
        status_code = status_code_for(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            "Request rejected",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )
