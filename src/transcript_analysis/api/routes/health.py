"""
Liveness endpoint.
"""

import time

from fastapi import APIRouter

from ...config import settings
from ...models.api_models import HealthResponse
from ...version import API_VERSION

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report service status, uptime and the configured AI provider."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        uptime_seconds=time.time() - _start_time,
        llm_provider=settings.llm_provider,
    )
