"""
API models shared by several FastAPI endpoints.

Endpoint-specific request models live next to the routes that use them.
"""

from typing import Annotated, Any, List

from pydantic import BaseModel, BeforeValidator, Field

from .pipeline_version import PipelineVersion


def _as_list(value: Any) -> List[Any]:
    """Anything but a JSON array counts as no documents."""
    return value if isinstance(value, list) else []


# Raw transcript items from a request body, cleaned by the route
DocumentList = Annotated[List[Any], BeforeValidator(_as_list)]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status")
    version: str = Field(description="API version")
    uptime_seconds: float = Field(description="Service uptime")
    llm_provider: str = Field(description="Configured provider for AI-assisted analysis")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    pipeline_version: PipelineVersion = Field(description="Current pipeline version")


class ErrorResponse(BaseModel):
    """Error payload returned for rejected requests."""

    success: bool = Field(default=False)
    error: str = Field(description="Human-readable error message")
