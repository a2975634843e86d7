# Data models for the transcript analysis service

from .pipeline_version import PipelineVersion
from .analysis import (
    AnalysisResult,
    Code,
    CooccurrencePair,
    Document,
    KeywordScore,
    SentimentEntry,
    Theme,
)
from .api_models import ErrorResponse, HealthResponse, VersionResponse

__all__ = [
    "PipelineVersion",
    "AnalysisResult",
    "Code",
    "CooccurrencePair",
    "Document",
    "KeywordScore",
    "SentimentEntry",
    "Theme",
    "ErrorResponse",
    "HealthResponse",
    "VersionResponse",
]
