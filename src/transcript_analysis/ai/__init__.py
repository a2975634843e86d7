"""
AI-assisted thematic analysis backed by a hosted or local LLM.
"""

from .analyzer import AIThematicAnalyzer, analyze_with_ai, parse_ai_response
from .llm_client import (
    LLMClient,
    LLMResponse,
    create_llm_client,
    create_llm_client_from_model_string,
)
from .report import AIReportMeta, generate_ai_report
from .schemas import AIAnalysisResult, AIPattern, AIQuote, AITheme

__all__ = [
    "AIThematicAnalyzer",
    "analyze_with_ai",
    "parse_ai_response",
    "LLMClient",
    "LLMResponse",
    "create_llm_client",
    "create_llm_client_from_model_string",
    "AIReportMeta",
    "generate_ai_report",
    "AIAnalysisResult",
    "AIPattern",
    "AIQuote",
    "AITheme",
]
