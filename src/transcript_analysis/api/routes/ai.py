"""
AI-assisted analysis API routes.

Provides REST endpoints backed by the configured LLM provider:
- POST /api/v1/ai/analyze - AI thematic analysis as JSON
- POST /api/v1/ai/report - Markdown report of the AI analysis
"""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...ai import AIAnalysisResult, AIReportMeta, analyze_with_ai, generate_ai_report
from ...models.api_models import DocumentList
from ...parsing import clean_documents
from .analysis import MARKDOWN_MEDIA_TYPE


logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


# ============================================================================
# REQUEST MODELS
# ============================================================================

class AIAnalyzeRequest(BaseModel):
    """Request model for AI-assisted analysis."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
        json_schema_extra={
            "example": {
                "documents": [
                    "I loved the onboarding but struggled with billing.",
                    "Billing was confusing; support helped, though onboarding was smooth."
                ],
                "researchQuestion": "How do customers experience onboarding and billing?",
                "modelOverride": "gemini/gemini-2.0-flash"
            }
        }
    )

    documents: DocumentList = Field(default_factory=list)
    research_question: Any = Field(default=None, description="Required research question")
    model_override: Optional[str] = Field(
        default=None,
        description="Override LLM model (e.g., 'ollama/llama3.1:8b')"
    )


class AIReportRequest(AIAnalyzeRequest):
    """AI analysis request plus report metadata."""

    title: Any = None
    author: Any = None
    methodology: Any = None
    participant_demographics: Any = None
    additional_notes: Any = None
    institution: Any = None


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/analyze", response_model=AIAnalysisResult, status_code=status.HTTP_200_OK)
def ai_analyze_endpoint(request: AIAnalyzeRequest) -> AIAnalysisResult:
    """
    Run the AI-assisted thematic analysis.

    Raises:
        ResearchQuestionRequiredError: Missing research question (400)
        NoDocumentsError: No non-empty transcript (400)
        InvalidAPIKeyError: Missing or rejected key (401)
        AIProviderNetworkError / AIResponseFormatError: Provider failure (502)
    """
    logger.info(
        "ai_analysis_request_received",
        document_count=len(request.documents),
        model_override=request.model_override
    )

    return analyze_with_ai(
        request.documents,
        request.research_question,
        model_override=request.model_override
    )


@router.post("/report", response_class=Response, status_code=status.HTTP_200_OK)
def ai_report_endpoint(request: AIReportRequest) -> Response:
    """
    Run the AI-assisted analysis and render it as a Markdown report.
    """
    logger.info(
        "ai_report_request_received",
        document_count=len(request.documents),
        model_override=request.model_override
    )

    analysis = analyze_with_ai(
        request.documents,
        request.research_question,
        model_override=request.model_override
    )

    meta = AIReportMeta.model_validate(
        request.model_dump(exclude={"documents", "model_override"})
    )
    markdown = generate_ai_report(
        meta, analysis, transcript_count=len(clean_documents(request.documents))
    )

    return Response(content=markdown, media_type=MARKDOWN_MEDIA_TYPE)
