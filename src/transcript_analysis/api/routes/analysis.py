"""
Heuristic analysis API routes.

Provides REST endpoints for the basic qualitative-coding pipeline:
- POST /api/v1/analyze - Corpus analysis as JSON
- POST /api/v1/report - Markdown research report
"""

import structlog
from fastapi import APIRouter, Response, status
from pydantic import BaseModel, ConfigDict, Field

from ...analysis import analyze_corpus
from ...models.analysis import AnalysisResult
from ...models.api_models import DocumentList
from ...parsing import require_documents
from ...reporting import ReportMeta, build_markdown_report


logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["analysis"])

MARKDOWN_MEDIA_TYPE = "text/markdown; charset=utf-8"


# ============================================================================
# REQUEST MODELS
# ============================================================================

class AnalyzeRequest(BaseModel):
    """Request model for corpus analysis."""

    documents: DocumentList = Field(
        default_factory=list,
        description="Transcripts; non-strings and blank entries are ignored"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "documents": [
                    "I loved the onboarding but struggled with billing.",
                    "Billing was confusing; support helped, though onboarding was smooth."
                ]
            }
        }
    )


class ReportRequest(ReportMeta):
    """Report metadata plus the transcripts to analyze."""

    documents: DocumentList = Field(default_factory=list)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/analyze", response_model=AnalysisResult, status_code=status.HTTP_200_OK)
def analyze_endpoint(request: AnalyzeRequest) -> AnalysisResult:
    """
    Analyze a transcript corpus.

    Returns:
        AnalysisResult with keywords, codes, co-occurrence, sentiment, themes

    Raises:
        NoDocumentsError: No non-empty transcript in the request (400)
    """
    documents = require_documents(request.documents)

    logger.info("analysis_request_received", document_count=len(documents))

    return analyze_corpus(documents)


@router.post("/report", response_class=Response, status_code=status.HTTP_200_OK)
def report_endpoint(request: ReportRequest) -> Response:
    """
    Analyze a transcript corpus and render it as a Markdown report.

    ``publicationFormat`` selects the paper-style template.
    """
    documents = require_documents(request.documents)

    logger.info(
        "report_request_received",
        document_count=len(documents),
        publication_format=request.publication_format
    )

    result = analyze_corpus(documents)
    markdown = build_markdown_report(request, result)

    return Response(content=markdown, media_type=MARKDOWN_MEDIA_TYPE)
