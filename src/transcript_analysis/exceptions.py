"""
Exceptions raised at the boundaries of the analysis service.

The heuristic pipeline itself has no distinguished failure modes; these
errors belong to input validation and the AI-assisted analysis path.
"""


class TranscriptAnalysisError(Exception):
    """Base class for all service errors."""

    default_message = "Transcript analysis failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)


class NoDocumentsError(TranscriptAnalysisError, ValueError):
    """Raised when no non-empty transcript was supplied."""

    default_message = "No documents provided"


class ResearchQuestionRequiredError(TranscriptAnalysisError, ValueError):
    """Raised when the AI path is called without a research question."""

    default_message = "Research question is required"


class AIAnalysisError(TranscriptAnalysisError):
    """Raised when the AI-assisted analysis fails."""

    default_message = "AI analysis failed"


class InvalidAPIKeyError(AIAnalysisError):
    """Missing or rejected API key for the AI provider."""

    default_message = "Invalid API key for the AI provider. Please verify LLM_API_KEY."


class AIProviderNetworkError(AIAnalysisError):
    """Connection failure or timeout talking to the AI provider."""

    default_message = (
        "Network error contacting AI provider. Please check your internet connection."
    )


class AIResponseFormatError(AIAnalysisError):
    """The AI provider answered with something that is not the expected JSON."""

    default_message = "AI response was not valid JSON"
