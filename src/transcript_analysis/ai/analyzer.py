"""
AI-assisted thematic analysis.

Coordinates:
1. Input validation (documents, research question)
2. Prompt building
3. LLM call
4. JSON extraction and schema validation
5. Mapping provider failures to user-facing errors

This path is independent of the heuristic pipeline.
"""

import json
import re
import time
from typing import Any, Iterable, Optional

import httpx
import ollama
import structlog
from openai import APIConnectionError, AuthenticationError, PermissionDeniedError
from pydantic import ValidationError

from ..exceptions import (
    AIAnalysisError,
    AIProviderNetworkError,
    AIResponseFormatError,
    InvalidAPIKeyError,
    ResearchQuestionRequiredError,
)
from ..parsing import require_documents
from .llm_client import LLMClient, create_llm_client, create_llm_client_from_model_string
from .prompts import build_analysis_prompt
from .schemas import AIAnalysisResult


logger = structlog.get_logger(__name__)

_CODE_FENCE_OPEN = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CODE_FENCE_CLOSE = re.compile(r"\n?```\s*$")

# Substrings providers use when rejecting credentials
_INVALID_KEY_MARKERS = ("api_key_invalid", "api key not valid", "invalid api key", "unauthorized")

_NETWORK_ERRORS = (APIConnectionError, httpx.TransportError, ConnectionError, TimeoutError)


# ============================================================================
# RESPONSE PARSING
# ============================================================================

def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding Markdown code fence, if any.

    Examples:
        >>> strip_code_fences('```json\\n{"themes": []}\\n```')
        '{"themes": []}'
        >>> strip_code_fences('{"a": 1}')
        '{"a": 1}'
    """
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _CODE_FENCE_OPEN.sub("", stripped, count=1)
        stripped = _CODE_FENCE_CLOSE.sub("", stripped, count=1)
    return stripped.strip()


def parse_ai_response(text: str) -> AIAnalysisResult:
    """
    Parse and validate the model's JSON answer.

    Args:
        text: Raw model output (optionally fenced in ```json ... ```)

    Returns:
        Validated AIAnalysisResult

    Raises:
        AIResponseFormatError: Empty output, invalid JSON or wrong structure
    """
    if not text or not text.strip():
        raise AIResponseFormatError("No response from AI")

    try:
        payload = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise AIResponseFormatError(f"AI response was not valid JSON: {e.msg}") from e

    if not isinstance(payload, dict):
        raise AIResponseFormatError("AI response was not valid JSON: expected an object")

    try:
        return AIAnalysisResult.model_validate(payload)
    except ValidationError as e:
        raise AIResponseFormatError(
            f"AI response was not valid JSON: {e.error_count()} schema error(s)"
        ) from e


def _translate_provider_error(error: Exception) -> AIAnalysisError:
    """Map client/library exceptions to user-facing AI errors."""
    if isinstance(error, AIAnalysisError):
        return error
    if isinstance(error, (AuthenticationError, PermissionDeniedError)):
        return InvalidAPIKeyError()
    if isinstance(error, ollama.ResponseError) and error.status_code in (401, 403):
        return InvalidAPIKeyError()
    if isinstance(error, _NETWORK_ERRORS):
        return AIProviderNetworkError()

    message = str(error)
    if any(marker in message.lower() for marker in _INVALID_KEY_MARKERS):
        return InvalidAPIKeyError()
    return AIAnalysisError(f"AI analysis failed: {message}")


# ============================================================================
# ANALYZER
# ============================================================================

class AIThematicAnalyzer:
    """
    Runs the AI-assisted thematic analysis with a configured LLM client.
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        model_override: Optional[str] = None
    ):
        """
        Initialize analyzer.

        Args:
            llm_client: Optional pre-configured LLM client
            model_override: Optional model string (e.g., "gemini/gemini-2.0-flash")
        """
        try:
            if llm_client is None:
                if model_override:
                    llm_client = create_llm_client_from_model_string(model_override)
                else:
                    llm_client = create_llm_client()
        except ValueError as e:
            raise AIAnalysisError(str(e)) from e

        self.llm_client = llm_client
        self.logger = logger.bind(
            analyzer="AIThematicAnalyzer",
            model=llm_client.model
        )

    def analyze(self, transcripts: Iterable[Any], research_question: Any) -> AIAnalysisResult:
        """
        Analyze transcripts against a research question.

        Args:
            transcripts: Raw transcript items (cleaned here)
            research_question: Research question guiding the analysis

        Returns:
            Validated AIAnalysisResult

        Raises:
            ResearchQuestionRequiredError: Missing or blank research question
            NoDocumentsError: No non-empty transcript
            AIAnalysisError: Provider, credential, network or format failure
        """
        question = research_question.strip() if isinstance(research_question, str) else ""
        if not question:
            raise ResearchQuestionRequiredError()
        documents = require_documents(transcripts)

        start_time = time.time()
        system_prompt, user_prompt = build_analysis_prompt(documents, question)

        self.logger.info(
            "ai_analysis_started",
            transcripts=len(documents),
            prompt_chars=len(user_prompt)
        )

        try:
            response = self.llm_client.generate(
                system_prompt=system_prompt,
                user_prompt=user_prompt
            )
        except Exception as e:
            translated = _translate_provider_error(e)
            self.logger.error(
                "ai_analysis_failed",
                error=str(e),
                error_type=type(e).__name__,
                reported_as=type(translated).__name__
            )
            raise translated from e

        result = parse_ai_response(response.text)

        self.logger.info(
            "ai_analysis_completed",
            themes=len(result.themes),
            key_findings=len(result.key_findings),
            tokens_total=response.tokens_total,
            latency_ms=int((time.time() - start_time) * 1000)
        )

        return result


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def analyze_with_ai(
    transcripts: Iterable[Any],
    research_question: Any,
    llm_client: Optional[LLMClient] = None,
    model_override: Optional[str] = None
) -> AIAnalysisResult:
    """
    Run the AI-assisted thematic analysis using default or custom configuration.

    Input validation happens before any client is created, so a missing
    research question or empty corpus is reported even without an API key.

    Example:
        >>> result = analyze_with_ai(
        ...     ["I loved the onboarding...", "Billing was confusing..."],
        ...     "How do customers experience onboarding?",
        ...     model_override="gemini/gemini-2.0-flash"
        ... )
        >>> result.themes[0].name
        'Onboarding Experience'
    """
    question = research_question.strip() if isinstance(research_question, str) else ""
    if not question:
        raise ResearchQuestionRequiredError()
    documents = require_documents(transcripts)

    analyzer = AIThematicAnalyzer(llm_client=llm_client, model_override=model_override)
    return analyzer.analyze(documents, question)
