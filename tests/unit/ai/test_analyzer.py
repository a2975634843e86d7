"""
Unit tests for the AI-assisted thematic analysis.

Tests response parsing (code fences, invalid JSON, schema errors), input
validation and the mapping of provider failures to user-facing errors,
with mocked LLM clients.
"""

import json
from unittest.mock import Mock

import httpx
import pytest
from openai import APIConnectionError, AuthenticationError

from transcript_analysis.ai.analyzer import (
    AIThematicAnalyzer,
    analyze_with_ai,
    parse_ai_response,
    strip_code_fences,
)
from transcript_analysis.ai.llm_client import LLMClient, LLMResponse
from transcript_analysis.ai.prompts import SYSTEM_PROMPT
from transcript_analysis.exceptions import (
    AIAnalysisError,
    AIProviderNetworkError,
    AIResponseFormatError,
    InvalidAPIKeyError,
    NoDocumentsError,
    ResearchQuestionRequiredError,
)


QUESTION = "How do customers experience onboarding?"


def _failing_client(error: Exception) -> Mock:
    client = Mock(spec=LLMClient)
    client.model = "gemini-2.0-flash"
    client.generate.side_effect = error
    return client


def _text_client(text: str) -> Mock:
    client = Mock(spec=LLMClient)
    client.model = "gemini-2.0-flash"
    client.generate.return_value = LLMResponse(text=text, model="gemini-2.0-flash", provider="gemini")
    return client


@pytest.mark.unit
class TestParseAIResponse:
    """Tests for parse_ai_response and fence stripping."""

    def test_plain_json(self, valid_ai_payload):
        result = parse_ai_response(json.dumps(valid_ai_payload))
        assert [t.name for t in result.themes] == ["Onboarding Experience", "Billing Confusion"]
        assert result.key_findings[0] == "Onboarding is a strength."
        assert result.themes[0].quotes[0].respondent_id == "Respondent 1"
        assert result.methodology_notes == "Themes were derived inductively."

    def test_json_fence(self, valid_ai_payload):
        text = "```json\n" + json.dumps(valid_ai_payload, indent=2) + "\n```"
        assert parse_ai_response(text) == parse_ai_response(json.dumps(valid_ai_payload))

    def test_bare_fence(self):
        result = parse_ai_response('```\n{"themes": [], "keyFindings": ["x"]}\n```')
        assert result.key_findings == ["x"]

    def test_strip_code_fences(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'

    def test_missing_optional_fields_default(self):
        result = parse_ai_response('{"themes": [{"name": "Trust"}]}')
        assert result.themes[0].quotes == []
        assert result.patterns == []
        assert result.interpretations == ""

    def test_invalid_json(self):
        with pytest.raises(AIResponseFormatError, match="not valid JSON"):
            parse_ai_response("Here are the themes: onboarding, billing")

    def test_non_object(self):
        with pytest.raises(AIResponseFormatError):
            parse_ai_response("[1, 2, 3]")

    def test_schema_mismatch(self):
        with pytest.raises(AIResponseFormatError):
            parse_ai_response('{"themes": "onboarding"}')

    def test_empty(self):
        with pytest.raises(AIResponseFormatError, match="No response from AI"):
            parse_ai_response("   ")


@pytest.mark.unit
class TestAnalyzeWithAI:
    """Tests for analyze_with_ai."""

    def test_success(self, mock_llm_client, onboarding_documents):
        result = analyze_with_ai(onboarding_documents, QUESTION, llm_client=mock_llm_client)
        assert len(result.themes) == 2
        assert result.recommendations == ["Explore billing comprehension in a larger sample."]

    def test_prompt_contents(self, mock_llm_client, onboarding_documents):
        analyze_with_ai(["  " + onboarding_documents[0] + "  ", 7, ""], QUESTION, llm_client=mock_llm_client)
        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["system_prompt"] == SYSTEM_PROMPT
        assert f"Research Question: {QUESTION}" in kwargs["user_prompt"]
        assert f"### Respondent 1\n{onboarding_documents[0]}" in kwargs["user_prompt"]
        assert "### Respondent 2" not in kwargs["user_prompt"]

    @pytest.mark.parametrize("question", ["", "   ", None, 42])
    def test_missing_research_question(self, mock_llm_client, question):
        with pytest.raises(ResearchQuestionRequiredError, match="Research question is required"):
            analyze_with_ai(["text"], question, llm_client=mock_llm_client)
        mock_llm_client.generate.assert_not_called()

    def test_question_checked_before_documents(self, mock_llm_client):
        with pytest.raises(ResearchQuestionRequiredError):
            analyze_with_ai([], "", llm_client=mock_llm_client)

    def test_no_documents(self, mock_llm_client):
        with pytest.raises(NoDocumentsError, match="No documents provided"):
            analyze_with_ai(["", "  "], QUESTION, llm_client=mock_llm_client)
        mock_llm_client.generate.assert_not_called()

    def test_validation_needs_no_client(self):
        """Input errors are reported even when no provider could be configured."""
        with pytest.raises(NoDocumentsError):
            analyze_with_ai([], QUESTION, model_override="unknown/model")


@pytest.mark.unit
class TestErrorMapping:
    """Provider failures are translated to user-facing errors."""

    def test_authentication_error(self):
        request = httpx.Request("POST", "https://example.test/chat/completions")
        response = httpx.Response(401, request=request)
        error = AuthenticationError("Incorrect API key", response=response, body=None)
        with pytest.raises(InvalidAPIKeyError):
            analyze_with_ai(["text"], QUESTION, llm_client=_failing_client(error))

    def test_api_key_invalid_message(self):
        error = RuntimeError("400 API key not valid. Please pass a valid API key. [API_KEY_INVALID]")
        with pytest.raises(InvalidAPIKeyError):
            analyze_with_ai(["text"], QUESTION, llm_client=_failing_client(error))

    def test_connection_error(self):
        request = httpx.Request("POST", "https://example.test/chat/completions")
        error = APIConnectionError(request=request)
        with pytest.raises(AIProviderNetworkError):
            analyze_with_ai(["text"], QUESTION, llm_client=_failing_client(error))

    @pytest.mark.parametrize(
        "error",
        [ConnectionError("fetch failed"), TimeoutError("timed out"), httpx.ConnectError("refused")],
    )
    def test_network_errors(self, error):
        with pytest.raises(AIProviderNetworkError, match="Network error"):
            analyze_with_ai(["text"], QUESTION, llm_client=_failing_client(error))

    def test_other_error_wrapped(self):
        client = _failing_client(RuntimeError("quota exceeded"))
        with pytest.raises(AIAnalysisError) as exc_info:
            analyze_with_ai(["text"], QUESTION, llm_client=client)
        assert type(exc_info.value) is AIAnalysisError
        assert str(exc_info.value) == "AI analysis failed: quota exceeded"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_service_error_passes_through(self):
        error = InvalidAPIKeyError("gemini API key required (set LLM_API_KEY env var)")
        with pytest.raises(InvalidAPIKeyError, match="LLM_API_KEY"):
            analyze_with_ai(["text"], QUESTION, llm_client=_failing_client(error))

    def test_malformed_answer(self):
        with pytest.raises(AIResponseFormatError):
            analyze_with_ai(["text"], QUESTION, llm_client=_text_client("not json at all"))


@pytest.mark.unit
class TestAIThematicAnalyzer:
    def test_unknown_provider_is_analysis_error(self):
        with pytest.raises(AIAnalysisError, match="Unknown LLM provider"):
            AIThematicAnalyzer(model_override="nosuch/model")

    def test_uses_given_client(self, mock_llm_client):
        analyzer = AIThematicAnalyzer(llm_client=mock_llm_client)
        assert analyzer.llm_client is mock_llm_client
