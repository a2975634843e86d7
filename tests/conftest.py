"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- HTTP clients
- Mock settings/configuration
- Sample transcripts and analysis results
- Mock LLM clients
"""

import json
import os
from datetime import date
from typing import AsyncGenerator
from unittest.mock import Mock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from transcript_analysis.ai.llm_client import LLMClient, LLMResponse
from transcript_analysis.analysis import analyze_corpus
from transcript_analysis.api.app import app
from transcript_analysis.config import Settings
from transcript_analysis.models.analysis import AnalysisResult
from .fixtures.transcripts import (
    ONBOARDING_BILLING,
    PRODUCT_INTERVIEWS,
    VALID_AI_RESPONSE,
)


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    Yields:
        AsyncClient instance
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,  # Easier to read in tests
        llm_provider="gemini",
        llm_model="gemini-2.0-flash",
        llm_api_key="test-key-not-real",
    )


@pytest.fixture
def onboarding_documents():
    """The two-answer onboarding/billing corpus."""
    return list(ONBOARDING_BILLING)


@pytest.fixture
def product_documents():
    """Three longer answers with recurring phrases."""
    return list(PRODUCT_INTERVIEWS)


@pytest.fixture
def product_result() -> AnalysisResult:
    """Full analysis of the product interview corpus."""
    return analyze_corpus(PRODUCT_INTERVIEWS)


@pytest.fixture
def fixed_date() -> date:
    """
    Provide fixed report date for deterministic testing.
    """
    return date(2026, 2, 12)


@pytest.fixture
def valid_ai_payload() -> dict:
    """AI analysis JSON as returned by the model."""
    return json.loads(json.dumps(VALID_AI_RESPONSE))


@pytest.fixture
def mock_llm_client(valid_ai_payload) -> Mock:
    """
    LLM client whose generate() returns the valid AI payload as JSON text.
    """
    client = Mock(spec=LLMClient)
    client.model = "gemini-2.0-flash"
    client.provider = "gemini"
    client.generate.return_value = LLMResponse(
        text=json.dumps(valid_ai_payload),
        model="gemini-2.0-flash",
        provider="gemini",
        tokens_input=1200,
        tokens_output=400,
        tokens_total=1600,
        latency_ms=850,
        finish_reason="stop",
    )
    return client


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
