"""
LLM Client abstraction layer for the AI-assisted analysis.

Provides unified interface for multiple LLM providers:
- Gemini (Google AI Studio, OpenAI-compatible endpoint)
- OpenAI API (GPT-4o, etc.)
- DeepSeek API (OpenAI-compatible)
- OpenRouter (multiple models via unified API)
- Ollama (self-hosted models: Qwen, Llama, etc.)

Key features:
- JSON-mode text generation
- Retry logic with exponential backoff
- Token usage tracking
- Timeout handling
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import ollama
import structlog
from openai import (
    APIConnectionError,
    AuthenticationError,
    BadRequestError,
    OpenAI,
    PermissionDeniedError,
)

from ..config import settings
from ..exceptions import InvalidAPIKeyError


logger = structlog.get_logger(__name__)


# Default endpoints per provider
PROVIDER_BASE_URLS: Dict[str, str] = {
    "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
    "openai": "https://api.openai.com/v1",
    "deepseek": "https://api.deepseek.com",
    "openrouter": "https://openrouter.ai/api/v1",
    "ollama": "http://localhost:11434",
}

SUPPORTED_PROVIDERS = tuple(PROVIDER_BASE_URLS)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class LLMResponse:
    """
    Unified LLM response structure.

    Contains the generated text and metadata about the request.
    """
    # Generated content (expected to be JSON text)
    text: str

    # Metadata
    model: str
    provider: str
    tokens_input: Optional[int] = None
    tokens_output: Optional[int] = None
    tokens_total: Optional[int] = None
    latency_ms: int = 0
    finish_reason: str = "unknown"

    # Raw response for debugging
    raw_response: Optional[Any] = None


# ============================================================================
# ABSTRACT BASE CLASS
# ============================================================================

class LLMClient(ABC):
    """
    Abstract base class for LLM clients.

    All concrete implementations must provide the generate() method that
    accepts a system and user prompt and returns the model's text answer.
    """

    # Errors that retrying cannot fix (bad credentials, malformed request)
    non_retryable_errors: Tuple[type, ...] = ()

    def __init__(
        self,
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 8192,
        timeout_seconds: int = 60,
        max_retries: int = 2,
        retry_delay: float = 1.0
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

        self.logger = logger.bind(
            llm_client=self.__class__.__name__,
            model=model
        )

    @property
    @abstractmethod
    def provider(self) -> str:
        """Provider name used in logs and metadata."""

    @abstractmethod
    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """
        Generate a JSON answer for the given prompts.

        Args:
            system_prompt: System instructions
            user_prompt: User content (research question + transcripts)

        Returns:
            LLMResponse with generated text and metadata

        Raises:
            Exception: On unrecoverable errors (after retries)
        """

    def _retry_with_backoff(self, func, *args, **kwargs):
        """
        Execute function with exponential backoff retry logic.

        Args:
            func: Function to execute
            *args, **kwargs: Arguments to pass to function

        Returns:
            Function result

        Raises:
            Last exception encountered after all retries exhausted
        """
        for attempt in range(self.max_retries):
            try:
                return func(*args, **kwargs)
            except self.non_retryable_errors:
                raise
            except Exception as e:
                if attempt == self.max_retries - 1:
                    self.logger.error(
                        "llm_call_failed_after_retries",
                        error=str(e),
                        attempts=self.max_retries
                    )
                    raise

                wait_time = self.retry_delay * (2 ** attempt)
                self.logger.warning(
                    "llm_call_retry",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                    wait_seconds=wait_time
                )
                time.sleep(wait_time)

    @staticmethod
    def _messages(system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt}
        ]


# ============================================================================
# OPENAI-COMPATIBLE CLIENT
# ============================================================================

class OpenAICompatibleClient(LLMClient):
    """
    OpenAI-compatible client for multiple providers.

    Works with:
    - Gemini (generativelanguage.googleapis.com/v1beta/openai/)
    - OpenAI API (api.openai.com)
    - DeepSeek API (api.deepseek.com)
    - OpenRouter (openrouter.ai/api/v1)
    - Any other OpenAI-compatible endpoint

    Requests JSON output via ``response_format={"type": "json_object"}``.
    """

    non_retryable_errors = (AuthenticationError, PermissionDeniedError, BadRequestError)

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: str = PROVIDER_BASE_URLS["openai"],
        provider_name: str = "openai",
        **kwargs
    ):
        super().__init__(model=model, **kwargs)
        self.api_key = api_key
        self.base_url = base_url
        self.provider_name = provider_name

        self.client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=self.timeout_seconds,
            max_retries=0,  # Retries handled by _retry_with_backoff
        )

    @property
    def provider(self) -> str:
        return self.provider_name

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """
        Generate using OpenAI-compatible chat completions in JSON mode.
        """
        start_time = time.time()

        def _call_openai():
            return self.client.chat.completions.create(
                model=self.model,
                messages=self._messages(system_prompt, user_prompt),
                response_format={"type": "json_object"},
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )

        try:
            response = self._retry_with_backoff(_call_openai)
        except APIConnectionError as e:
            self.logger.error(
                "openai_api_error",
                error=str(e),
                error_type=type(e).__name__,
                provider=self.provider_name
            )
            raise
        except Exception as e:
            self.logger.error(
                "openai_generation_failed",
                error=str(e),
                error_type=type(e).__name__,
                provider=self.provider_name
            )
            raise

        latency_ms = int((time.time() - start_time) * 1000)

        choice = response.choices[0] if response.choices else None
        text = (choice.message.content or "") if choice else ""

        # Extract token usage
        usage = response.usage
        return LLMResponse(
            text=text,
            model=self.model,
            provider=self.provider_name,
            tokens_input=usage.prompt_tokens if usage else None,
            tokens_output=usage.completion_tokens if usage else None,
            tokens_total=usage.total_tokens if usage else None,
            latency_ms=latency_ms,
            finish_reason=(choice.finish_reason or "unknown") if choice else "unknown",
            raw_response=response
        )


# ============================================================================
# OLLAMA CLIENT
# ============================================================================

class OllamaClient(LLMClient):
    """
    Ollama client for self-hosted models.

    Supports models like qwen2.5, llama3.1, mistral, etc. Requires Ollama
    running locally or accessible via base_url.
    """

    def __init__(
        self,
        model: str,
        base_url: str = PROVIDER_BASE_URLS["ollama"],
        **kwargs
    ):
        super().__init__(model=model, **kwargs)
        self.base_url = base_url
        self.client = ollama.Client(host=base_url, timeout=self.timeout_seconds)

    @property
    def provider(self) -> str:
        return "ollama"

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """
        Generate using Ollama chat with ``format="json"``.
        """
        start_time = time.time()

        def _call_ollama():
            return self.client.chat(
                model=self.model,
                messages=self._messages(system_prompt, user_prompt),
                format="json",
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                }
            )

        try:
            response = self._retry_with_backoff(_call_ollama)
        except Exception as e:
            self.logger.error(
                "ollama_generation_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            raise

        latency_ms = int((time.time() - start_time) * 1000)

        message = response.get('message') or {}
        text = message.get('content') or ""

        # Extract token usage (if available)
        tokens_input = response.get('prompt_eval_count')
        tokens_output = response.get('eval_count')
        tokens_total = (
            tokens_input + tokens_output
            if tokens_input is not None and tokens_output is not None
            else None
        )

        return LLMResponse(
            text=text,
            model=self.model,
            provider="ollama",
            tokens_input=tokens_input,
            tokens_output=tokens_output,
            tokens_total=tokens_total,
            latency_ms=latency_ms,
            finish_reason=response.get('done_reason') or 'stop',
            raw_response=response
        )


# ============================================================================
# CLIENT FACTORY
# ============================================================================

def create_llm_client(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    **override_kwargs
) -> LLMClient:
    """
    Factory function to create appropriate LLM client based on configuration.

    Priority order for configuration:
    1. Explicit parameters passed to this function
    2. Settings from config

    Args:
        provider: Provider name ("gemini", "openai", "deepseek", "openrouter", "ollama")
        model: Model name (provider-specific)
        **override_kwargs: Override any client parameters

    Returns:
        Configured LLMClient instance

    Raises:
        InvalidAPIKeyError: If a cloud provider is selected without an API key
        ValueError: If provider is unknown
    """
    # Use settings as defaults
    provider = (provider or settings.llm_provider).lower()
    model = model or settings.llm_model

    if provider not in PROVIDER_BASE_URLS:
        raise ValueError(
            f"Unknown LLM provider: {provider}. "
            f"Supported: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    # Extract client parameters
    client_params = {
        "temperature": override_kwargs.get("temperature", settings.llm_temperature),
        "max_tokens": override_kwargs.get("max_tokens", settings.llm_max_tokens),
        "timeout_seconds": override_kwargs.get("timeout_seconds", settings.llm_timeout_seconds),
        "max_retries": override_kwargs.get("max_retries", settings.llm_max_retries),
        "retry_delay": override_kwargs.get("retry_delay", settings.llm_retry_delay_seconds),
    }
    base_url = (
        override_kwargs.get("base_url")
        or settings.llm_api_base_url
        or PROVIDER_BASE_URLS[provider]
    )

    logger.info(
        "creating_llm_client",
        provider=provider,
        model=model,
        temperature=client_params["temperature"]
    )

    if provider == "ollama":
        return OllamaClient(model=model, base_url=base_url, **client_params)

    api_key = override_kwargs.get("api_key", settings.llm_api_key)
    if not api_key:
        raise InvalidAPIKeyError(
            f"{provider} API key required (set LLM_API_KEY env var)"
        )

    return OpenAICompatibleClient(
        model=model,
        api_key=api_key,
        base_url=base_url,
        provider_name=provider,
        **client_params
    )


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def parse_model_string(model_string: str) -> Tuple[Optional[str], str]:
    """
    Parse model string in format "provider/model-name".

    Examples:
        "gemini/gemini-2.0-flash" → ("gemini", "gemini-2.0-flash")
        "ollama/qwen2.5:7b" → ("ollama", "qwen2.5:7b")
        "gpt-4o" → (None, "gpt-4o")  # No provider prefix

    Args:
        model_string: Model specification

    Returns:
        (provider, model_name) tuple. provider is None if no prefix.
    """
    if "/" in model_string:
        parts = model_string.split("/", 1)
        return parts[0], parts[1]
    else:
        return None, model_string


def create_llm_client_from_model_string(
    model_string: str,
    **override_kwargs
) -> LLMClient:
    """
    Create LLM client from model string (e.g., "gemini/gemini-2.0-flash").

    Args:
        model_string: Model specification (may include provider prefix)
        **override_kwargs: Override any client parameters

    Returns:
        Configured LLMClient instance
    """
    provider_prefix, model_name = parse_model_string(model_string)

    # If provider specified in model string, use it; otherwise use config
    provider = provider_prefix if provider_prefix else settings.llm_provider

    return create_llm_client(
        provider=provider,
        model=model_name,
        **override_kwargs
    )
