"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Keyword scoring
    keyword_limit: int = 200

    # Auto-coding
    max_phrase_codes: int = 40
    min_phrase_codes: int = 10  # Fewer surviving phrases → keyword fallback
    fallback_code_count: int = 20
    max_examples_per_code: int = 5
    max_examples_per_fallback_code: int = 3

    # Quote extraction window (characters)
    quote_window_before: int = 50
    quote_window_after: int = 100
    quote_max_length: int = 180

    # Theme grouping
    theme_top_keywords: int = 60
    max_themes: int = 15
    theme_single_term_threshold: float = 5.0

    # AI-assisted analysis
    # LLM Provider Configuration
    llm_provider: str = "gemini"  # "gemini" | "openai" | "deepseek" | "openrouter" | "ollama"
    llm_model: str = "gemini-2.0-flash"
    llm_api_key: str = ""  # Required for cloud providers
    llm_api_base_url: str = ""  # Empty → provider default
    llm_temperature: float = 0.3
    llm_max_tokens: int = 8192
    llm_timeout_seconds: int = 60
    llm_max_retries: int = 2
    llm_retry_delay_seconds: float = 1.0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
