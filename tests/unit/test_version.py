"""
Unit tests for pipeline version reporting.
"""

import pytest

from transcript_analysis.version import (
    LEXICON_VERSION,
    PROMPT_VERSION,
    STEMMER_VERSION,
    TOKENIZER_VERSION,
    get_current_pipeline_version,
)


@pytest.mark.unit
class TestPipelineVersion:
    def test_model_version_follows_settings(self, monkeypatch, mock_settings):
        mock_settings.llm_provider = "ollama"
        mock_settings.llm_model = "llama3.1:8b"
        monkeypatch.setattr("transcript_analysis.version.settings", mock_settings)

        version = get_current_pipeline_version()

        assert version.model_version == "ollama/llama3.1:8b"
        assert version.tokenizer_version == TOKENIZER_VERSION

    def test_to_repr(self, monkeypatch, mock_settings):
        monkeypatch.setattr("transcript_analysis.version.settings", mock_settings)

        assert get_current_pipeline_version().to_repr() == (
            f"Pipeline-{TOKENIZER_VERSION}-{STEMMER_VERSION}-"
            f"{LEXICON_VERSION}-{PROMPT_VERSION}-gemini/gemini-2.0-flash"
        )
