"""
Pipeline version model for reproducible analysis.

This module defines the PipelineVersion model that tracks all component versions
so that the same version parameters + same transcripts = same analysis output.
"""

from pydantic import BaseModel, Field


class PipelineVersion(BaseModel):
    """
    Immutable version contract for reproducible analysis.

    Same version parameters guarantee same output for same input across all pipeline stages.
    """

    # Heuristic pipeline components
    tokenizer_version: str = Field(description="Tokenizer version")
    stoplist_version: str = Field(description="English stopwords list version")
    lexicon_version: str = Field(description="Sentiment lexicon version")
    stemmer_version: str = Field(description="Suffix-strip stemmer version")

    # Outer layers
    report_template_version: str = Field(description="Markdown report template version")
    prompt_version: str = Field(description="AI analysis prompt version")
    model_version: str = Field(description="Configured LLM identifier (provider/model)")

    model_config = {
        "frozen": True,  # Immutable
        "protected_namespaces": (),
        "json_schema_extra": {
            "example": {
                "tokenizer_version": "tokenizer-en-1.0.0",
                "stoplist_version": "stopwords-en-2025.1",
                "lexicon_version": "afinn-lite-1.0.0",
                "stemmer_version": "suffix-strip-1.0.0",
                "report_template_version": "report-md-2.0.0",
                "prompt_version": "thematic-v1.0",
                "model_version": "gemini/gemini-2.0-flash",
            }
        },
    }

    def to_repr(self) -> str:
        """
        Short representation for logging.

        Returns:
            Compact string representation with key version components.
        """
        return (
            f"Pipeline-{self.tokenizer_version}-{self.stemmer_version}-"
            f"{self.lexicon_version}-{self.prompt_version}-{self.model_version}"
        )
