"""
Version constants for the transcript analysis pipeline.

This module defines all version constants used throughout the pipeline to ensure
reproducible processing and a complete audit trail.
"""

from .config import settings
from .models.pipeline_version import PipelineVersion

# API Version
API_VERSION = "1.0.0"

# Heuristic pipeline component versions (update these when implementations change)
TOKENIZER_VERSION = "tokenizer-en-1.0.0"
STOPLIST_VERSION = "stopwords-en-2025.1"
LEXICON_VERSION = "afinn-lite-1.0.0"
STEMMER_VERSION = "suffix-strip-1.0.0"

# Outer layers
REPORT_TEMPLATE_VERSION = "report-md-2.0.0"
PROMPT_VERSION = "thematic-v1.0"


def get_current_pipeline_version() -> PipelineVersion:
    """
    Get current pipeline version configuration.

    Returns:
        PipelineVersion instance with current versions
    """
    return PipelineVersion(
        tokenizer_version=TOKENIZER_VERSION,
        stoplist_version=STOPLIST_VERSION,
        lexicon_version=LEXICON_VERSION,
        stemmer_version=STEMMER_VERSION,
        report_template_version=REPORT_TEMPLATE_VERSION,
        prompt_version=PROMPT_VERSION,
        model_version=f"{settings.llm_provider}/{settings.llm_model}",
    )
