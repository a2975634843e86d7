"""
Transcript input handling.

Normalizes raw request/CLI input into the ordered list of non-empty, trimmed
documents expected by the analysis pipeline.
"""

from .transcripts import clean_documents, require_documents, split_transcripts

__all__ = ["clean_documents", "require_documents", "split_transcripts"]
