"""
Transcript analysis service.

Heuristic qualitative coding of interview transcripts (keywords, auto-codes,
co-occurrence, sentiment, themes), Markdown research reports, and an optional
AI-assisted thematic analysis backed by a hosted language model.
"""

from .version import API_VERSION as __version__

__all__ = ["__version__"]
