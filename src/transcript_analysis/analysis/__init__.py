"""
Heuristic corpus analysis.

Public API for running the full basic qualitative-coding pipeline over a list
of transcript strings: keyword scoring, phrase auto-coding, code
co-occurrence, lexicon sentiment and stem-based theme grouping.
"""

import time
from typing import List, Sequence

import structlog

from ..config import settings
from ..models.analysis import AnalysisResult, Document, SentimentEntry
from .autocoder import auto_codes
from .cooccurrence import cooccurrence_matrix
from .keywords import keyword_scores
from .sentiment import sentiment_for
from .themes import group_themes
from .tokenizer import ngrams, tokenize


logger = structlog.get_logger(__name__)

__all__ = [
    "analyze_corpus",
    "build_documents",
    "tokenize",
    "ngrams",
    "keyword_scores",
    "auto_codes",
    "cooccurrence_matrix",
    "sentiment_for",
    "group_themes",
]


def build_documents(raw_docs: Sequence[str]) -> List[Document]:
    """Wrap raw strings as Documents with ids doc_1, doc_2, ..."""
    return [Document(id=f"doc_{i}", text=text) for i, text in enumerate(raw_docs, start=1)]


def analyze_corpus(raw_docs: Sequence[str]) -> AnalysisResult:
    """
    Complete heuristic analysis of a transcript corpus.

    Pipeline stages:
    1. Assign document ids (doc_1, doc_2, ...)
    2. Score keywords over the whole corpus
    3. Auto-code recurring phrases (keyword fallback for sparse corpora)
    4. Count code co-occurrence per document
    5. Score sentiment per document
    6. Group top keywords into themes

    The caller is responsible for trimming documents and rejecting an empty
    corpus; an empty list simply yields empty collections.

    Args:
        raw_docs: Ordered, non-empty, trimmed transcript strings

    Returns:
        AnalysisResult aggregate

    Examples:
        >>> result = analyze_corpus([
        ...     "I loved the onboarding but struggled with billing.",
        ...     "Billing was confusing; support helped, though onboarding was smooth.",
        ... ])
        >>> [d.id for d in result.documents]
        ['doc_1', 'doc_2']
    """
    start_time = time.time()

    documents = build_documents(raw_docs)

    logger.info("Starting corpus analysis", document_count=len(documents))

    keywords = keyword_scores(documents, limit=settings.keyword_limit)

    codes = auto_codes(
        documents,
        keywords=keywords,
        max_codes=settings.max_phrase_codes,
        min_codes=settings.min_phrase_codes,
        fallback_count=settings.fallback_code_count,
        max_examples=settings.max_examples_per_code,
        max_fallback_examples=settings.max_examples_per_fallback_code,
        quote_max_length=settings.quote_max_length,
        quote_before=settings.quote_window_before,
        quote_after=settings.quote_window_after,
    )
    code_labels = [c.code for c in codes]

    cooccurrence = cooccurrence_matrix(documents, code_labels)

    sentiment = [
        SentimentEntry(document_id=doc.id, score=sentiment_for(doc.text)) for doc in documents
    ]

    themes = group_themes(
        keywords,
        top_n=settings.theme_top_keywords,
        max_themes=settings.max_themes,
        single_term_threshold=settings.theme_single_term_threshold,
    )

    processing_time_ms = (time.time() - start_time) * 1000

    logger.info(
        "Corpus analysis complete",
        document_count=len(documents),
        keywords=len(keywords),
        codes=len(codes),
        cooccurrence_pairs=len(cooccurrence),
        themes=len(themes),
        processing_time_ms=round(processing_time_ms, 2),
    )

    return AnalysisResult(
        documents=documents,
        keywords=keywords,
        codes=codes,
        cooccurrence=cooccurrence,
        sentiment=sentiment,
        themes=themes,
    )
