"""
Phrase-based auto-coding.

Mines frequent bigrams and trigrams across the corpus and turns them into
codes with example quotes. When the corpus is too sparse to yield enough
recurring phrases, the top corpus keywords are used as codes instead.
"""

import math
from collections import Counter
from typing import Dict, List, Optional, Sequence

import structlog

from ..models.analysis import Code, Document, KeywordScore
from .keywords import keyword_scores
from .quotes import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_WINDOW_AFTER,
    DEFAULT_WINDOW_BEFORE,
    extract_quote,
)
from .tokenizer import ngrams, tokenize

logger = structlog.get_logger(__name__)

# Phrases containing a shorter word are treated as noise
MIN_PHRASE_WORD_LENGTH = 3
PHRASE_SIZES = (2, 3)

MAX_PHRASE_CODES = 40
MIN_PHRASE_CODES = 10
FALLBACK_CODE_COUNT = 20
MAX_EXAMPLES_PER_CODE = 5
MAX_EXAMPLES_PER_FALLBACK_CODE = 3


class _ExampleCache:
    """Insertion-ordered examples, unique under case-insensitive comparison."""

    def __init__(self, cap: int):
        self.cap = cap
        self._by_key: Dict[str, str] = {}

    @property
    def full(self) -> bool:
        return len(self._by_key) >= self.cap

    def add(self, quote: str) -> None:
        if not quote or self.full:
            return
        self._by_key.setdefault(quote.lower(), quote)

    def values(self) -> List[str]:
        return list(self._by_key.values())


def _is_meaningful(phrase: str) -> bool:
    return all(len(word) >= MIN_PHRASE_WORD_LENGTH for word in phrase.split(" "))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def auto_codes(
    documents: Sequence[Document],
    keywords: Optional[Sequence[KeywordScore]] = None,
    max_codes: int = MAX_PHRASE_CODES,
    min_codes: int = MIN_PHRASE_CODES,
    fallback_count: int = FALLBACK_CODE_COUNT,
    max_examples: int = MAX_EXAMPLES_PER_CODE,
    max_fallback_examples: int = MAX_EXAMPLES_PER_FALLBACK_CODE,
    quote_max_length: int = DEFAULT_MAX_LENGTH,
    quote_before: int = DEFAULT_WINDOW_BEFORE,
    quote_after: int = DEFAULT_WINDOW_AFTER,
) -> List[Code]:
    """
    Build codes from recurring phrases, falling back to keywords.

    Process:
    1. Tokenize each document and generate 2-grams and 3-grams
    2. Drop grams containing a word shorter than 3 characters
    3. Count every gram occurrence corpus-wide; collect up to ``max_examples``
       distinct quotes per gram from the originating document
    4. Keep grams seen more than once with at least one example, sort by
       frequency (descending, stable) and take ``max_codes``
    5. If fewer than ``min_codes`` survive, return keyword-derived codes

    Args:
        documents: Corpus documents
        keywords: Precomputed keyword scores (computed on demand for the fallback)
        max_codes: Cap on phrase-based codes
        min_codes: Minimum phrase codes before falling back to keywords
        fallback_count: Number of keywords used as codes in the fallback
        max_examples: Example cap for phrase codes
        max_fallback_examples: Example cap for keyword codes
        quote_max_length: Excerpt length cap
        quote_before: Context characters before a match
        quote_after: Context characters after a match

    Returns:
        List of Code objects
    """
    frequencies: Counter = Counter()
    examples: Dict[str, _ExampleCache] = {}

    for doc in documents:
        tokens = tokenize(doc.text)
        for n in PHRASE_SIZES:
            for phrase in ngrams(tokens, n):
                if not _is_meaningful(phrase):
                    continue
                frequencies[phrase] += 1

                cache = examples.setdefault(phrase, _ExampleCache(max_examples))
                if not cache.full:
                    cache.add(
                        extract_quote(
                            doc.text,
                            phrase,
                            max_length=quote_max_length,
                            before=quote_before,
                            after=quote_after,
                        )
                    )

    codes = [
        Code(code=phrase, frequency=count, examples=examples[phrase].values())
        for phrase, count in frequencies.items()
        if count > 1 and examples[phrase].values()
    ]
    codes = sorted(codes, key=lambda c: c.frequency, reverse=True)[:max_codes]

    if len(codes) >= min_codes:
        logger.debug("phrase_codes_built", phrases_seen=len(frequencies), codes=len(codes))
        return codes

    logger.debug(
        "phrase_codes_sparse_using_keywords",
        phrase_codes=len(codes),
        min_codes=min_codes,
    )

    if keywords is None:
        keywords = keyword_scores(documents)

    fallback = []
    for kw in list(keywords)[:fallback_count]:
        cache = _ExampleCache(max_fallback_examples)
        term = kw.term.lower()
        for doc in documents:
            if cache.full:
                break
            if term in doc.text.lower():
                cache.add(
                    extract_quote(
                        doc.text,
                        kw.term,
                        max_length=quote_max_length,
                        before=quote_before,
                        after=quote_after,
                    )
                )
        fallback.append(
            Code(code=kw.term, frequency=_round_half_up(kw.score), examples=cache.values())
        )

    return fallback
