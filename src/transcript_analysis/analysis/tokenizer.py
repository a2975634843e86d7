"""
English tokenizer with deterministic n-gram generation.

Provides stable tokenization for interview transcripts:
- Unicode letters and digits are kept, everything else becomes a separator
- Lowercasing
- Removal of single-character tokens and English stopwords
- N-gram generation (bigrams, trigrams)
"""

import re
from typing import AbstractSet, List, Optional

from .stopwords import STOPWORDS_EN
from ..version import TOKENIZER_VERSION

# Anything that is not a letter, digit or whitespace (underscore counts as punctuation)
_NON_WORD = re.compile(r"[^\w\s]|_")

MIN_TOKEN_LENGTH = 2

__all__ = ["tokenize", "ngrams", "TOKENIZER_VERSION", "MIN_TOKEN_LENGTH"]


def tokenize(text: str, stopwords: Optional[AbstractSet[str]] = None) -> List[str]:
    """
    Tokenize English text deterministically.

    Args:
        text: Input text (any case)
        stopwords: Custom stopword set (default: STOPWORDS_EN)

    Returns:
        List of tokens (lowercased), stopwords and 1-character tokens removed

    Examples:
        >>> tokenize("The Quick, quick fox!! fox.")
        ['quick', 'quick', 'fox', 'fox']
        >>> tokenize("I can't wait")
        ['can', 'wait']
    """
    if stopwords is None:
        stopwords = STOPWORDS_EN

    cleaned = _NON_WORD.sub(" ", text.lower())
    return [
        token
        for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in stopwords
    ]


def ngrams(tokens: List[str], n: int) -> List[str]:
    """
    Generate n-grams from token list.

    Args:
        tokens: List of tokens
        n: N-gram size (2=bigram, 3=trigram)

    Returns:
        List of n-gram strings (space-joined), in order of starting index

    Examples:
        >>> ngrams(["a", "b", "c"], 2)
        ['a b', 'b c']
        >>> ngrams(["a", "b", "c", "d"], 3)
        ['a b c', 'b c d']
        >>> ngrams(["a"], 2)
        []
    """
    if n < 1:
        return []
    if n > len(tokens):
        return []
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]
