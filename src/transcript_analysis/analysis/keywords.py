"""
Corpus-level keyword scoring.

Scores every distinct token with a smoothed TF-IDF variant:

    idf   = ln((N + 1) / (df + 1)) + 1
    score = count * idf

where ``count`` is the total number of occurrences across the corpus, ``df``
the number of documents containing the term and ``N`` the number of
documents. The score is corpus-global (not per document) so that terms
concentrated in few transcripts are up-weighted relative to ubiquitous ones.
"""

import math
from collections import Counter
from typing import List, Sequence

from ..models.analysis import Document, KeywordScore
from .tokenizer import tokenize

DEFAULT_KEYWORD_LIMIT = 200


def keyword_scores(
    documents: Sequence[Document], limit: int = DEFAULT_KEYWORD_LIMIT
) -> List[KeywordScore]:
    """
    Compute keyword relevance over the whole corpus.

    Args:
        documents: Corpus documents
        limit: Maximum number of keywords returned

    Returns:
        KeywordScore list sorted by descending score (ties keep first-seen order)
    """
    term_counts: Counter = Counter()
    doc_freq: Counter = Counter()

    for doc in documents:
        tokens = tokenize(doc.text)
        term_counts.update(tokens)
        doc_freq.update(set(tokens))

    n_docs = len(documents)
    scored = []
    for term, count in term_counts.items():
        df = doc_freq[term]
        idf = math.log((n_docs + 1) / (df + 1)) + 1
        scored.append(KeywordScore(term=term, score=count * idf))

    # sorted() is stable, Counter preserves insertion order
    scored = sorted(scored, key=lambda k: k.score, reverse=True)
    return scored[:limit]
