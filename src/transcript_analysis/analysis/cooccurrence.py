"""
Document-level code co-occurrence.

A code is present in a document when the lowercased document text contains
the lowercased code as a literal substring (no tokenization).
"""

from collections import Counter
from itertools import combinations
from typing import List, Sequence, Tuple

from ..models.analysis import CooccurrencePair, Document


def codes_present(codes: Sequence[str], text: str) -> List[str]:
    """
    List the codes that occur verbatim (modulo case) in ``text``.

    Args:
        codes: Code labels
        text: Document text

    Returns:
        Present codes in input order, without duplicates
    """
    lower = text.lower()
    present: List[str] = []
    for code in codes:
        if code not in present and code.lower() in lower:
            present.append(code)
    return present


def _pair_key(a: str, b: str) -> Tuple[str, str]:
    return (a, b) if a < b else (b, a)


def cooccurrence_matrix(
    documents: Sequence[Document], codes: Sequence[str]
) -> List[CooccurrencePair]:
    """
    Count, for each unordered code pair, the documents containing both codes.

    Args:
        documents: Corpus documents
        codes: Code labels

    Returns:
        One CooccurrencePair per pair with a nonzero count, ``a < b``,
        in first-seen order
    """
    counts: Counter = Counter()
    for doc in documents:
        for a, b in combinations(codes_present(codes, doc.text), 2):
            counts[_pair_key(a, b)] += 1

    return [CooccurrencePair(a=a, b=b, count=count) for (a, b), count in counts.items()]
