"""
Unit tests for corpus-level keyword scoring.
"""

import math

import pytest

from transcript_analysis.analysis import build_documents
from transcript_analysis.analysis.keywords import keyword_scores


def _scores(raw_docs, **kwargs):
    return {k.term: k.score for k in keyword_scores(build_documents(raw_docs), **kwargs)}


@pytest.mark.unit
class TestKeywordScores:
    """Tests for keyword_scores function."""

    def test_term_in_both_documents(self, onboarding_documents):
        """df = N gives idf = 1, so the score equals the raw count."""
        scores = _scores(onboarding_documents)
        assert scores["billing"] == pytest.approx(2.0)
        assert scores["onboarding"] == pytest.approx(2.0)

    def test_term_in_one_document(self, onboarding_documents):
        scores = _scores(onboarding_documents)
        expected = 1 * (math.log(3 / 2) + 1)
        assert scores["loved"] == pytest.approx(expected)
        assert scores["smooth"] == pytest.approx(expected)

    def test_scores_positive(self, product_documents):
        for score in _scores(product_documents).values():
            assert score > 0

    def test_sorted_descending(self, product_documents):
        keywords = keyword_scores(build_documents(product_documents))
        scores = [k.score for k in keywords]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_first_seen_order(self, onboarding_documents):
        """'onboarding' appears before 'billing' in the first document."""
        keywords = keyword_scores(build_documents(onboarding_documents))
        assert [k.term for k in keywords[:2]] == ["onboarding", "billing"]

    def test_repeated_term_single_document(self):
        scores = _scores(["delay delay delay"])
        # N = 1, df = 1 -> idf = ln(1) + 1 = 1
        assert scores == {"delay": pytest.approx(3.0)}

    def test_limit(self, product_documents):
        assert len(keyword_scores(build_documents(product_documents), limit=5)) == 5

    def test_empty_corpus(self):
        assert keyword_scores([]) == []

    def test_stopwords_excluded(self, onboarding_documents):
        scores = _scores(onboarding_documents)
        assert "the" not in scores
        assert "was" not in scores
