"""
Unit tests for report narrative helpers.
"""

import pytest

from transcript_analysis.models.analysis import (
    AnalysisResult,
    Code,
    Document,
    KeywordScore,
    SentimentEntry,
    Theme,
)
from transcript_analysis.reporting.narrative import (
    Quote,
    abstract_summary,
    respondent_label,
    split_sentences,
    theme_description,
    theme_documents,
    theme_quotables,
    theme_sentiment,
    theme_subthemes,
)


@pytest.fixture
def billing_result() -> AnalysisResult:
    """Small hand-built result with one billing theme."""
    return AnalysisResult(
        documents=[
            Document(id="doc_1", text="Billing was confusing. I liked the team."),
            Document(id="doc_2", text="The onboarding went fine."),
            Document(id="doc_3", text="Our bills arrive late! Billing support helped."),
        ],
        keywords=[
            KeywordScore(term="billing", score=4.0),
            KeywordScore(term="bills", score=2.0),
            KeywordScore(term="team", score=1.0),
        ],
        codes=[
            Code(code="billing support", frequency=2, examples=["Billing support helped."]),
            Code(code="team", frequency=3, examples=["I liked the team."]),
        ],
        cooccurrence=[],
        sentiment=[
            SentimentEntry(document_id="doc_1", score=-0.5),
            SentimentEntry(document_id="doc_2", score=0.4),
            SentimentEntry(document_id="doc_3", score=-0.1),
        ],
        themes=[Theme(theme="Bill", terms=["billing", "bills"])],
    )


@pytest.mark.unit
class TestHelpers:
    def test_split_sentences(self):
        assert split_sentences("One.  Two?\nThree") == ["One.", "Two?", "Three"]
        assert split_sentences("   ") == []

    def test_respondent_label(self):
        assert respondent_label("doc_12") == "Respondent 12"
        assert respondent_label("interview-a") == "interview-a"


@pytest.mark.unit
class TestThemeNarrative:
    def test_theme_documents(self, billing_result):
        docs = theme_documents(billing_result.themes[0], billing_result)
        assert [d.id for d in docs] == ["doc_1", "doc_3"]

    def test_theme_quotables(self, billing_result):
        quotes = theme_quotables(billing_result)
        texts = [q.text for q in quotes["Bill"]]
        assert len(texts) == 3
        assert set(texts) == {
            "Billing was confusing.",
            "Our bills arrive late!",
            "Billing support helped.",
        }
        assert Quote(text="Billing was confusing.", respondent_id="doc_1") in quotes["Bill"]

    def test_quotables_skip_unmatched_themes(self, billing_result):
        result = billing_result.model_copy(
            update={"themes": [Theme(theme="Refund", terms=["refund"])]}
        )
        assert theme_quotables(result) == {}

    def test_theme_sentiment(self, billing_result):
        assert theme_sentiment(billing_result.themes[0], billing_result) == pytest.approx(-0.3)

    def test_theme_subthemes(self, billing_result):
        assert theme_subthemes(billing_result.themes[0], billing_result) == ["billing support"]

    def test_theme_description(self, billing_result):
        text = theme_description(billing_result.themes[0], billing_result)
        assert "The theme of Bill emerged across 2 participant(s)." in text
        assert "Associated codes include: billing support." in text

    def test_abstract_summary(self, billing_result):
        text = abstract_summary(billing_result)
        assert text.startswith("This thematic analysis (n=3)")
        assert "billing, bills, team" in text
