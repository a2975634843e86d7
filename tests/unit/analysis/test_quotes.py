"""
Unit tests for bounded quote extraction.
"""

import pytest

from transcript_analysis.analysis.quotes import ELLIPSIS, extract_quote


@pytest.mark.unit
class TestExtractQuote:
    """Tests for extract_quote function."""

    def test_trims_to_sentence(self):
        text = "Intro. Billing was confusing. Support helped a lot today."
        assert extract_quote(text, "billing") == "Billing was confusing."

    def test_case_insensitive_match(self):
        text = "We discussed ONBOARDING at length"
        assert "ONBOARDING" in extract_quote(text, "onboarding")

    def test_offsets_survive_length_changing_lowercase(self):
        # "İ".lower() is two code points
        text = "İİİİ billing was confusing."
        assert extract_quote(text, "billing", before=0, after=0) == "billing"

    def test_short_text_returned_whole(self):
        text = "I loved the onboarding but struggled with billing."
        assert extract_quote(text, "billing") == text

    def test_phrase_absent_returns_text_start(self):
        assert extract_quote("  Nothing relevant here.  ", "billing") == "Nothing relevant here."

    def test_phrase_absent_long_text_truncated(self):
        text = "abcdefghij" * 50
        quote = extract_quote(text, "missing")
        assert quote == text[:180]
        assert not quote.endswith(ELLIPSIS)

    def test_window_bounds(self):
        text = ("x" * 300) + " pricing " + ("y" * 300)
        quote = extract_quote(text, "pricing")
        assert "pricing" in quote
        assert len(quote) <= 180 + len(ELLIPSIS)

    def test_custom_limits(self):
        text = "alpha beta gamma delta epsilon zeta eta theta"
        quote = extract_quote(text, "delta", max_length=10, before=5, after=5)
        assert quote.endswith(ELLIPSIS)
        assert len(quote) <= 10 + len(ELLIPSIS)

    def test_keeps_phrase_after_earlier_sentences(self):
        text = (
            "We started in March. Nothing happened. Then the export feature broke twice "
            "and nobody could explain why it happened again and again for weeks."
        )
        quote = extract_quote(text, "export feature")
        assert "export feature" in quote
        assert not quote.startswith("We started")

    def test_empty_text(self):
        assert extract_quote("", "anything") == ""
