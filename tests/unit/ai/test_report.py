"""
Unit tests for the AI analysis Markdown report.
"""

import pytest
from pydantic import ValidationError

from transcript_analysis.ai.report import (
    AI_REFERENCES,
    DEFAULT_AI_METHODOLOGY,
    AIReportMeta,
    generate_ai_report,
)
from transcript_analysis.ai.schemas import AIAnalysisResult


QUESTION = "How do customers experience onboarding?"


@pytest.fixture
def ai_result(valid_ai_payload) -> AIAnalysisResult:
    return AIAnalysisResult.model_validate(valid_ai_payload)


@pytest.mark.unit
class TestAIReportMeta:
    def test_camel_case(self):
        meta = AIReportMeta.model_validate(
            {"researchQuestion": f"  {QUESTION}  ", "participantDemographics": "Two users"}
        )
        assert meta.research_question == QUESTION
        assert meta.participant_demographics == "Two users"

    @pytest.mark.parametrize("question", ["", "   ", None])
    def test_question_required(self, question):
        with pytest.raises(ValidationError):
            AIReportMeta(research_question=question)

    def test_non_strings_dropped(self):
        meta = AIReportMeta(research_question=QUESTION, title=3, author="  ")
        assert meta.title is None
        assert meta.author is None


@pytest.mark.unit
class TestGenerateAIReport:
    def test_header_defaults(self, ai_result, fixed_date):
        report = generate_ai_report(AIReportMeta(research_question=QUESTION), ai_result, 2, today=fixed_date)
        assert report.startswith("# AI-Powered Qualitative Analysis Report")
        assert "**Author**: Research Team" in report
        assert "**Date**: 2026-02-12" in report
        assert "**Number of Transcripts**: 2" in report
        assert "**Institution**" not in report
        assert DEFAULT_AI_METHODOLOGY in report

    def test_abstract_plurals(self, ai_result, fixed_date):
        meta = AIReportMeta(research_question=QUESTION)
        report = generate_ai_report(meta, ai_result, 2, today=fixed_date)
        assert "examined 2 interview transcripts" in report
        assert "identified 2 major themes" in report

        single = ai_result.model_copy(update={"themes": ai_result.themes[:1]})
        report = generate_ai_report(meta, single, 1, today=fixed_date)
        assert "examined 1 interview transcript using" in report
        assert "identified 1 major theme with" in report
        assert "based on 1 transcript," in report

    def test_sections(self, ai_result, fixed_date):
        report = generate_ai_report(AIReportMeta(research_question=QUESTION), ai_result, 2, today=fixed_date)
        for heading in [
            "## Abstract",
            "## Research Question",
            "## Methodology",
            "## Key Findings",
            "## Thematic Analysis",
            "### Theme 1: Onboarding Experience",
            "### Theme 2: Billing Confusion",
            "## Patterns and Relationships",
            "## Interpretations and Discussion",
            "## Recommendations",
            "## Limitations",
            "## References",
        ]:
            assert heading in report
        assert f"**{QUESTION}**" in report
        assert "1. Onboarding is a strength.\n2. Billing is a pain point." in report
        assert "**Analytical Notes**: Themes were derived inductively." in report
        for reference in AI_REFERENCES:
            assert reference in report

    def test_quotes_and_context(self, ai_result, fixed_date):
        report = generate_ai_report(AIReportMeta(research_question=QUESTION), ai_result, 2, today=fixed_date)
        assert '> *Respondent 1*: "I loved the onboarding"\n>\n> *Context*: Describing the first week' in report
        assert '> *Respondent 2*: "Billing was confusing"\n\n' in report
        assert "**Subthemes**:\n- Guided setup\n- Early wins" in report

    def test_optional_metadata(self, ai_result, fixed_date):
        meta = AIReportMeta(
            research_question=QUESTION,
            title="Onboarding Study",
            author="J. Doe",
            institution="University of Somewhere",
            methodology="Semi-structured interviews.",
            participant_demographics="Two small-business owners.",
            additional_notes="Pilot sample.",
        )
        report = generate_ai_report(meta, ai_result, 2, today=fixed_date)
        assert report.startswith("# Onboarding Study")
        assert "**Author**: J. Doe\n**Institution**: University of Somewhere" in report
        assert "## Participant Information\n\nTwo small-business owners." in report
        assert "## Methodology\n\nSemi-structured interviews." in report
        assert "## Additional Notes\n\nPilot sample." in report
        assert DEFAULT_AI_METHODOLOGY not in report

    def test_empty_analysis(self, fixed_date):
        report = generate_ai_report(
            AIReportMeta(research_question=QUESTION), AIAnalysisResult(), 1, today=fixed_date
        )
        assert "### Theme 1" not in report
        assert "## Patterns and Relationships" not in report
        assert "## Recommendations" not in report
        assert "**Analytical Notes**" not in report
        assert "## Limitations" in report
