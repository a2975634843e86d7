"""
Markdown report for the AI-assisted thematic analysis.
"""

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .schemas import AIAnalysisResult

DEFAULT_AI_TITLE = "AI-Powered Qualitative Analysis Report"
DEFAULT_AI_AUTHOR = "Research Team"

DEFAULT_AI_METHODOLOGY = (
    "This analysis employed AI-assisted thematic analysis following established "
    "qualitative research principles (Braun & Clarke, 2006). Transcripts were "
    "systematically analyzed to identify patterns, themes, and insights relevant to the "
    "research question. The analysis process involved iterative coding, theme "
    "development, and interpretation grounded in the data."
)

AI_REFERENCES = [
    "Braun, V., & Clarke, V. (2006). Using thematic analysis in psychology. "
    "*Qualitative Research in Psychology*, 3(2), 77-101.",
    "Charmaz, K. (2006). *Constructing grounded theory: A practical guide through "
    "qualitative analysis*. Sage.",
    "Smith, J. A., Flowers, P., & Larkin, M. (2009). *Interpretative phenomenological "
    "analysis: Theory, method and research*. Sage.",
]


class AIReportMeta(BaseModel):
    """Metadata for the AI report. The research question is required."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    research_question: str = Field(..., min_length=1)
    title: Optional[str] = None
    author: Optional[str] = None
    methodology: Optional[str] = None
    participant_demographics: Optional[str] = None
    additional_notes: Optional[str] = None
    institution: Optional[str] = None

    @field_validator("research_question", mode="before")
    @classmethod
    def _strip_question(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator(
        "title",
        "author",
        "methodology",
        "participant_demographics",
        "additional_notes",
        "institution",
        mode="before",
    )
    @classmethod
    def _strings_only(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        return value.strip() or None


def _plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"


def _numbered(items: List[str]) -> List[str]:
    return [f"{i}. {item}" for i, item in enumerate(items, start=1)]


def generate_ai_report(
    meta: AIReportMeta,
    analysis: AIAnalysisResult,
    transcript_count: int,
    today: Optional[date] = None,
) -> str:
    """
    Render an AI analysis as a Markdown research report.

    Args:
        meta: Report metadata including the research question
        analysis: Validated AI analysis
        transcript_count: Number of transcripts analyzed
        today: Report date (default: current date)

    Returns:
        Markdown document
    """
    today = today or date.today()
    question = meta.research_question
    n_themes = len(analysis.themes)

    lines = [f"# {meta.title or DEFAULT_AI_TITLE}", ""]
    lines.append(f"**Author**: {meta.author or DEFAULT_AI_AUTHOR}")
    if meta.institution:
        lines.append(f"**Institution**: {meta.institution}")
    lines += [
        f"**Date**: {today.isoformat()}",
        f"**Number of Transcripts**: {transcript_count}",
        "",
        "---",
        "",
    ]

    lines += [
        "## Abstract",
        "",
        f"This qualitative study examined {transcript_count} interview "
        f"{_plural(transcript_count, 'transcript')} using AI-assisted thematic analysis to "
        f'explore the research question: "{question}". '
        f"Analysis identified {n_themes} major {_plural(n_themes, 'theme')} with associated "
        f"subthemes. Key findings reveal important insights about {question.lower()}. "
        "This report presents comprehensive thematic analysis with verbatim quotes, "
        "interpretations, and recommendations for future research.",
        "",
        "## Research Question",
        "",
        f"**{question}**",
        "",
    ]

    if meta.participant_demographics:
        lines += ["## Participant Information", "", meta.participant_demographics, ""]

    lines += ["## Methodology", "", meta.methodology or DEFAULT_AI_METHODOLOGY, ""]
    if analysis.methodology_notes:
        lines += [f"**Analytical Notes**: {analysis.methodology_notes}", ""]

    lines += ["## Key Findings", ""]
    lines += _numbered(analysis.key_findings)
    lines.append("")

    lines += [
        "## Thematic Analysis",
        "",
        "The following themes emerged from systematic analysis of the interview transcripts:",
        "",
    ]
    for idx, theme in enumerate(analysis.themes, start=1):
        lines += [f"### Theme {idx}: {theme.name}", "", f"**Description**: {theme.description}", ""]
        if theme.subthemes:
            lines.append("**Subthemes**:")
            lines += [f"- {subtheme}" for subtheme in theme.subthemes]
            lines.append("")
        lines += [
            f"**Prevalence**: {theme.prevalence}",
            "",
            f"**Significance**: {theme.significance}",
            "",
        ]
        if theme.quotes:
            lines += ["**Representative Quotes**:", ""]
            for quote in theme.quotes:
                lines.append(f'> *{quote.respondent_id}*: "{quote.text}"')
                if quote.context:
                    lines += [">", f"> *Context*: {quote.context}"]
                lines.append("")
        lines += ["---", ""]

    if analysis.patterns:
        lines += ["## Patterns and Relationships", ""]
        for idx, pattern in enumerate(analysis.patterns, start=1):
            lines += [f"### {idx}. {pattern.name}", "", pattern.description, ""]
            if pattern.examples:
                lines.append("**Examples**:")
                lines += [f"- {example}" for example in pattern.examples]
                lines.append("")

    lines += ["## Interpretations and Discussion", "", analysis.interpretations, ""]

    if analysis.recommendations:
        lines += ["## Recommendations", ""]
        lines += _numbered(analysis.recommendations)
        lines.append("")

    if meta.additional_notes:
        lines += ["## Additional Notes", "", meta.additional_notes, ""]

    lines += [
        "## Limitations",
        "",
        "This analysis should be interpreted within the following limitations:",
        "",
        f"1. **Sample Size**: Analysis is based on {transcript_count} "
        f"{_plural(transcript_count, 'transcript')}, which may limit generalizability.",
        "2. **AI-Assisted Analysis**: While AI tools can enhance systematic analysis, human "
        "researcher judgment and reflexivity remain essential for interpretation.",
        "3. **Context**: Findings should be considered within the specific context of the "
        "study participants and research setting.",
        "4. **Validation**: Future research should validate these findings with additional "
        "data sources and populations.",
        "",
        "## References",
        "",
    ]
    for reference in AI_REFERENCES:
        lines += [reference, ""]

    return "\n".join(lines)
