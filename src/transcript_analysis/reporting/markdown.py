"""
Markdown research report builder.

One rendering interface, two template strategies:
- StandardReportTemplate: structured analysis report (executive summary,
  thematic analysis, tables, limitations)
- PublicationReportTemplate: paper-style structure (abstract, introduction,
  methods, results, discussion, conclusions, references, appendices)

The strategy is selected by ``ReportMeta.publication_format``.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..analysis.sentiment import sentiment_label
from ..models.analysis import AnalysisResult, Theme
from .narrative import (
    Quote,
    abstract_summary,
    average_sentiment,
    capitalize_first,
    respondent_label,
    theme_description,
    theme_documents,
    theme_interpretation,
    theme_quotables,
    theme_subthemes,
)

logger = structlog.get_logger(__name__)

DEFAULT_TITLE = "Qualitative Analysis Report"
DEFAULT_AUTHOR = "Research Team"
DEFAULT_METHODOLOGY = (
    "Automated heuristic analysis approximating NVivo-style workflows (TF-IDF keyword "
    "extraction, phrase-based auto-coding, code co-occurrence, lexicon-based sentiment, "
    "naive theme grouping)."
)

REPORT_THEMES = 8
REPORT_CODES = 12
REPORT_KEYWORDS = 25
REPORT_PAIRS = 15

LIMITATIONS = (
    "This is an automated, heuristic analysis intended to accelerate initial synthesis. "
    "Manual coding, inter-rater reliability checks, and triangulation with additional data "
    "sources are recommended for publication-grade studies."
)

REFERENCES = [
    "Braun, V., & Clarke, V. (2006). Using thematic analysis in psychology. "
    "*Qualitative Research in Psychology*, 3(2), 77-101.",
    "Nielsen, F. Å. (2011). A new ANEW: Evaluation of a word list for sentiment analysis "
    "in microblogs. *Proceedings of the ESWC2011 Workshop on Making Sense of Microposts*, "
    "93-98.",
    "Salton, G., & Buckley, C. (1988). Term-weighting approaches in automatic text "
    "retrieval. *Information Processing & Management*, 24(5), 513-523.",
    "Saldaña, J. (2016). *The coding manual for qualitative researchers* (3rd ed.). Sage.",
]


# ============================================================================
# REPORT METADATA
# ============================================================================


class ReportMeta(BaseModel):
    """Optional report metadata supplied by the caller."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = Field(default=None, description="Report title")
    author: Optional[str] = Field(default=None, description="Author line")
    methodology: Optional[str] = Field(default=None, description="Methodology text")
    methodology_variations: Optional[str] = Field(default=None)
    participant_demographics: Optional[str] = Field(default=None)
    additional_notes: Optional[str] = Field(default=None)
    publication_format: bool = Field(
        default=False, description="Render the paper-style publication template"
    )
    institution: Optional[str] = Field(default=None)
    corresponding_author: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)

    @field_validator(
        "title",
        "author",
        "methodology",
        "methodology_variations",
        "participant_demographics",
        "additional_notes",
        "institution",
        "corresponding_author",
        "email",
        mode="before",
    )
    @classmethod
    def _strings_only(cls, value: Any) -> Optional[str]:
        """Non-string values are ignored; blank strings count as missing."""
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @field_validator("publication_format", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        """Accept booleans and the strings "true"/"false"."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return False


# ============================================================================
# TEMPLATES
# ============================================================================


class ReportTemplate(ABC):
    """Renders an AnalysisResult as Markdown."""

    name: str = "base"

    def render(self, meta: ReportMeta, result: AnalysisResult, today: date) -> str:
        quotes = theme_quotables(result)
        themes = result.themes[:REPORT_THEMES]
        sections = self.sections(meta, result, themes, quotes, today)
        return "\n\n".join(s.rstrip("\n") for s in sections if s)

    @abstractmethod
    def sections(
        self,
        meta: ReportMeta,
        result: AnalysisResult,
        themes: List[Theme],
        quotes: dict,
        today: date,
    ) -> List[str]:
        """Return the Markdown sections in order."""

    # Shared building blocks ------------------------------------------------

    @staticmethod
    def theme_block(
        heading: str,
        theme: Theme,
        quotes: List[Quote],
        result: AnalysisResult,
        blockquotes: bool = False,
    ) -> str:
        lines = [heading, "", theme_description(theme, result), ""]
        subthemes = theme_subthemes(theme, result)
        if subthemes:
            lines += [f"**Subthemes:** {', '.join(subthemes)}", ""]
        if quotes:
            lines += ["**Respondent Quotes:**", ""]
            for quote in quotes:
                who = respondent_label(quote.respondent_id)
                if blockquotes:
                    lines += [f'> *{who}*: "{quote.text}"', ""]
                else:
                    lines += [f'{who}: "{quote.text}"', ""]
        lines += ["**Interpretation:**", "", theme_interpretation(theme, quotes, result)]
        return "\n".join(lines)

    @staticmethod
    def code_table(result: AnalysisResult, limit: int = REPORT_CODES) -> str:
        rows = [f"| {c.code} | {c.frequency} |" for c in result.codes[:limit]]
        return "\n".join(["| Code | Frequency |", "|---|---|"] + (rows or ["| (none) | 0 |"]))

    @staticmethod
    def top_pairs(result: AnalysisResult, limit: int = REPORT_PAIRS):
        return sorted(result.cooccurrence, key=lambda p: p.count, reverse=True)[:limit]

    @staticmethod
    def sentiment_lines(result: AnalysisResult) -> str:
        return "\n".join(f"- {s.document_id}: {s.score:.2f}" for s in result.sentiment)

    @staticmethod
    def corpus_chars(result: AnalysisResult) -> int:
        return sum(len(d.text) for d in result.documents)


class StandardReportTemplate(ReportTemplate):
    """Structured analysis report."""

    name = "standard"

    def sections(self, meta, result, themes, quotes, today):
        n_docs = len(result.documents)
        total_chars = self.corpus_chars(result)
        top3 = ", ".join(t.theme for t in result.themes[:3])

        header = "\n".join(
            [
                f"# {meta.title or DEFAULT_TITLE}",
                "",
                f"**Author**: {meta.author or DEFAULT_AUTHOR}\\",
                f"**Date**: {today.isoformat()}\\",
                f"**Corpus size**: {n_docs} documents",
            ]
        )

        summary = "\n".join(
            [
                "## Executive summary",
                "",
                f"- Average sentiment: {average_sentiment(result):.2f} (lexicon-based scale)",
                f"- Top themes suggest focus around: {top3}",
                "- Most frequent codes indicate salient concepts; see table below.",
            ]
        )

        thematic = ["## THEMATIC ANALYSIS"]
        for idx, theme in enumerate(themes, start=1):
            heading = f"### Theme {idx}: {capitalize_first(theme.theme)}"
            thematic.append(self.theme_block(heading, theme, quotes.get(theme.theme, []), result))
            thematic.append("---")

        keywords = "\n".join(f"- {k.term}" for k in result.keywords[:REPORT_KEYWORDS])
        pairs = "\n".join(f"- {p.a} × {p.b}: {p.count}" for p in self.top_pairs(result))
        theme_list = "\n".join(
            f"{idx}. {capitalize_first(t.theme)}" for idx, t in enumerate(themes, start=1)
        )

        sections = [
            header,
            summary,
            f"## Abstract\n\n{abstract_summary(result)}",
            "\n\n".join(thematic),
            f"## Methodology\n\n{meta.methodology or DEFAULT_METHODOLOGY}",
        ]
        if meta.methodology_variations:
            sections.append(f"## Methodology variations\n\n{meta.methodology_variations}")
        sections.append(
            "\n".join(
                [
                    "## Dataset description",
                    "",
                    f"- Number of documents: {n_docs}",
                    f"- Average document length: {round(total_chars / max(1, n_docs))} characters",
                    f"- Total corpus size: {total_chars} characters",
                ]
            )
        )
        if meta.participant_demographics:
            sections.append(f"## Participant demographics\n\n{meta.participant_demographics}")
        sections += [
            "## Summary of themes\n\n"
            f"The following {len(themes)} themes were identified through the analysis:\n\n"
            f"{theme_list}",
            f"## Code frequency table\n\n{self.code_table(result)}",
            f"## Keyword list (top)\n\n{keywords or '(none)'}",
            f"## Code co-occurrence (top pairs)\n\n{pairs or '(no co-occurrence detected)'}",
            f"## Sentiment (per document)\n\n{self.sentiment_lines(result)}",
        ]
        if meta.additional_notes:
            sections.append(f"## Additional notes\n\n{meta.additional_notes}")
        sections.append(f"## Limitations\n\n{LIMITATIONS}")
        return sections


class PublicationReportTemplate(ReportTemplate):
    """Paper-style report for manuscripts and theses."""

    name = "publication"

    def sections(self, meta, result, themes, quotes, today):
        n_docs = len(result.documents)
        avg = average_sentiment(result)
        tone = sentiment_label(avg)
        theme_names = ", ".join(t.theme for t in themes) or "no recurring themes"
        methodology = meta.methodology or DEFAULT_METHODOLOGY

        title_block = [f"# {meta.title or DEFAULT_TITLE}", "", f"**{meta.author or DEFAULT_AUTHOR}**"]
        if meta.institution:
            title_block.append(f"*{meta.institution}*")
        if meta.corresponding_author:
            contact = meta.corresponding_author
            if meta.email:
                contact += f" ({meta.email})"
            title_block += ["", f"**Corresponding author**: {contact}"]
        elif meta.email:
            title_block += ["", f"**Contact**: {meta.email}"]
        title_block += ["", f"**Date**: {today.isoformat()}", "", "---"]

        abstract = "\n".join(
            [
                "## Abstract",
                "",
                "**Background:** Interview transcripts provide rich accounts of participant "
                "experience, but early-stage synthesis is time-consuming. This study applies a "
                "reproducible heuristic coding workflow to accelerate that synthesis.",
                "",
                f"**Methods:** {n_docs} transcript(s) were analysed. {methodology}",
                "",
                f"**Results:** {len(themes)} theme(s) were identified ({theme_names}). "
                f"{len(result.codes)} codes were generated and the average lexicon sentiment "
                f"was {avg:.2f} ({tone}).",
                "",
                "**Conclusions:** The identified themes offer a structured starting point for "
                "interpretive analysis and should be validated through manual coding.",
                "",
                "**Keywords:** " + "; ".join(k.term for k in result.keywords[:6]),
            ]
        )

        introduction = (
            "## 1. Introduction\n\n"
            "Qualitative interviews capture how participants describe their experiences in "
            "their own words. Systematic thematic analysis (Braun & Clarke, 2006) turns these "
            "accounts into patterned findings, yet the initial coding pass is labour-intensive. "
            "This report presents an automated first-pass analysis intended to surface "
            "salient concepts, recurring phrases and affective tone across the corpus, "
            "supporting subsequent researcher-led interpretation."
        )

        participants = meta.participant_demographics or (
            f"The corpus comprised {n_docs} interview transcript(s) "
            f"({self.corpus_chars(result)} characters in total). "
            "Respondents are identified by their order in the corpus."
        )
        methods = [
            "## 2. Methods",
            "### 2.1 Study design\n\nA qualitative descriptive design was used, with "
            "transcripts analysed as independent documents.",
            f"### 2.2 Participants\n\n{participants}",
            "### 2.3 Data analysis\n\n"
            f"{methodology}\n\n"
            "Keywords were weighted by a smoothed TF-IDF score (Salton & Buckley, 1988). "
            "Recurring two- and three-word phrases were promoted to codes, with top keywords "
            "used as codes when phrases were too sparse. Codes were cross-tabulated by "
            "document co-occurrence, sentiment was scored with an AFINN-style lexicon "
            "(Nielsen, 2011), and keywords sharing a stem were grouped into themes "
            "(Saldaña, 2016).",
        ]
        if meta.methodology_variations:
            methods.append(f"### 2.4 Methodological variations\n\n{meta.methodology_variations}")

        results = [
            "## 3. Results",
            "### 3.1 Overview\n\n"
            f"Analysis of {n_docs} transcript(s) yielded {len(themes)} theme(s), "
            f"{len(result.codes)} codes and {len(result.keywords)} scored keywords.",
        ]
        section = 2
        for theme in themes:
            heading = f"### 3.{section} {capitalize_first(theme.theme)}"
            results.append(
                self.theme_block(
                    heading, theme, quotes.get(theme.theme, []), result, blockquotes=True
                )
            )
            section += 1
        results.append(f"### 3.{section} Code frequencies\n\n{self.code_table(result)}")
        section += 1
        pair_rows = [f"| {p.a} | {p.b} | {p.count} |" for p in self.top_pairs(result)]
        results.append(
            f"### 3.{section} Code co-occurrence\n\n"
            + "\n".join(
                ["| Code A | Code B | Documents |", "|---|---|---|"]
                + (pair_rows or ["| (none) | (none) | 0 |"])
            )
        )

        if themes:
            leading = themes[0]
            principal = (
                f"The most salient theme was {leading.theme}, discussed in "
                f"{len(theme_documents(leading, result))} of {n_docs} transcript(s). "
            )
        else:
            principal = "No recurring themes met the grouping thresholds. "
        principal += (
            "Together, the themes describe the concepts participants returned to most often "
            "and indicate where deeper interpretive coding is likely to be productive."
        )
        discussion = [
            "## 4. Discussion",
            f"### 4.1 Principal findings\n\n{principal}",
            "### 4.2 Affective tone\n\n"
            f"The average lexicon sentiment across transcripts was {avg:.2f}, indicating "
            f"{tone} experiences overall. Lexicon scores do not capture negation, irony or "
            "context and should be read as indicative only.",
            f"### 4.3 Limitations\n\n{LIMITATIONS}",
        ]

        conclusions = (
            "## 5. Conclusions\n\n"
            "This automated first-pass analysis provides a transparent, reproducible overview "
            f"of the corpus, highlighting {theme_names}. Findings should be treated as "
            "hypotheses for researcher-led coding and validated against the full transcripts."
        )

        appendix_codes = ["| Code | Frequency | Example |", "|---|---|---|"] + [
            f"| {c.code} | {c.frequency} | {(c.examples[0] if c.examples else '').replace('|', '/')} |"
            for c in result.codes
        ]
        appendix_keywords = ["| Term | Score |", "|---|---|"] + [
            f"| {k.term} | {k.score:.2f} |" for k in result.keywords[:REPORT_KEYWORDS]
        ]

        sections = [
            "\n".join(title_block),
            abstract,
            introduction,
            "\n\n".join(methods),
            "\n\n".join(results),
            "\n\n".join(discussion),
            conclusions,
        ]
        if meta.additional_notes:
            sections.append(f"## Additional notes\n\n{meta.additional_notes}")
        sections += [
            "## References\n\n" + "\n\n".join(REFERENCES),
            "## Appendix A: Code list\n\n" + "\n".join(appendix_codes),
            "## Appendix B: Keyword list\n\n" + "\n".join(appendix_keywords),
            f"## Appendix C: Sentiment per document\n\n{self.sentiment_lines(result)}",
        ]
        return sections


# ============================================================================
# ENTRY POINT
# ============================================================================


def get_report_template(publication_format: bool = False) -> ReportTemplate:
    if publication_format:
        return PublicationReportTemplate()
    return StandardReportTemplate()


def build_markdown_report(
    meta: ReportMeta, result: AnalysisResult, today: Optional[date] = None
) -> str:
    """
    Render the analysis as a Markdown report.

    Args:
        meta: Report metadata (title, author, publication_format, ...)
        result: Corpus analysis
        today: Report date (default: current date)

    Returns:
        Markdown document
    """
    template = get_report_template(meta.publication_format)
    logger.debug(
        "Building markdown report",
        template=template.name,
        documents=len(result.documents),
        themes=len(result.themes),
    )
    return template.render(meta, result, today or date.today())
