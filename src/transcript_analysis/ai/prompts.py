"""
Prompt templates for the AI-assisted thematic analysis.

Versioned prompts with:
- Qualitative-research system instructions
- Respondent-labelled transcripts
- Strict JSON output format
"""

from typing import List, Sequence, Tuple

from ..version import PROMPT_VERSION


# ============================================================================
# SYSTEM PROMPT
# ============================================================================

SYSTEM_PROMPT = """You are an expert qualitative researcher specializing in thematic analysis, grounded theory, and interpretative phenomenological analysis (IPA). Your task is to conduct a rigorous, systematic analysis of interview transcripts.

Your analysis should:
1. Identify major themes and subthemes that directly address the research question
2. Extract verbatim quotes that exemplify each theme with proper context
3. Provide prevalence information (how many respondents mentioned each theme)
4. Offer deep interpretations grounded in the data
5. Identify patterns, relationships, and insights
6. Follow established qualitative research standards (Braun & Clarke, Charmaz, Smith)

Be thorough, systematic, and academically rigorous. Ground all interpretations in the data."""


# ============================================================================
# OUTPUT FORMAT
# ============================================================================

OUTPUT_FORMAT = """{
  "themes": [
    {
      "name": "Theme Name",
      "description": "Detailed description",
      "subthemes": ["Subtheme 1", "Subtheme 2"],
      "quotes": [
        {
          "text": "Exact verbatim quote",
          "respondentId": "Respondent X",
          "context": "Brief context explanation"
        }
      ],
      "prevalence": "X out of Y respondents mentioned this",
      "significance": "Why this theme matters for the research question"
    }
  ],
  "keyFindings": ["Finding 1", "Finding 2"],
  "patterns": [
    {
      "name": "Pattern name",
      "description": "Pattern description",
      "examples": ["Example 1", "Example 2"]
    }
  ],
  "interpretations": "Deep interpretation paragraph(s)",
  "recommendations": ["Recommendation 1", "Recommendation 2"],
  "methodologyNotes": "Notes about the analytical approach used"
}"""

TRANSCRIPT_SEPARATOR = "\n\n---\n\n"


def respondent_ids(count: int) -> List[str]:
    """
    Examples:
        >>> respondent_ids(2)
        ['Respondent 1', 'Respondent 2']
    """
    return [f"Respondent {i}" for i in range(1, count + 1)]


def format_transcripts(transcripts: Sequence[str]) -> str:
    """Label transcripts as '### Respondent N' blocks separated by rules."""
    blocks = [
        f"### {rid}\n{text}" for rid, text in zip(respondent_ids(len(transcripts)), transcripts)
    ]
    return TRANSCRIPT_SEPARATOR.join(blocks)


def build_user_prompt(transcripts: Sequence[str], research_question: str) -> str:
    return f"""Research Question: {research_question}

Please conduct a comprehensive thematic analysis of the following interview transcripts. For each theme you identify:
1. Provide a clear name and comprehensive description
2. Identify subthemes
3. Extract 2-4 representative verbatim quotes with respondent IDs
4. Note prevalence (how many/which respondents discussed this)
5. Explain the significance of the theme in relation to the research question

After identifying themes, provide:
- Key findings that answer the research question
- Patterns and relationships between themes
- Deep interpretations of what the data reveals
- Methodological notes about the analysis
- Recommendations for future research

Interview Transcripts:

{format_transcripts(transcripts)}

Please structure your response as a JSON object with the following format:
{OUTPUT_FORMAT}"""


def build_analysis_prompt(
    transcripts: Sequence[str], research_question: str
) -> Tuple[str, str]:
    """
    Build complete analysis prompt (system + user).

    Args:
        transcripts: Cleaned transcript texts
        research_question: Research question guiding the analysis

    Returns:
        (system_prompt, user_prompt) tuple
    """
    return SYSTEM_PROMPT, build_user_prompt(transcripts, research_question)


__all__ = [
    "PROMPT_VERSION",
    "SYSTEM_PROMPT",
    "build_analysis_prompt",
    "build_user_prompt",
    "format_transcripts",
    "respondent_ids",
]
