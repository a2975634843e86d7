"""
Schemas for the AI-assisted thematic analysis.

The model is asked to answer with a JSON object of this shape. Field aliases
match the camelCase keys used in the prompt (``keyFindings``, ``respondentId``).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _AIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AIQuote(_AIModel):
    """Verbatim quote attributed to a respondent."""

    text: str = Field(..., description="Exact verbatim quote")
    respondent_id: str = Field(default="", description="e.g. 'Respondent 2'")
    context: str = Field(default="", description="Brief context explanation")


class AITheme(_AIModel):
    """Theme identified by the model."""

    name: str = Field(..., description="Theme name")
    description: str = Field(default="")
    subthemes: List[str] = Field(default_factory=list)
    quotes: List[AIQuote] = Field(default_factory=list)
    prevalence: str = Field(default="", description="e.g. '3 out of 5 respondents'")
    significance: str = Field(default="", description="Relevance to the research question")


class AIPattern(_AIModel):
    """Pattern or relationship between themes."""

    name: str = Field(..., description="Pattern name")
    description: str = Field(default="")
    examples: List[str] = Field(default_factory=list)


class AIAnalysisResult(_AIModel):
    """Complete AI analysis answer."""

    themes: List[AITheme] = Field(default_factory=list)
    key_findings: List[str] = Field(default_factory=list)
    patterns: List[AIPattern] = Field(default_factory=list)
    interpretations: str = Field(default="")
    recommendations: List[str] = Field(default_factory=list)
    methodology_notes: str = Field(default="")
