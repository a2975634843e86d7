"""
Data models for the heuristic corpus analysis.

The result types are frozen so that report builders and API responses can
share one AnalysisResult without mutating it. Field aliases keep the JSON
wire shape used by existing clients (e.g. ``documentId``).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A single transcript in corpus order."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Synthesized id: doc_<1-based index>")
    text: str = Field(description="Trimmed transcript text")


class KeywordScore(BaseModel):
    """TF-IDF-like relevance of one normalized term across the corpus."""

    model_config = ConfigDict(frozen=True)

    term: str = Field(description="Normalized token (lowercase, alphanumeric)")
    score: float = Field(description="count * smoothed idf", gt=0.0)


class Code(BaseModel):
    """
    An auto-generated code.

    Either a 2/3-word phrase mined from the corpus, or (fallback path) a
    single keyword term.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Phrase or keyword used as the code label")
    frequency: int = Field(description="Phrase occurrences, or rounded keyword score", ge=0)
    examples: List[str] = Field(
        default_factory=list, description="Distinct quoted excerpts (case-insensitive)"
    )


class CooccurrencePair(BaseModel):
    """Number of documents in which two codes both appear."""

    model_config = ConfigDict(frozen=True)

    a: str = Field(description="Lexicographically smaller code")
    b: str = Field(description="Lexicographically larger code")
    count: int = Field(description="Documents containing both codes", ge=1)


class SentimentEntry(BaseModel):
    """Lexicon sentiment of one document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    document_id: str = Field(alias="documentId", description="Document id (doc_N)")
    score: float = Field(description="Lexicon sum / sqrt(token count); 0 when no tokens")


class Theme(BaseModel):
    """Keywords sharing a stem, labeled by the capitalized stem."""

    model_config = ConfigDict(frozen=True)

    theme: str = Field(description="Human-readable label derived from the stem")
    terms: List[str] = Field(description="Surface keyword forms by descending score")


class AnalysisResult(BaseModel):
    """Aggregate output of one corpus analysis."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    documents: List[Document] = Field(default_factory=list)
    keywords: List[KeywordScore] = Field(default_factory=list)
    codes: List[Code] = Field(default_factory=list)
    cooccurrence: List[CooccurrencePair] = Field(default_factory=list)
    sentiment: List[SentimentEntry] = Field(default_factory=list)
    themes: List[Theme] = Field(default_factory=list)
