"""
Narrative helpers shared by the Markdown report templates.

Turns an AnalysisResult into report prose: representative quotes per theme,
theme descriptions, interpretations, subthemes and the abstract summary.
All helpers are read-only with respect to the result.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..analysis.sentiment import sentiment_label
from ..models.analysis import AnalysisResult, Code, Document, Theme

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_DOC_ID = re.compile(r"doc_(\d+)")

# Quote scoring
QUOTE_TOP_KEYWORDS = 30
QUOTE_IDEAL_LENGTH = 120
QUOTE_MAX_SCORED_LENGTH = 240
QUOTES_PER_THEME = 3


@dataclass(frozen=True)
class Quote:
    """A verbatim sentence attributed to a document."""

    text: str
    respondent_id: str


def split_sentences(text: str) -> List[str]:
    """
    Split text into sentences on ``.``, ``!`` or ``?`` followed by whitespace.

    Examples:
        >>> split_sentences("One.  Two?\\nThree")
        ['One.', 'Two?', 'Three']
    """
    normalized = _WHITESPACE.sub(" ", text).strip()
    if not normalized:
        return []
    return [piece.strip() for piece in _SENTENCE_SPLIT.split(normalized) if piece.strip()]


def contains_any(text: str, terms: Sequence[str]) -> bool:
    lower = text.lower()
    return any(term.lower() in lower for term in terms)


def respondent_label(doc_id: str) -> str:
    """
    Examples:
        >>> respondent_label("doc_3")
        'Respondent 3'
    """
    match = _DOC_ID.search(doc_id)
    return f"Respondent {match.group(1)}" if match else doc_id


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def theme_documents(theme: Theme, result: AnalysisResult) -> List[Document]:
    """Documents mentioning at least one of the theme's terms."""
    return [doc for doc in result.documents if contains_any(doc.text, theme.terms)]


def theme_codes(theme: Theme, result: AnalysisResult) -> List[Code]:
    """Codes whose label contains one of the theme's terms."""
    return [c for c in result.codes if contains_any(c.code, theme.terms)]


def average_sentiment(result: AnalysisResult) -> float:
    return sum(s.score for s in result.sentiment) / max(1, len(result.sentiment))


def theme_quotables(
    result: AnalysisResult, per_theme: int = QUOTES_PER_THEME
) -> Dict[str, List[Quote]]:
    """
    Pick representative sentences for every theme.

    Each sentence mentioning a theme term scores 2 points per theme term,
    1 point per top-30 keyword, and up to 1 point for being close to 120
    characters long. The best ``per_theme`` distinct sentences are kept.

    Args:
        result: Corpus analysis
        per_theme: Quotes kept per theme

    Returns:
        Mapping theme label -> quotes (themes without matches are omitted)
    """
    top_keywords = [k.term.lower() for k in result.keywords[:QUOTE_TOP_KEYWORDS]]
    sentences_by_doc = [(doc.id, split_sentences(doc.text)) for doc in result.documents]

    quotables: Dict[str, List[Quote]] = {}
    for theme in result.themes:
        scored = []
        for doc_id, sentences in sentences_by_doc:
            for sentence in sentences:
                if not contains_any(sentence, theme.terms):
                    continue
                lower = sentence.lower()
                score = 2.0 * sum(1 for t in theme.terms if t.lower() in lower)
                score += sum(1 for kw in top_keywords if kw in lower)
                length = min(QUOTE_MAX_SCORED_LENGTH, len(sentence))
                length_penalty = abs(QUOTE_IDEAL_LENGTH - length) / QUOTE_IDEAL_LENGTH
                score += 1 - min(1.0, length_penalty)
                scored.append((score, Quote(text=sentence, respondent_id=doc_id)))

        scored.sort(key=lambda item: item[0], reverse=True)

        unique: List[Quote] = []
        seen = set()
        for _, quote in scored:
            key = quote.text.lower()
            if key in seen:
                continue
            seen.add(key)
            unique.append(quote)
            if len(unique) >= per_theme:
                break
        if unique:
            quotables[theme.theme] = unique

    return quotables


def theme_subthemes(theme: Theme, result: AnalysisResult, limit: int = 3) -> List[str]:
    """Most frequent codes related to the theme."""
    related = sorted(theme_codes(theme, result), key=lambda c: c.frequency, reverse=True)
    return [c.code for c in related[:limit]]


def theme_description(theme: Theme, result: AnalysisResult) -> str:
    docs = theme_documents(theme, result)
    key_terms = ", ".join(theme.terms[:5])
    code_examples = ", ".join(c.code for c in theme_codes(theme, result)[:3])

    description = f"The theme of {theme.theme} emerged across {len(docs)} participant(s). "
    description += f"This theme encompasses concepts related to {key_terms}. "
    if code_examples:
        description += f"Associated codes include: {code_examples}. "
    description += (
        "Participants' narratives reveal various dimensions of this theme, "
        "as illustrated in the verbatim quotes below."
    )
    return description


def theme_sentiment(theme: Theme, result: AnalysisResult) -> float:
    """Mean sentiment of the documents mentioning the theme (0 if none)."""
    doc_ids = {doc.id for doc in theme_documents(theme, result)}
    if not doc_ids:
        return 0.0
    total = sum(s.score for s in result.sentiment if s.document_id in doc_ids)
    return total / len(doc_ids)


def theme_interpretation(theme: Theme, quotes: Sequence[Quote], result: AnalysisResult) -> str:
    label = sentiment_label(theme_sentiment(theme, result))
    if label == "mixed":
        context = "participants expressed mixed experiences regarding"
    else:
        context = f"participants expressed {label} associations with"

    respondents = len({q.respondent_id for q in quotes})
    related_terms = ", ".join(theme.terms[:3])

    return (
        f"The analysis reveals that {context} {theme.theme}. "
        f"These experiences were articulated by {respondents} respondent(s) in this sample. "
        f"The verbatim statements demonstrate how {theme.theme} manifests in participants' "
        "lived experiences. "
        f"These findings suggest that {theme.theme} represents a significant dimension of "
        "the phenomenon under investigation. "
        f"The recurrent mention of related terms (e.g., {related_terms}) across multiple "
        "transcripts indicates this theme's salience. "
        f"Further analysis may benefit from exploring how {theme.theme} interacts with "
        "other emergent themes and contextual factors."
    )


def abstract_summary(result: AnalysisResult) -> str:
    top_themes = ", ".join(t.theme for t in result.themes[:3])
    top_terms = ", ".join(k.term for k in result.keywords[:5])
    label = sentiment_label(average_sentiment(result))
    overall = "mixed" if label == "mixed" else f"overall {label}"
    return (
        f"This thematic analysis (n={len(result.documents)}) identified several key themes: "
        f"{top_themes}. "
        f"Prominent conceptual terms emerging from the data include {top_terms}. "
        f"The overall sentiment analysis indicates {overall} experiences across the sample. "
        "The following sections provide detailed thematic analysis with descriptive "
        "summaries, representative verbatim quotes, and interpretive discussion for each "
        "identified theme."
    )
