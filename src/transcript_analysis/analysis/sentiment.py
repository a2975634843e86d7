"""
Lexicon-based sentiment scoring.

Each document's score is the sum of the lexicon values of its tokens divided
by the square root of the token count, so that long transcripts are not
automatically more extreme than short ones.
"""

import math
from typing import Dict

from .tokenizer import tokenize
from ..version import LEXICON_VERSION

# AFINN-like polarity table
SENTIMENT_LEXICON: Dict[str, int] = {
    # Positive
    "good": 3, "great": 3, "excellent": 4, "amazing": 4, "love": 3, "loved": 3,
    "smooth": 2, "help": 1, "helped": 1, "helpful": 2, "easy": 2, "clear": 2,
    "fast": 2, "delighted": 3, "satisfied": 2, "happy": 3, "pleased": 2,
    "wonderful": 3, "fantastic": 4, "perfect": 3, "awesome": 3, "nice": 2,
    "better": 2, "best": 3, "fine": 1, "positive": 2, "superb": 3,
    "outstanding": 4, "brilliant": 3, "grateful": 2, "appreciate": 2,
    "enjoyed": 2,
    # Negative
    "bad": -3, "poor": -2, "terrible": -4, "awful": -4, "confusing": -2,
    "struggle": -2, "struggled": -2, "hate": -3, "difficult": -2, "issue": -1,
    "issues": -1, "bug": -2, "slow": -2, "unclear": -2, "confusingly": -2,
    "frustrating": -3, "frustration": -2, "upset": -2, "angry": -3,
    "disappointed": -2, "worried": -2, "concerned": -1, "problem": -2,
    "problems": -2, "fail": -3, "failed": -3, "failure": -3, "wrong": -2,
    "worse": -2, "worst": -3, "horrible": -4, "disgusting": -4, "annoying": -2,
    "stressed": -2,
    # Contextual
    "sad": -2, "ignored": -2, "lonely": -2, "rejected": -3, "alone": -1,
    "hard": -1, "tough": -1,
}

# Average scores beyond ±threshold are reported as positive/negative
SENTIMENT_LABEL_THRESHOLD = 0.2

__all__ = [
    "SENTIMENT_LEXICON",
    "LEXICON_VERSION",
    "sentiment_for",
    "sentiment_label",
]


def sentiment_for(text: str) -> float:
    """
    Score a document against the sentiment lexicon.

    Args:
        text: Document text

    Returns:
        Normalized lexicon score, exactly 0.0 when the text has no tokens

    Examples:
        >>> round(sentiment_for("I loved the onboarding but struggled with billing."), 3)
        0.5
    """
    tokens = tokenize(text)
    if not tokens:
        return 0.0
    total = sum(SENTIMENT_LEXICON.get(token, 0) for token in tokens)
    return total / math.sqrt(len(tokens))


def sentiment_label(score: float) -> str:
    """Map an (average) sentiment score to positive / negative / mixed."""
    if score > SENTIMENT_LABEL_THRESHOLD:
        return "positive"
    if score < -SENTIMENT_LABEL_THRESHOLD:
        return "negative"
    return "mixed"
