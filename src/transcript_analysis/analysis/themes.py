"""
Naive theme grouping.

Top keywords are reduced to a root with a fixed suffix-strip stemmer and
grouped by that root. Each retained group becomes a theme labeled with the
capitalized root.
"""

import re
from collections import defaultdict
from typing import Dict, List, Sequence

from ..models.analysis import KeywordScore, Theme
from ..version import STEMMER_VERSION

# Alternation order matters: the first alternative that matches at the end wins
_SUFFIX = re.compile(r"(ing|ed|ly|s|es|er|est|tion|sion|ness|ment)$", re.IGNORECASE)

MIN_ROOT_LENGTH = 3
THEME_TOP_KEYWORDS = 60
MAX_THEMES = 15
SINGLE_TERM_THRESHOLD = 5.0

__all__ = ["stem", "theme_label", "group_themes", "STEMMER_VERSION"]


def stem(word: str) -> str:
    """
    Strip one common English suffix.

    Examples:
        >>> stem("billing")
        'bill'
        >>> stem("Problems")
        'problem'
    """
    return _SUFFIX.sub("", word.lower(), count=1)


def theme_label(root: str) -> str:
    """
    Capitalize the first letter of each space-separated word.

    Examples:
        >>> theme_label("onboard")
        'Onboard'
        >>> theme_label("user experience")
        'User Experience'
    """
    return " ".join(part[:1].upper() + part[1:] for part in root.split(" "))


def group_themes(
    keywords: Sequence[KeywordScore],
    top_n: int = THEME_TOP_KEYWORDS,
    max_themes: int = MAX_THEMES,
    single_term_threshold: float = SINGLE_TERM_THRESHOLD,
) -> List[Theme]:
    """
    Cluster top keywords into themes by stem.

    A group is kept when it has at least two distinct terms, or a single
    term scoring above ``single_term_threshold``. Groups are ranked by mean
    keyword score.

    Args:
        keywords: Keyword scores sorted by descending score
        top_n: Number of top keywords considered
        max_themes: Cap on returned themes
        single_term_threshold: Minimum score for a one-term theme

    Returns:
        Themes sorted by descending mean score, terms by descending score
    """
    term_scores: Dict[str, float] = {}
    groups: Dict[str, Dict[str, float]] = defaultdict(dict)

    for kw in list(keywords)[:top_n]:
        term_scores.setdefault(kw.term, kw.score)
        root = stem(kw.term)
        if len(root) < MIN_ROOT_LENGTH:
            continue
        groups[root].setdefault(kw.term, kw.score)

    ranked = []
    for root, members in groups.items():
        scores = list(members.values())
        if len(members) < 2 and not scores[0] > single_term_threshold:
            continue
        mean_score = sum(scores) / len(scores)
        terms = sorted(members, key=lambda t: term_scores.get(t, 0.0), reverse=True)
        ranked.append((mean_score, Theme(theme=theme_label(root), terms=terms)))

    ranked.sort(key=lambda item: item[0], reverse=True)
    return [theme for _, theme in ranked[:max_themes]]
