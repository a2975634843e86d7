"""
Bounded quote extraction for code examples.

Given a transcript and a phrase, returns a short human-readable excerpt around
the first case-insensitive occurrence of the phrase. Sentence trimming is a
best-effort string search for ``.``, ``!`` or ``?`` followed by whitespace,
not real sentence segmentation.
"""

import re

DEFAULT_WINDOW_BEFORE = 50
DEFAULT_WINDOW_AFTER = 100
DEFAULT_MAX_LENGTH = 180

# Minimum characters that must remain after a sentence end for it to be used as cut point
_MIN_TAIL = 20

_SENTENCE_BOUNDARY = re.compile(r"[.!?]\s+")

ELLIPSIS = "..."


def extract_quote(
    text: str,
    phrase: str,
    max_length: int = DEFAULT_MAX_LENGTH,
    before: int = DEFAULT_WINDOW_BEFORE,
    after: int = DEFAULT_WINDOW_AFTER,
) -> str:
    """
    Extract a sentence-aligned excerpt containing ``phrase``.

    Process:
    1. Find the phrase case-insensitively (fall back to the first
       ``max_length`` chars of the text, without ellipsis, if absent)
    2. Take ``before`` chars before and ``after`` chars after the match
    3. Start after the last sentence end that precedes the phrase within the
       first ``before`` chars of the window
    4. Stop at the first sentence end after the phrase, unless it is within
       the last 20 chars of the window
    5. Cap to ``max_length`` chars, appending an ellipsis when truncated

    Args:
        text: Original document text
        phrase: Phrase to locate (usually space-joined tokens)
        max_length: Hard cap on the excerpt length (before the ellipsis)
        before: Characters of context before the match
        after: Characters of context after the match

    Returns:
        The excerpt (may be empty only if ``text`` is empty)

    Examples:
        >>> extract_quote("Intro. Billing was confusing. Support helped a lot today.", "billing")
        'Billing was confusing.'
    """
    found = re.search(re.escape(phrase), text, re.IGNORECASE)
    if found is None:
        return text[:max_length].strip()

    # Offsets into the original text; lowercasing can change string length
    start = max(0, found.start() - before)
    end = min(len(text), found.end() + after)
    window = text[start:end]

    leading = len(window) - len(window.lstrip())
    quote = window.strip()
    phrase_start = found.start() - start - leading
    phrase_end = phrase_start + (found.end() - found.start())

    cut_start = 0
    for match in _SENTENCE_BOUNDARY.finditer(quote, 0, phrase_start):
        if match.start() < before:
            cut_start = match.end()
    if cut_start:
        quote = quote[cut_start:]
        phrase_end -= cut_start

    match = _SENTENCE_BOUNDARY.search(quote, max(phrase_end, 0))
    if match and match.start() < len(quote) - _MIN_TAIL:
        quote = quote[: match.start() + 1]

    return _cap(quote.strip(), max_length)


def _cap(quote: str, max_length: int) -> str:
    if len(quote) <= max_length:
        return quote
    return quote[:max_length].strip() + ELLIPSIS
