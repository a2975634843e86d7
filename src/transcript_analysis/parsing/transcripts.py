"""
Splitting and cleaning of pasted transcript text.
"""

import re
from typing import Any, Iterable, List

from ..exceptions import NoDocumentsError

# One or more blank (or whitespace-only) lines separate transcripts
_BLANK_LINES = re.compile(r"\n\s*\n")


def clean_documents(values: Iterable[Any]) -> List[str]:
    """
    Keep string items only, trimmed, dropping empties.

    Args:
        values: Raw items (e.g. a JSON array from a request body)

    Returns:
        Ordered list of non-empty trimmed strings

    Examples:
        >>> clean_documents(["  a ", "", 3, None, "b"])
        ['a', 'b']
    """
    if values is None:
        return []
    documents = []
    for value in values:
        if not isinstance(value, str):
            continue
        text = value.strip()
        if text:
            documents.append(text)
    return documents


def split_transcripts(text: str) -> List[str]:
    """
    Split pasted text into transcripts on blank-line separators.

    Examples:
        >>> split_transcripts("first answer\\n\\n\\nsecond\\nanswer\\n")
        ['first answer', 'second\\nanswer']
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return clean_documents(_BLANK_LINES.split(normalized))


def require_documents(values: Iterable[Any]) -> List[str]:
    """
    Clean ``values`` and reject an empty result.

    Raises:
        NoDocumentsError: If no non-empty string remains
    """
    documents = clean_documents(values)
    if not documents:
        raise NoDocumentsError()
    return documents
