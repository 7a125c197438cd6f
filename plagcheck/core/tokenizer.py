"""
Word tokenization for TF-IDF fingerprints.

Text is lowercased and split into runs of Unicode letters. A single
apostrophe between two letter runs is kept inside the token, so
"don't" and "cat's" are one term each.
"""

import logging
import re
from typing import AbstractSet, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# [^\W\d_] is "word character that is neither a digit nor an underscore".
# It still admits numeric characters such as "²", "½" and "①", which
# _blank_numerics turns into separators before matching.
_LETTERS = r"[^\W\d_]+"
_WORD_RUN = re.compile(_LETTERS)
TOKEN_PATTERN = re.compile(rf"{_LETTERS}(?:'{_LETTERS})?")

DEFAULT_STOPWORDS = frozenset({
    "the", "is", "in", "and", "a", "an", "to", "of", "that", "this", "it",
    "for", "on", "with", "as", "by", "are", "from", "at", "be", "or", "was",
    "were", "which",
})


def _letters_only(match) -> str:
    run = match.group()
    if run.isalpha():
        return run
    # str.isalpha() covers exactly the Unicode letter categories
    return ''.join(ch if ch.isalpha() else ' ' for ch in run)


def _blank_numerics(text: str) -> str:
    """Replace every word character that is not a letter with a space."""
    return _WORD_RUN.sub(_letters_only, text)


def tokenize(text: str, stopwords: Optional[AbstractSet[str]] = None) -> Tuple[Dict[str, int], int]:
    """
    Count the terms of ``text``.

    Args:
        text: Raw document text
        stopwords: Optional set of lowercase words to drop

    Returns:
        Tuple of (term counts in first-occurrence order, total retained tokens)
    """
    term_counts: Dict[str, int] = {}
    total_terms = 0

    for match in TOKEN_PATTERN.finditer(_blank_numerics(text.lower())):
        token = match.group()
        if stopwords and token in stopwords:
            continue
        term_counts[token] = term_counts.get(token, 0) + 1
        total_terms += 1

    logger.debug(f"Tokenized {len(text)} characters into {total_terms} tokens ({len(term_counts)} unique)")
    return term_counts, total_terms
