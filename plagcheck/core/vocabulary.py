"""Corpus vocabulary construction."""

import logging
from typing import Iterable, Tuple

from .document import Document

logger = logging.getLogger(__name__)


def build_vocabulary(documents: Iterable[Document]) -> Tuple[str, ...]:
    """
    Build the ordered list of unique terms of a corpus.

    Documents are visited in corpus order and each document's terms in the
    order they first occur in its text; a term is appended the first time
    it is seen. The result is identical for identical corpora.
    """
    seen = {}
    for document in documents:
        for term in document.term_counts:
            if term not in seen:
                seen[term] = len(seen)

    vocabulary = tuple(seen)
    logger.debug(f"Built vocabulary of {len(vocabulary)} terms")
    return vocabulary
