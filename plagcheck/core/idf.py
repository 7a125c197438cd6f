"""Inverse document frequency weighting."""

import logging
import math
from collections import Counter
from typing import Dict, Sequence

from .document import Document

logger = logging.getLogger(__name__)


def idf_weight(corpus_size: int, document_frequency: int) -> float:
    """idf = ln(N / (1 + df)) + 1"""
    return math.log(corpus_size / (1 + document_frequency)) + 1


def compute_idf(documents: Sequence[Document], vocabulary: Sequence[str]) -> Dict[str, float]:
    """
    Compute the IDF weight of every vocabulary term.

    Args:
        documents: The full corpus snapshot
        vocabulary: Terms to weight, normally from ``build_vocabulary``

    Returns:
        Mapping of term to weight with one entry per vocabulary term
    """
    document_frequency = Counter()
    for document in documents:
        document_frequency.update(term for term, count in document.term_counts.items() if count > 0)

    corpus_size = len(documents)
    idf = {term: idf_weight(corpus_size, document_frequency[term]) for term in vocabulary}

    logger.debug(f"Computed IDF for {len(idf)} terms over {corpus_size} documents")
    return idf
