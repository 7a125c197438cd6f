"""TF-IDF vectorization."""

from typing import List, Mapping, Sequence

import numpy as np

from .document import Document


def vectorize(document: Document, vocabulary: Sequence[str], idf: Mapping[str, float]) -> np.ndarray:
    """
    Build the dense TF-IDF vector of ``document`` aligned to ``vocabulary``.

    The vector is not unit-normalized. Every vocabulary term must have an
    IDF entry; a missing one raises ``KeyError``.
    """
    vector = np.zeros(len(vocabulary), dtype=np.float64)
    for index, term in enumerate(vocabulary):
        weight = idf[term]
        tf = document.tf(term)
        if tf:
            vector[index] = tf * weight
    vector.flags.writeable = False
    return vector


def vectorize_corpus(documents: Sequence[Document], vocabulary: Sequence[str],
                     idf: Mapping[str, float]) -> List[np.ndarray]:
    """Vectorize each document once, preserving corpus order."""
    return [vectorize(document, vocabulary, idf) for document in documents]
