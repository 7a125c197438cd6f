import math
from typing import Mapping, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from .document import Document
from .idf import compute_idf
from .logging_config import LoggerMixin
from .vectorizer import vectorize_corpus
from .vocabulary import build_vocabulary


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cosine of the angle between two vectors.

    Returns 0.0 when either vector has zero norm, since no meaningful
    comparison is possible for an empty (or all-stopword) document.
    """
    norm_a = math.sqrt(float(np.dot(a, a)))
    norm_b = math.sqrt(float(np.dot(b, b)))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(a, b)) / (norm_a * norm_b)


def similarity_from_vectors(vectors: Sequence[np.ndarray], show_progress: bool = False) -> np.ndarray:
    """
    Build the symmetric cosine-similarity matrix of precomputed vectors.

    Only pairs with ``i <= j`` are evaluated; ``M[j][i]`` mirrors ``M[i][j]``.
    The diagonal goes through ``cosine_similarity`` like any other pair so
    zero vectors get 0.0 rather than 1.0.
    """
    n = len(vectors)
    matrix = np.zeros((n, n), dtype=np.float64)

    rows = tqdm(range(n), desc="Calculating Similarities", unit="doc", disable=not show_progress)
    for i in rows:
        for j in range(i, n):
            score = cosine_similarity(vectors[i], vectors[j])
            matrix[i, j] = score
            matrix[j, i] = score
    return matrix


def build_matrix(documents: Sequence[Document], vocabulary: Sequence[str],
                 idf: Mapping[str, float], show_progress: bool = False) -> np.ndarray:
    """Vectorize every document once, then score all pairs."""
    vectors = vectorize_corpus(documents, vocabulary, idf)
    return similarity_from_vectors(vectors, show_progress=show_progress)


class TfidfSimilarityCalculator(LoggerMixin):
    """
    Computes TF-IDF similarity between all documents of a corpus snapshot.

    Each call to ``compute`` rebuilds vocabulary, IDF weights and vectors from
    scratch; nothing is carried between calls.
    """

    def __init__(self, documents: Sequence[Document], show_progress: bool = False):
        """
        Args:
            documents: Tokenized documents in corpus order
            show_progress: Whether to draw a tqdm progress bar over matrix rows
        """
        self.documents = tuple(documents)
        self.show_progress = show_progress

    def compute(self) -> Tuple[Tuple[str, ...], dict, list, np.ndarray]:
        """
        Run vocabulary, IDF, vectorization and matrix construction.

        Returns:
            Tuple of (vocabulary, idf map, vectors, similarity matrix)
        """
        with self.log_operation("compute_similarity_matrix", document_count=len(self.documents)) as op:
            vocabulary = build_vocabulary(self.documents)
            idf = compute_idf(self.documents, vocabulary)
            op.extra['vocabulary_size'] = len(vocabulary)

            vectors = vectorize_corpus(self.documents, vocabulary, idf)

            empty = [d.name for d in self.documents if d.total_terms == 0]
            if empty:
                self.logger.warning(f"{len(empty)} document(s) have no retained terms: {', '.join(empty)}")

            matrix = similarity_from_vectors(vectors, show_progress=self.show_progress)
            self.logger.debug(f"Built {matrix.shape[0]}x{matrix.shape[1]} similarity matrix over {len(vocabulary)} terms")
            return vocabulary, idf, vectors, matrix
