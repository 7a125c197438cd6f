"""
End-to-end similarity computation over one corpus snapshot.

``analyze_corpus`` is the engine's single entry point: it takes the corpus as
``(document_id, raw_text)`` pairs plus an immutable ``SessionConfig`` and
returns a ``SimilarityReport``. It keeps no state between calls.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .document import Document
from .similarity_matrix import TfidfSimilarityCalculator
from .threshold import Flag, flag_pairs, to_percent
from .tokenizer import DEFAULT_STOPWORDS
from .validation import ParameterValidator

logger = logging.getLogger(__name__)

Corpus = Sequence[Tuple[str, str]]


@dataclass(frozen=True)
class SessionConfig:
    """Settings that apply to one similarity computation."""

    use_stopwords: bool = True
    stopwords: AbstractSet[str] = DEFAULT_STOPWORDS
    threshold: float = 0.70

    def __post_init__(self):
        object.__setattr__(self, 'stopwords', ParameterValidator.validate_stopwords(self.stopwords))

    def active_stopwords(self) -> Optional[AbstractSet[str]]:
        return self.stopwords if self.use_stopwords else None

    @property
    def threshold_percent(self) -> float:
        return to_percent(self.threshold)

    def with_threshold(self, threshold: float) -> "SessionConfig":
        return replace(self, threshold=threshold)

    def toggle_stopwords(self) -> "SessionConfig":
        return replace(self, use_stopwords=not self.use_stopwords)


@dataclass(frozen=True, eq=False)
class SimilarityReport:
    """Everything one computation produced, indexed by corpus position."""

    documents: Tuple[Document, ...]
    vocabulary: Tuple[str, ...]
    idf: Dict[str, float]
    vectors: List[np.ndarray]
    matrix: np.ndarray
    flags: List[Flag]
    config: SessionConfig = field(default_factory=SessionConfig)

    @property
    def document_names(self) -> List[str]:
        return [document.name for document in self.documents]

    def flagged_names(self) -> List[Tuple[str, str, float]]:
        """Flags with document names in place of indices."""
        return [(self.documents[f.i].name, self.documents[f.j].name, f.score) for f in self.flags]

    def index_of(self, name: str) -> int:
        """
        Corpus position of the document called ``name``.

        Document names are file base names, so two files in different
        subdirectories can share one. Such a name cannot identify a single
        row and raises ``KeyError`` just like an unknown name; use the
        matrix indices directly instead.
        """
        positions = [i for i, document in enumerate(self.documents) if document.name == name]
        if len(positions) != 1:
            problem = "Unknown" if not positions else "Ambiguous"
            raise KeyError(f"{problem} document name: {name!r}")
        return positions[0]

    def similarity(self, first: str, second: str) -> float:
        """Look up the score of two documents by name."""
        return float(self.matrix[self.index_of(first), self.index_of(second)])


def tokenize_corpus(corpus: Corpus, config: SessionConfig) -> Tuple[Document, ...]:
    stopwords = config.active_stopwords()
    return tuple(Document.from_text(name, text, stopwords) for name, text in corpus)


def analyze_corpus(corpus: Corpus, config: Optional[SessionConfig] = None,
                   show_progress: bool = False) -> SimilarityReport:
    """
    Score every document pair of ``corpus``.

    Args:
        corpus: Ordered ``(document_id, raw_text)`` pairs
        config: Stopword and threshold settings; defaults to ``SessionConfig()``
        show_progress: Whether to show a tqdm progress bar

    Returns:
        SimilarityReport with vocabulary, IDF map, vectors, matrix and flags
    """
    config = config or SessionConfig()
    documents = tokenize_corpus(corpus, config)

    calculator = TfidfSimilarityCalculator(documents, show_progress=show_progress)
    vocabulary, idf, vectors, matrix = calculator.compute()
    flags = flag_pairs(matrix, config.threshold)

    logger.info(
        f"Analyzed {len(documents)} documents: {len(flags)} pair(s) at or above {config.threshold_percent:.2f}%",
        extra={'document_count': len(documents), 'vocabulary_size': len(vocabulary),
               'flag_count': len(flags), 'threshold': config.threshold}
    )
    return SimilarityReport(
        documents=documents,
        vocabulary=vocabulary,
        idf=idf,
        vectors=vectors,
        matrix=matrix,
        flags=flags,
        config=config,
    )
