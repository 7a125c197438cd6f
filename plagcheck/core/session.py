"""
Interactive session state.

A ``CheckerSession`` owns the loaded corpus and the current ``SessionConfig``.
Every computation passes an immutable snapshot of both to ``analyze_corpus``;
any change to either discards the cached report.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from .logging_config import LoggerMixin
from .pipeline import SessionConfig, SimilarityReport, analyze_corpus
from .text_handler import TextHandler
from .validation import CorpusValidationError, ParameterValidator

MIN_DOCUMENTS = 2


class CheckerSession(LoggerMixin):
    """Loaded files, settings and the last similarity report."""

    def __init__(self, config: Optional[SessionConfig] = None, show_progress: bool = False):
        self.config = config or SessionConfig()
        self.show_progress = show_progress
        self._corpus: Tuple[Tuple[str, str], ...] = ()
        self._loaded_files: Tuple[str, ...] = ()
        self._report: Optional[SimilarityReport] = None

    @property
    def corpus(self) -> Tuple[Tuple[str, str], ...]:
        return self._corpus

    @property
    def document_count(self) -> int:
        return len(self._corpus)

    @property
    def report(self) -> Optional[SimilarityReport]:
        """The last computed report, or None if it is stale or was never built."""
        return self._report

    def load_directory(self, dir_path: Union[str, Path]) -> int:
        """
        Replace the corpus with every .txt file under ``dir_path``.

        Returns:
            Number of documents loaded

        Raises:
            DirectoryValidationError: If ``dir_path`` is not a readable directory
        """
        handler = TextHandler(dir_path)
        corpus = handler.load_documents()
        self._corpus = tuple(corpus)
        self._loaded_files = tuple(handler.text_files)
        self._report = None
        self.logger.info(f"Loaded {len(corpus)} documents", extra={'document_count': len(corpus)})
        return len(corpus)

    def toggle_stopwords(self) -> bool:
        self.config = self.config.toggle_stopwords()
        self._report = None
        return self.config.use_stopwords

    def set_threshold_percent(self, value) -> float:
        """
        Set the flagging threshold from a 0-100 percentage.

        Returns:
            The new threshold as a fraction

        Raises:
            ParameterValidationError: If ``value`` is not a number in [0, 100]
        """
        threshold = ParameterValidator.validate_threshold(value, scale="percent")
        if threshold != self.config.threshold:
            self.config = self.config.with_threshold(threshold)
            self._report = None
        return threshold

    def _require_comparable(self):
        if len(self._corpus) < MIN_DOCUMENTS:
            raise CorpusValidationError(
                f"Load at least {MIN_DOCUMENTS} documents to compare, got {len(self._corpus)}",
                field="corpus",
                value=len(self._corpus)
            )

    def compute(self) -> SimilarityReport:
        """
        Compute (or return the cached) similarity report.

        Raises:
            CorpusValidationError: If fewer than two documents are loaded
        """
        self._require_comparable()
        if self._report is None:
            self._report = analyze_corpus(self._corpus, self.config, show_progress=self.show_progress)
        return self._report

    def export(self, output_dir: Union[str, Path] = ".") -> Tuple[Path, Path]:
        """Write the matrix CSV and flags file for the current corpus and settings."""
        from ..utils.report_writer import ReportWriter

        report = self.compute()
        return ReportWriter(output_dir).write(report)

    def list_files(self) -> List[str]:
        return list(self._loaded_files)

    def clear(self):
        self._corpus = ()
        self._loaded_files = ()
        self._report = None
