import csv
from pathlib import Path
from typing import List, Tuple, Union

import pandas as pd

from ..core.logging_config import LoggerMixin
from ..core.pipeline import SimilarityReport
from ..core.threshold import to_percent
from ..core.validation import DirectoryValidator, validate_inputs

MATRIX_FILENAME = "similarity_matrix.csv"
FLAGS_FILENAME = "plagiarism_flags.txt"


def matrix_to_dataframe(report: SimilarityReport) -> pd.DataFrame:
    """Similarity matrix as percentages, labelled by document name."""
    names = report.document_names
    df = pd.DataFrame(to_percent(report.matrix), index=names, columns=names).round(2)
    df.index.name = "Document"
    return df


def flags_to_dataframe(report: SimilarityReport) -> pd.DataFrame:
    rows = [
        {"Document A": a, "Document B": b, "Similarity (%)": round(to_percent(score), 2)}
        for a, b, score in report.flagged_names()
    ]
    return pd.DataFrame(rows, columns=["Document A", "Document B", "Similarity (%)"])


def format_matrix_table(report: SimilarityReport) -> str:
    """Tab-separated console rendering of the matrix, cells as ``NN.NN%``."""
    names = report.document_names
    lines = ["\t".join(["Doc\\Doc"] + names)]
    for name, row in zip(names, report.matrix):
        lines.append("\t".join([name] + [f"{to_percent(score):.2f}%" for score in row]))
    return "\n".join(lines)


def format_flag_lines(report: SimilarityReport) -> List[str]:
    return [
        f"Plagiarism detected: {a} & {b} ({to_percent(score):.2f}%)"
        for a, b, score in report.flagged_names()
    ]


class ReportWriter(LoggerMixin):
    """Writes the similarity matrix CSV and the flag list for a report."""

    @validate_inputs(
        output_dir=lambda x: DirectoryValidator.validate_directory_path(x, must_exist=False)
    )
    def __init__(self, output_dir: Union[str, Path] = "."):
        self.output_dir = Path(output_dir)

    def write(self, report: SimilarityReport) -> Tuple[Path, Path]:
        """
        Write ``similarity_matrix.csv`` and ``plagiarism_flags.txt``.

        Document names are quoted in the CSV so commas in file names survive.

        Returns:
            Tuple of (matrix CSV path, flags text path)
        """
        with self.log_operation("write_report", document_count=len(report.documents),
                                flag_count=len(report.flags), directory=str(self.output_dir)):
            self.output_dir.mkdir(parents=True, exist_ok=True)
            matrix_path = self.output_dir / MATRIX_FILENAME
            flags_path = self.output_dir / FLAGS_FILENAME

            matrix_to_dataframe(report).to_csv(matrix_path, quoting=csv.QUOTE_NONNUMERIC, encoding='utf-8')

            lines = format_flag_lines(report)
            with open(flags_path, 'w', encoding='utf-8') as f:
                f.writelines(line + "\n" for line in lines)

            self.logger.info(f"Wrote {matrix_path} and {flags_path} ({len(lines)} flagged pairs)")
            return matrix_path, flags_path
