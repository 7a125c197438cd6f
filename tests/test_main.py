"""Tests for the interactive console shell."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

from main import run_shell
from plagcheck.core.pipeline import SessionConfig
from plagcheck.core.session import CheckerSession


def _scripted(answers: Iterable[str]):
    answers = iter(answers)

    def input_fn(prompt: str) -> str:
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    return input_fn


def _run(answers: List[str], tmp_path: Path, session: CheckerSession = None) -> List[str]:
    out: List[str] = []
    session = session or CheckerSession(SessionConfig(use_stopwords=False))
    run_shell(session, _scripted(answers), out.append, output_dir=str(tmp_path / "reports"))
    return out


class TestShell:
    def test_exit(self, tmp_path: Path) -> None:
        out = _run(["8"], tmp_path)
        assert out[-1] == "Exiting..."

    def test_menu_shows_settings(self, tmp_path: Path) -> None:
        out = _run(["8"], tmp_path)
        assert "Toggle stopwords (Currently OFF)" in out[0]
        assert "Current 70.00%" in out[0]

    def test_end_of_input_exits(self, tmp_path: Path) -> None:
        assert _run([], tmp_path)[-1] == "Exiting..."

    @pytest.mark.parametrize("answer", ["x", "", "9", "0"])
    def test_invalid_choice(self, tmp_path: Path, answer: str) -> None:
        assert "Invalid input!" in _run([answer, "8"], tmp_path)

    def test_full_workflow(self, tmp_path: Path, text_dir: Path) -> None:
        out = _run(["1", str(text_dir), "3", "4", "10", "5", "6", "8"], tmp_path)
        assert "Loaded 2 documents." in out
        assert "\nSimilarity Matrix (%):" in out
        table = out[out.index("\nSimilarity Matrix (%):") + 1]
        assert table.startswith("Doc\\Doc\tdoc1.txt\tdoc2.TXT")
        assert "Threshold set to 10.00%" in out
        assert any(line.startswith("Plagiarism detected: doc1.txt & doc2.TXT") for line in out)
        assert any(line.startswith("Reports generated successfully!") for line in out)
        assert any(line.endswith("doc1.txt") for line in out)
        assert (tmp_path / "reports" / "similarity_matrix.csv").exists()
        assert (tmp_path / "reports" / "plagiarism_flags.txt").exists()

    def test_toggle_stopwords(self, tmp_path: Path) -> None:
        out = _run(["2", "2", "8"], tmp_path)
        assert "Stopwords are now ON" in out
        assert "Stopwords are now OFF" in out

    def test_compute_without_documents(self, tmp_path: Path) -> None:
        out = _run(["3", "8"], tmp_path)
        assert any(line.startswith("Error: Load at least 2 documents") for line in out)

    def test_export_without_documents(self, tmp_path: Path) -> None:
        out = _run(["5", "8"], tmp_path)
        assert any(line.startswith("Error: Load at least 2 documents") for line in out)
        assert not (tmp_path / "reports").exists()

    def test_invalid_directory(self, tmp_path: Path) -> None:
        out = _run(["1", str(tmp_path / "missing"), "8"], tmp_path)
        assert any(line.startswith("Error: Directory does not exist") for line in out)

    def test_invalid_threshold_keeps_previous(self, tmp_path: Path) -> None:
        session = CheckerSession(SessionConfig(threshold=0.5))
        out = _run(["4", "250", "8"], tmp_path, session)
        assert any(line.startswith("Error: threshold must be <= 100") for line in out)
        assert session.config.threshold == 0.5

    def test_clear(self, tmp_path: Path, text_dir: Path) -> None:
        session = CheckerSession()
        out = _run(["1", str(text_dir), "7", "6", "8"], tmp_path, session)
        assert "Cleared files!" in out
        assert session.document_count == 0


def test_end_of_input_at_prompt_exits(tmp_path: Path) -> None:
    assert _run(["1"], tmp_path)[-1] == "Exiting..."
