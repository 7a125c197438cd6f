"""Shared fixtures for plagcheck tests."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Tuple

import pytest

from plagcheck.core.document import Document


@pytest.fixture()
def scenario_corpus() -> List[Tuple[str, str]]:
    """Two-document corpus with a hand-computed similarity of ~0.1455."""
    return [("doc1.txt", "cat dog cat"), ("doc2.txt", "dog bird")]


@pytest.fixture()
def scenario_documents(scenario_corpus: List[Tuple[str, str]]) -> List[Document]:
    return [Document.from_text(name, text) for name, text in scenario_corpus]


@pytest.fixture()
def text_dir(tmp_path: Path) -> Path:
    """Directory tree with text files at two levels plus files to be ignored."""
    root = tmp_path / "corpus"
    nested = root / "nested"
    nested.mkdir(parents=True)
    (root / "doc1.txt").write_text("cat dog cat", encoding="utf-8")
    (nested / "doc2.TXT").write_text("dog bird", encoding="utf-8")
    (root / "notes.md").write_text("cat dog cat", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG")
    return root


@pytest.fixture()
def restore_root_logger() -> Iterator[None]:
    """Undo setup_logging() so handlers do not leak between tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
