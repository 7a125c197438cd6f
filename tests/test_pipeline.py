"""End-to-end tests for analyze_corpus."""
from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from plagcheck.core.pipeline import SessionConfig, analyze_corpus


class TestScenario:
    def test_similarity_value(self, scenario_corpus) -> None:
        report = analyze_corpus(scenario_corpus, SessionConfig(use_stopwords=False))
        assert report.similarity("doc1.txt", "doc2.txt") == pytest.approx(0.1455, abs=1e-3)

    def test_unknown_name_raises(self, scenario_corpus) -> None:
        report = analyze_corpus(scenario_corpus, SessionConfig(use_stopwords=False))
        with pytest.raises(KeyError, match="Unknown"):
            report.similarity("doc1.txt", "missing.txt")

    def test_repeated_name_is_ambiguous(self) -> None:
        corpus = [("doc.txt", "cat dog"), ("doc.txt", "bird fish"), ("other.txt", "cat dog")]
        report = analyze_corpus(corpus, SessionConfig(use_stopwords=False))
        with pytest.raises(KeyError, match="Ambiguous"):
            report.similarity("doc.txt", "other.txt")
        assert report.matrix[0, 2] == pytest.approx(1.0)
        assert report.matrix[1, 2] == pytest.approx(0.0)

    def test_intermediate_outputs(self, scenario_corpus) -> None:
        report = analyze_corpus(scenario_corpus, SessionConfig(use_stopwords=False))
        assert report.vocabulary == ("cat", "dog", "bird")
        assert [report.idf[t] for t in report.vocabulary] == pytest.approx([1.0, 0.5945, 1.0], abs=1e-4)
        assert report.document_names == ["doc1.txt", "doc2.txt"]
        assert len(report.vectors) == 2

    def test_flagged_at_ten_percent(self, scenario_corpus) -> None:
        report = analyze_corpus(scenario_corpus, SessionConfig(use_stopwords=False, threshold=0.10))
        assert len(report.flags) == 1
        flag = report.flags[0]
        assert (flag.i, flag.j) == (0, 1)
        assert flag.score == pytest.approx(0.1455, abs=1e-3)
        assert report.flagged_names()[0][:2] == ("doc1.txt", "doc2.txt")

    def test_not_flagged_at_twenty_percent(self, scenario_corpus) -> None:
        report = analyze_corpus(scenario_corpus, SessionConfig(use_stopwords=False, threshold=0.20))
        assert report.flags == []


class TestEdgeCases:
    def test_empty_document(self) -> None:
        report = analyze_corpus([("empty.txt", ""), ("full.txt", "cat dog")])
        assert report.documents[0].term_counts == {}
        assert not report.vectors[0].any()
        assert report.matrix[0][1] == 0.0
        assert report.matrix[0][0] == 0.0

    def test_empty_corpus(self) -> None:
        report = analyze_corpus([])
        assert report.matrix.shape == (0, 0)
        assert report.vocabulary == ()
        assert report.flags == []

    def test_single_document(self) -> None:
        report = analyze_corpus([("only.txt", "some words")])
        assert report.matrix.shape == (1, 1)
        assert report.flags == []

    def test_matrix_symmetric(self) -> None:
        corpus = [(f"d{i}", text) for i, text in enumerate(
            ["the quick brown fox", "a quick brown dog", "lazy dogs sleep", "the fox sleeps"])]
        matrix = analyze_corpus(corpus).matrix
        assert np.array_equal(matrix, matrix.T)


class TestStopwordSetting:
    corpus = [("a.txt", "The cat"), ("b.txt", "the dog")]

    def test_stopwords_on_removes_shared_article(self) -> None:
        report = analyze_corpus(self.corpus, SessionConfig(use_stopwords=True))
        assert report.matrix[0][1] == 0.0
        assert "the" not in report.vocabulary

    def test_stopwords_off_keeps_shared_article(self) -> None:
        report = analyze_corpus(self.corpus, SessionConfig(use_stopwords=False))
        assert report.matrix[0][1] > 0.0

    def test_custom_stopwords(self) -> None:
        report = analyze_corpus(self.corpus, SessionConfig(stopwords=frozenset({"cat", "dog"})))
        assert report.vocabulary == ("the",)


class TestSessionConfig:
    def test_defaults(self) -> None:
        config = SessionConfig()
        assert config.use_stopwords is True
        assert config.threshold == 0.70
        assert config.threshold_percent == pytest.approx(70.0)

    def test_updates_return_new_values(self) -> None:
        config = SessionConfig()
        toggled = config.toggle_stopwords()
        assert toggled.use_stopwords is False
        assert config.use_stopwords is True
        assert config.with_threshold(0.25).threshold == 0.25
        assert config.threshold == 0.70

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            SessionConfig().threshold = 0.1  # type: ignore[misc]

    def test_active_stopwords(self) -> None:
        assert SessionConfig(use_stopwords=False).active_stopwords() is None
        assert "the" in SessionConfig().active_stopwords()


def test_report_config_recorded(scenario_corpus) -> None:
    config = SessionConfig(threshold=0.3)
    assert analyze_corpus(scenario_corpus, config).config is config


def test_custom_stopwords_normalized() -> None:
    config = SessionConfig(stopwords=["The", "CAT"])
    assert config.stopwords == frozenset({"the", "cat"})
