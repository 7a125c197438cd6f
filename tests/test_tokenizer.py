"""Tests for tokenization: pure functions, zero I/O."""
from __future__ import annotations

from plagcheck.core.tokenizer import DEFAULT_STOPWORDS, tokenize


class TestTokenize:
    def test_possessive_apostrophe_kept(self) -> None:
        counts, total = tokenize("Cat's cat, dog!")
        assert counts == {"cat's": 1, "cat": 1, "dog": 1}
        assert total == 3

    def test_first_occurrence_order(self) -> None:
        counts, _ = tokenize("Cat's cat, dog!")
        assert list(counts) == ["cat's", "cat", "dog"]

    def test_empty_text(self) -> None:
        assert tokenize("") == ({}, 0)

    def test_punctuation_only(self) -> None:
        assert tokenize("... !!! 123 ---") == ({}, 0)

    def test_case_folded(self) -> None:
        counts, total = tokenize("DOG Dog dog")
        assert counts == {"dog": 3}
        assert total == 3

    def test_contraction_is_one_token(self) -> None:
        counts, _ = tokenize("I don't know")
        assert counts == {"i": 1, "don't": 1, "know": 1}

    def test_trailing_apostrophe_excluded(self) -> None:
        counts, _ = tokenize("the dogs' bowls")
        assert "dogs" in counts
        assert "dogs'" not in counts

    def test_leading_apostrophe_excluded(self) -> None:
        counts, _ = tokenize("'tis fine")
        assert counts == {"tis": 1, "fine": 1}

    def test_digits_and_underscores_split_tokens(self) -> None:
        counts, _ = tokenize("abc123def foo_bar")
        assert counts == {"abc": 1, "def": 1, "foo": 1, "bar": 1}

    def test_numeric_symbols_are_separators(self) -> None:
        assert tokenize("x² ½ ①") == ({"x": 1}, 1)

    def test_numeric_symbol_splits_word(self) -> None:
        counts, _ = tokenize("aⅫb don't")
        assert counts == {"a": 1, "b": 1, "don't": 1}

    def test_unicode_letters(self) -> None:
        counts, _ = tokenize("Café naïve Ελληνικά")
        assert counts == {"café": 1, "naïve": 1, "ελληνικά": 1}


class TestStopwords:
    def test_stopwords_dropped_from_counts_and_total(self) -> None:
        counts, total = tokenize("The cat and the hat", DEFAULT_STOPWORDS)
        assert counts == {"cat": 1, "hat": 1}
        assert total == 2

    def test_stopwords_matched_after_lowercasing(self) -> None:
        counts, _ = tokenize("THE Cat", {"the"})
        assert counts == {"cat": 1}

    def test_stopword_match_is_exact(self) -> None:
        counts, _ = tokenize("theory there the", {"the"})
        assert counts == {"theory": 1, "there": 1}

    def test_none_keeps_everything(self) -> None:
        counts, total = tokenize("the cat", None)
        assert counts == {"the": 1, "cat": 1}
        assert total == 2

    def test_all_stopwords_yields_empty(self) -> None:
        assert tokenize("the and of", DEFAULT_STOPWORDS) == ({}, 0)

    def test_default_list(self) -> None:
        assert len(DEFAULT_STOPWORDS) == 24
        assert {"the", "which", "were"} <= DEFAULT_STOPWORDS


def test_deterministic() -> None:
    text = "Lorem ipsum dolor sit amet, lorem ipsum."
    assert tokenize(text, {"sit"}) == tokenize(text, {"sit"})
