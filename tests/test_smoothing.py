#!/usr/bin/env python3
"""
Tests for smoothing of n-gram count maps.
"""

import pytest

from langguesser.alphabet import Alphabet, AlphabetType
from langguesser.count_model import CountModel
from langguesser.errors import SmoothingError
from langguesser.ngram_model import NGramCounts
from langguesser.smoothing import (
    SmoothingType,
    add_one_smoothing,
    smooth,
    witten_bell_smoothing,
)
from langguesser.text_model import TextModel


@pytest.fixture
def bigram_counts():
    """Bigrams of 'aaacbba' over {a, b, c}: aa=2, ac=cb=bb=ba=1, 4 unseen."""
    sigma = Alphabet.from_config(AlphabetType.TEST)
    model = CountModel.from_alphabet(sigma, 2)
    model.count_from_text(TextModel.from_raw("aaacbba", sigma, 2))
    return model.get_ngram_model(2)


class TestNoSmoothing:
    """Test the identity policy."""

    def test_counts_unchanged(self, bigram_counts):
        before = dict(bigram_counts.items())
        smooth(bigram_counts, SmoothingType.NO)
        assert dict(bigram_counts.items()) == before


class TestAddOneSmoothing:
    """Test rescaled Laplace smoothing."""

    def test_counts(self, bigram_counts):
        """c* = (c + 1) * N / (N + V) with N = 6, V = 9."""
        add_one_smoothing(bigram_counts)
        assert bigram_counts.get_count('aa') == pytest.approx(1.2)
        assert bigram_counts.get_count('ac') == pytest.approx(0.8)
        assert bigram_counts.get_count('bb') == pytest.approx(0.8)
        assert bigram_counts.get_count('ab') == pytest.approx(0.4)
        assert bigram_counts.get_count('cc') == pytest.approx(0.4)

    def test_total_preserved(self, bigram_counts):
        add_one_smoothing(bigram_counts)
        assert bigram_counts.total_count() == pytest.approx(6.0)

    def test_no_zero_counts(self, bigram_counts):
        smooth(bigram_counts, SmoothingType.ADD_ONE)
        assert bigram_counts.unseen_type_count() == 0

    def test_keys_preserved(self, bigram_counts):
        keys = bigram_counts.keys()
        smooth(bigram_counts, SmoothingType.ADD_ONE)
        assert bigram_counts.keys() == keys


class TestWittenBellSmoothing:
    """Test Witten-Bell smoothing."""

    def test_counts(self, bigram_counts):
        """N = 6, T = 5 seen, Z = 4 unseen, norm = 6 / 11."""
        witten_bell_smoothing(bigram_counts)
        norm = 6.0 / 11.0
        assert bigram_counts.get_count('aa') == pytest.approx(2.0 * norm)
        assert bigram_counts.get_count('ba') == pytest.approx(1.0 * norm)
        assert bigram_counts.get_count('ab') == pytest.approx(5.0 / 4.0 * norm)
        assert bigram_counts.get_count('cc') == pytest.approx(5.0 / 4.0 * norm)

    def test_total_preserved(self, bigram_counts):
        witten_bell_smoothing(bigram_counts)
        assert bigram_counts.total_count() == pytest.approx(6.0)

    def test_noop_when_nothing_seen(self):
        counts = NGramCounts.from_ngrams(['a', 'b', 'c'])
        smooth(counts, SmoothingType.WITTEN_BELL)
        assert dict(counts.items()) == {'a': 0.0, 'b': 0.0, 'c': 0.0}

    def test_noop_when_nothing_unseen(self):
        counts = NGramCounts.from_ngrams(['a', 'b'])
        counts.add_ngrams(['a', 'a', 'b'])
        smooth(counts, SmoothingType.WITTEN_BELL)
        assert dict(counts.items()) == {'a': 2.0, 'b': 1.0}


class TestSmoothDispatch:
    """Test policy dispatch."""

    def test_accepts_names(self, bigram_counts):
        smooth(bigram_counts, "add_one")
        assert bigram_counts.unseen_type_count() == 0

    def test_unknown_type_raises(self, bigram_counts):
        with pytest.raises(SmoothingError, match="Unknown smoothing type"):
            smooth(bigram_counts, "kneser_ney")

    def test_count_model_smooths_every_length(self):
        sigma = Alphabet.from_config(AlphabetType.TEST, set_marker=True)
        model = CountModel.from_alphabet(sigma, 3)
        model.count_from_text(TextModel.from_raw("abab", sigma, 3))
        model.smooth(SmoothingType.ADD_ONE)
        for length in (1, 2, 3):
            assert model.get_ngram_model(length).unseen_type_count() == 0
