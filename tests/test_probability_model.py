#!/usr/bin/env python3
"""
Tests for chain-rule probability estimation and model files.
"""

import pytest
from pathlib import Path

from langguesser.alphabet import Alphabet, AlphabetType
from langguesser.count_model import CountModel
from langguesser.errors import ProbabilityModelError
from langguesser.ngram_model import NGramCounts
from langguesser.probability_model import (
    ProbabilityModel,
    escape_ngram,
    list_model_paths,
    parse_name_from_path,
    unescape_ngram,
)
from langguesser.smoothing import SmoothingType
from langguesser.text_model import TextModel


def train(raw_text, alphabet, ngram_length, smoothing_type=SmoothingType.NO, name="test"):
    text_model = TextModel.from_raw(raw_text, alphabet, ngram_length)
    count_model = CountModel.from_alphabet(alphabet, ngram_length)
    count_model.count_from_text(text_model)
    count_model.smooth(smoothing_type)
    return ProbabilityModel.from_counts(name, count_model)


class TestUnigramProbabilities:
    """Test relative-frequency unigram estimates."""

    def test_unigram_training(self):
        sigma = Alphabet.from_config(AlphabetType.TEST)
        model = train("aabcbaa", sigma, 1)
        assert model.get('a') == pytest.approx(4.0 / 7.0)
        assert model.get('b') == pytest.approx(2.0 / 7.0)
        assert model.get('c') == pytest.approx(1.0 / 7.0)

    def test_unigram_training_with_marker(self):
        sigma = Alphabet.from_config(AlphabetType.ALPHANUMERIC, set_marker=True)
        model = train("aabcbaa\t", sigma, 1)
        assert model.get('a') == pytest.approx(4.0 / 9.0)
        assert model.get('b') == pytest.approx(2.0 / 9.0)
        assert model.get('c') == pytest.approx(1.0 / 9.0)
        assert model.get('#') == pytest.approx(2.0 / 9.0)
        assert model.get('z') == 0.0

    def test_unigrams_sum_to_one(self):
        sigma = Alphabet.from_config(AlphabetType.ALPHANUMERIC)
        model = train("Hello World 2024", sigma, 1)
        assert sum(p for _, p in model.items()) == pytest.approx(1.0)

    def test_no_unigram_counts_raises(self):
        sigma = Alphabet.from_config(AlphabetType.TEST)
        count_model = CountModel.from_alphabet(sigma, 1)
        with pytest.raises(ProbabilityModelError, match="no unigram counts"):
            ProbabilityModel.from_counts("empty", count_model)


class TestChainRule:
    """Test conditional probabilities of longer n-grams."""

    def test_padded_bigram_training(self):
        sigma = Alphabet.from_config(AlphabetType.ALPHANUMERIC, set_marker=True)
        model = train("aabcbaa\t", sigma, 2)
        assert model.get('aa') == pytest.approx(2.0 / 4.0)
        assert model.get('ab') == pytest.approx(1.0 / 4.0)
        assert model.get('ac') == 0.0
        assert model.get('a#') == pytest.approx(1.0 / 4.0)
        assert model.get('ba') == pytest.approx(1.0 / 2.0)
        assert model.get('bc') == pytest.approx(1.0 / 2.0)
        assert model.get('bb') == 0.0
        assert model.get('cb') == pytest.approx(1.0)
        assert model.get('##') == pytest.approx(2.0 / 4.0)
        assert model.get('#a') == pytest.approx(1.0 / 4.0)
        assert model.get('#b') == 0.0

    def test_unseen_prefix_gives_zero(self):
        sigma = Alphabet.from_config(AlphabetType.ALPHANUMERIC, set_marker=True)
        model = train("aabcbaa", sigma, 2)
        assert model.get('zq') == 0.0

    def test_normalization_per_prefix(self):
        """Probabilities sharing a seen prefix sum to one without smoothing."""
        sigma = Alphabet.from_config(AlphabetType.TEST, set_marker=True)
        model = train("aabcbaacab", sigma, 2)
        for prefix in ('a', 'b', 'c'):
            total = sum(model.get(prefix + symbol) for symbol in sigma.as_strings())
            assert total == pytest.approx(1.0)

    def test_normalization_of_trigrams(self):
        sigma = Alphabet.from_config(AlphabetType.TEST, set_marker=True)
        model = train("aabcbaacab", sigma, 3)
        for prefix in ('aa', 'ab', 'bc', 'cb', 'ba'):
            total = sum(model.get(prefix + symbol) for symbol in sigma.as_strings())
            assert total == pytest.approx(1.0)

    def test_model_is_total(self):
        sigma = Alphabet.from_config(AlphabetType.TEST, set_marker=True)
        model = train("abc", sigma, 3)
        assert len(model) == 4 + 4 ** 2 + 4 ** 3
        for length in (1, 2, 3):
            assert all(ngram in model for ngram in sigma.ngrams(length))

    @pytest.mark.parametrize("smoothing_type", [SmoothingType.ADD_ONE, SmoothingType.WITTEN_BELL])
    def test_smoothing_leaves_no_zero_probability(self, smoothing_type):
        sigma = Alphabet.from_config(AlphabetType.TEST, set_marker=True)
        model = train("aabcbaa", sigma, 2, smoothing_type)
        assert model.get('bb') > 0.0
        assert model.get('cc') > 0.0
        assert all(prob > 0.0 for _, prob in model.items())

    def test_missing_prefix_raises(self):
        sigma = Alphabet.from_config(AlphabetType.TEST)
        count_model = CountModel.from_alphabet(sigma, 2)
        count_model.count_from_text(TextModel.from_raw("abc", sigma, 2))
        # Replace the unigram map with one that lacks 'c'
        count_model._ngram_models[1] = NGramCounts({"a": 1.0, "b": 1.0})
        model = ProbabilityModel.from_name("broken")
        with pytest.raises(ProbabilityModelError, match="doesn't know"):
            model.add_ngram_probabilities(count_model)


class TestModelFiles:
    """Test writing and reading model files."""

    def test_round_trip(self, tmp_path):
        sigma = Alphabet.from_config(AlphabetType.TEST, set_marker=True)
        model = train("aabcbaa", sigma, 2, SmoothingType.WITTEN_BELL, name="test")
        path = tmp_path / "test.model"
        model.write_to_file(path)

        loaded = ProbabilityModel.read_from_file(path)
        assert loaded == model
        assert loaded.name == "test"
        assert loaded.as_dict() == model.as_dict()

    def test_name_comes_from_file_name(self, tmp_path):
        model = ProbabilityModel("english", {'a': 0.5, 'b': 0.5})
        path = tmp_path / "german.model"
        model.write_to_file(path)
        assert ProbabilityModel.read_from_file(path).name == "german"

    def test_wire_format(self, tmp_path):
        model = ProbabilityModel("test", {'b': 0.25, 'a': 0.75})
        path = tmp_path / "test.model"
        model.write_to_file(path)
        assert path.read_text(encoding='utf-8') == "a\t0.75\nb\t0.25\n"

    def test_read_plain_file(self, tmp_path):
        path = tmp_path / "test.model"
        path.write_text("a\t0.13530510588511946\n#\t0.07047140931516639\n", encoding='utf-8')
        model = ProbabilityModel.read_from_file(path)
        assert model.get('a') == 0.13530510588511946
        assert model.get('#') == 0.07047140931516639

    def test_control_characters_round_trip(self, tmp_path):
        model = ProbabilityModel("ctl", {'a\tb': 0.5, '\n': 0.25, '\\': 0.125, 'x\\ny': 0.1, '\r\t': 0.0})
        path = tmp_path / "ctl.model"
        model.write_to_file(path)
        assert ProbabilityModel.read_from_file(path) == model

    def test_escape_helpers(self):
        assert escape_ngram('a\tb') == 'a\\tb'
        assert unescape_ngram(escape_ngram('\\n\n')) == '\\n\n'
        assert escape_ngram('abc') == 'abc'

    def test_missing_probability_raises(self, tmp_path):
        path = tmp_path / "bad.model"
        path.write_text("a\t0.5\nb\n", encoding='utf-8')
        with pytest.raises(ProbabilityModelError, match="line 2"):
            ProbabilityModel.read_from_file(path)

    def test_unparseable_probability_raises(self, tmp_path):
        path = tmp_path / "bad.model"
        path.write_text("a\tlikely\n", encoding='utf-8')
        with pytest.raises(ProbabilityModelError, match="probability"):
            ProbabilityModel.read_from_file(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ProbabilityModelError, match="Can't read"):
            ProbabilityModel.read_from_file(tmp_path / "missing.model")

    def test_unwritable_path_raises(self, tmp_path):
        model = ProbabilityModel("x", {'a': 1.0})
        with pytest.raises(ProbabilityModelError, match="Can't write"):
            model.write_to_file(tmp_path / "no" / "such" / "x.model")


class TestModelPaths:
    """Test model name parsing and directory listing."""

    def test_parse_name(self):
        assert parse_name_from_path("data/models/alphanumeric/english.model") == "english"
        assert parse_name_from_path("./data/test.model") == "test"
        assert parse_name_from_path(Path("test.model")) == "test"

    def test_parse_name_wrong_suffix_raises(self):
        with pytest.raises(ProbabilityModelError):
            parse_name_from_path("data/models/english.txt")
        with pytest.raises(ProbabilityModelError):
            parse_name_from_path("data/models/.model")

    def test_list_model_paths(self, tmp_path):
        (tmp_path / "b.model").write_text("a\t1.0\n")
        (tmp_path / "a.model").write_text("a\t1.0\n")
        (tmp_path / "notes.txt").write_text("ignore me")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "c.model").write_text("a\t1.0\n")

        paths = list_model_paths(tmp_path)
        assert [p.name for p in paths] == ["a.model", "b.model"]

    def test_list_missing_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list_model_paths(tmp_path / "missing")
