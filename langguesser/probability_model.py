#!/usr/bin/env python3
"""
Probability models: conditional n-gram probabilities of one language.

Unigram probabilities are relative frequencies. Longer n-grams get the
chain-rule estimate P(last symbol | prefix) = count(ngram) / count(prefix).

Models are persisted as plain text, one ``<ngram>\\t<probability>`` record
per line. Tab, newline, carriage return and backslash inside an n-gram are
backslash-escaped; for alphabets without control characters the file is the
plain record format.
"""

import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from langguesser.count_model import CountModel
from langguesser.errors import CountModelError, ProbabilityModelError
from langguesser.ngram_model import NGramCounts

MODEL_SUFFIX = ".model"

_ESCAPES = {'\\': '\\\\', '\t': '\\t', '\n': '\\n', '\r': '\\r'}
_UNESCAPES = {v: k for k, v in _ESCAPES.items()}
_ESCAPE_RE = re.compile(r'[\\\t\n\r]')
_UNESCAPE_RE = re.compile(r'\\[\\tnr]')


def escape_ngram(ngram: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], ngram)


def unescape_ngram(field: str) -> str:
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES[m.group(0)], field)


class ProbabilityModel:
    """
    Mapping of n-grams to their estimated probability, plus a language name.

    Usage:
        >>> model = ProbabilityModel.from_counts("english", count_model)
        >>> model.get("th")
        0.27...
        >>> model.write_to_file("data/models/alphanumeric/english.model")
        >>> ProbabilityModel.read_from_file("data/models/alphanumeric/english.model").name
        'english'
    """

    def __init__(self, name: str, model: Optional[Dict[str, float]] = None):
        self.name = name
        self._model: Dict[str, float] = model if model is not None else {}

    @classmethod
    def from_name(cls, name: str) -> "ProbabilityModel":
        """Create an empty model."""
        return cls(name)

    @classmethod
    def from_counts(cls, name: str, count_model: CountModel) -> "ProbabilityModel":
        """Estimate unigram and chain-rule probabilities from ``count_model``."""
        model = cls(name)
        model.add_unigram_probabilities(count_model)
        model.add_ngram_probabilities(count_model)
        return model

    # ========================================================================
    # Estimation
    # ========================================================================

    def add_unigram_probabilities(self, count_model: CountModel):
        """
        Add unigram probabilities: P(u) = count(u) / total unigram count.

        Raises:
            ProbabilityModelError: If there are no unigram counts
        """
        try:
            unigram_counts = count_model.get_ngram_model(1)
        except CountModelError as e:
            raise ProbabilityModelError(f"No unigram model found: {e}") from e

        total = unigram_counts.total_count()
        if total <= 0.0:
            raise ProbabilityModelError(
                f"Model '{self.name}' has no unigram counts to estimate from"
            )

        for ngram, count in unigram_counts.items():
            self._model[ngram] = count / total

    def add_ngram_probabilities(self, count_model: CountModel):
        """Add chain-rule probabilities for every length above 1."""
        for prefix_counts, ngram_counts in count_model.adjacent_pairs():
            self._add_conditional_probabilities(prefix_counts, ngram_counts)

    def _add_conditional_probabilities(
        self,
        prefix_counts: NGramCounts,
        ngram_counts: NGramCounts
    ):
        # Every symbol is a single character, so the prefix drops the last one
        for ngram, count in ngram_counts.items():
            prefix = ngram[:-1]
            denominator = prefix_counts.get_count(prefix)
            if denominator is None:
                raise ProbabilityModelError(
                    f"Prefix model doesn't know {prefix!r} (prefix of {ngram!r})"
                )
            # An unseen prefix can only come with an unseen ngram
            self._model[ngram] = count / denominator if denominator > 0.0 else 0.0

    # ========================================================================
    # Access
    # ========================================================================

    def get(self, ngram: str) -> Optional[float]:
        return self._model.get(ngram)

    def __contains__(self, ngram: str) -> bool:
        return ngram in self._model

    def __len__(self) -> int:
        return len(self._model)

    def items(self) -> Iterator[Tuple[str, float]]:
        return iter(self._model.items())

    def as_dict(self) -> Dict[str, float]:
        return dict(self._model)

    def __eq__(self, other):
        if not isinstance(other, ProbabilityModel):
            return NotImplemented
        return self.name == other.name and self._model == other._model

    def __repr__(self):
        return f"ProbabilityModel({self.name!r}, ngrams={len(self)})"

    # ========================================================================
    # Persistence
    # ========================================================================

    def write_to_file(self, path: Union[str, Path]):
        """
        Write the model as ``<ngram>\\t<probability>`` records.

        Records are sorted by n-gram. Probabilities are written with ``repr``
        so reading them back yields identical floats.
        """
        lines = [
            f"{escape_ngram(ngram)}\t{prob!r}\n"
            for ngram, prob in sorted(self._model.items())
        ]
        try:
            with open(path, 'w', encoding='utf-8', newline='\n') as f:
                f.writelines(lines)
        except OSError as e:
            raise ProbabilityModelError(f"Can't write model to {path}: {e}") from e

    @classmethod
    def read_from_file(cls, path: Union[str, Path]) -> "ProbabilityModel":
        """
        Load a model written by ``write_to_file``.

        The model name is the file's base name without the ``.model`` suffix.

        Raises:
            ProbabilityModelError: On unreadable files or malformed records
        """
        name = parse_name_from_path(path)
        model: Dict[str, float] = {}

        try:
            with open(path, 'r', encoding='utf-8', newline='\n') as f:
                for line_number, line in enumerate(f, start=1):
                    ngram, prob = _parse_record(line, line_number, name)
                    model[ngram] = prob
        except (OSError, UnicodeDecodeError) as e:
            raise ProbabilityModelError(f"Can't read model from {path}: {e}") from e

        return cls(name, model)


def _parse_record(line: str, line_number: int, name: str) -> Tuple[str, float]:
    record = line[:-1] if line.endswith('\n') else line
    field_ngram, sep, field_prob = record.rpartition('\t')
    if not sep or not field_ngram:
        raise ProbabilityModelError(
            f"Illformed line {line_number} in model '{name}': {record!r}"
        )
    try:
        prob = float(field_prob)
    except ValueError:
        raise ProbabilityModelError(
            f"Illformed probability on line {line_number} in model '{name}': {field_prob!r}"
        ) from None
    return unescape_ngram(field_ngram), prob


def parse_name_from_path(path: Union[str, Path]) -> str:
    """
    Derive a model name from its file path.

    Example:
        >>> parse_name_from_path("data/models/alphanumeric/english.model")
        'english'

    Raises:
        ProbabilityModelError: If the file doesn't end in ``.model``
    """
    file_name = Path(path).name
    if not file_name.endswith(MODEL_SUFFIX) or len(file_name) == len(MODEL_SUFFIX):
        raise ProbabilityModelError(f"Can't parse model name from path: {path}")
    return file_name[:-len(MODEL_SUFFIX)]


def list_model_paths(directory: Union[str, Path]) -> List[Path]:
    """
    List the ``*.model`` files directly inside ``directory``, sorted.

    Raises:
        FileNotFoundError: If ``directory`` is not a directory
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Model directory not found: {directory}")
    return sorted(
        path for path in directory.iterdir()
        if path.is_file() and path.name.endswith(MODEL_SUFFIX)
    )
