#!/usr/bin/env python3
"""
Language inference over a set of probability models.

The unclassified text is split into n-grams once. Every model then scores the
same read-only n-gram list in log space, either one model after the other or
with one worker thread per model, and the models are ranked by score.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from langguesser.errors import InfererError, ModelDirectoryError, ProbabilityModelError
from langguesser.probability_model import ProbabilityModel, list_model_paths
from langguesser.text_model import TextModel

# Probability assumed for an n-gram a model doesn't know, under BACKOFF
BACKOFF_PROBABILITY = 1.0


class UnknownNGramPolicy(str, Enum):
    """What to do with an n-gram missing from a model."""
    ERROR = "error"      # scoring fails for that model
    BACKOFF = "backoff"  # n-gram contributes log2(1.0) = 0


def calculate_log_space_probability(
    model: ProbabilityModel,
    ngrams: Sequence[str],
    unknown_ngrams: UnknownNGramPolicy = UnknownNGramPolicy.ERROR
) -> float:
    """
    Log2-likelihood of ``ngrams`` under ``model``.

    The product of n-gram probabilities is taken as a sum of logs to avoid
    underflow. The result is <= 0, higher meaning more likely. An n-gram
    with probability 0 makes the score -inf.

    Raises:
        InfererError: If an n-gram is unknown and the policy is ERROR
    """
    unknown_ngrams = UnknownNGramPolicy(unknown_ngrams)
    probs = np.empty(len(ngrams), dtype=np.float64)
    for idx, ngram in enumerate(ngrams):
        prob = model.get(ngram)
        if prob is None:
            if unknown_ngrams is UnknownNGramPolicy.ERROR:
                raise InfererError(f"Model '{model.name}' doesn't know ngram: {ngram!r}")
            prob = BACKOFF_PROBABILITY
        probs[idx] = prob

    with np.errstate(divide='ignore'):
        return float(np.log2(probs).sum())


def sort_by_score(prob_table: Iterable[Tuple[str, float]]) -> List[Tuple[str, float]]:
    """Sort (name, score) pairs best first; ties are ordered by name."""
    return sorted(prob_table, key=lambda guess: (-guess[1], guess[0]))


class Inferer:
    """
    Guess the language of a text from a set of probability models.

    Usage:
        >>> inferer = Inferer.from_models_dir("data/models/alphanumeric", ngram_length=3)
        >>> text = TextModel.from_raw("Guten Morgen", sigma, 3)
        >>> inferer.infer(text, in_parallel=True)
        [('german', -41.3...), ('english', -57.9...)]
    """

    def __init__(
        self,
        models: List[ProbabilityModel],
        ngram_length: int,
        unknown_ngrams: UnknownNGramPolicy = UnknownNGramPolicy.ERROR
    ):
        """
        Args:
            models: One probability model per candidate language
            ngram_length: Length of the n-grams the text is scored with
            unknown_ngrams: Handling of n-grams a model doesn't contain
        """
        if ngram_length < 1:
            raise ValueError(f"ngram_length must be positive, got {ngram_length}")

        self.models = models
        self.ngram_length = ngram_length
        self.unknown_ngrams = UnknownNGramPolicy(unknown_ngrams)

    @classmethod
    def from_model_files(
        cls,
        model_paths: Iterable[Union[str, Path]],
        ngram_length: int,
        unknown_ngrams: UnknownNGramPolicy = UnknownNGramPolicy.ERROR
    ) -> "Inferer":
        """
        Load one probability model per path.

        Any unreadable or malformed file aborts the whole load.
        """
        models = []
        for path in model_paths:
            try:
                models.append(ProbabilityModel.read_from_file(path))
            except ProbabilityModelError as e:
                raise InfererError(f"Can't load model {path}: {e}") from e
        return cls(models, ngram_length, unknown_ngrams)

    @classmethod
    def from_models_dir(
        cls,
        directory: Union[str, Path],
        ngram_length: int,
        unknown_ngrams: UnknownNGramPolicy = UnknownNGramPolicy.ERROR
    ) -> "Inferer":
        """
        Load every ``*.model`` file directly inside ``directory``.

        Raises:
            ModelDirectoryError: If the directory is missing or holds no models
            InfererError: If a model file can't be loaded
        """
        try:
            model_paths = list_model_paths(directory)
        except OSError as e:
            raise ModelDirectoryError(f"Can't read model directory: {e}") from e

        if not model_paths:
            raise ModelDirectoryError(f"No *.model files found in {directory}")
        return cls.from_model_files(model_paths, ngram_length, unknown_ngrams)

    @property
    def model_names(self) -> List[str]:
        return [model.name for model in self.models]

    def infer(
        self,
        unclassified: TextModel,
        in_parallel: bool = False
    ) -> List[Tuple[str, float]]:
        """
        Rank the models by how likely they produced ``unclassified``.

        Args:
            unclassified: Text to classify
            in_parallel: Score with one worker thread per model

        Returns:
            (model name, log2-likelihood) pairs, best first

        Raises:
            InfererError: If scoring fails for any model
        """
        if not self.models:
            raise InfererError("No models loaded")

        ngrams = tuple(unclassified.iter_ngrams(self.ngram_length))
        if self.unknown_ngrams is UnknownNGramPolicy.BACKOFF:
            self._check_known_somewhere(ngrams)

        if in_parallel:
            prob_table = self._parallel_infer(ngrams)
        else:
            prob_table = self._successive_infer(ngrams)
        return sort_by_score(prob_table)

    def _score(self, model: ProbabilityModel, ngrams: Sequence[str]) -> Tuple[str, float]:
        return model.name, calculate_log_space_probability(model, ngrams, self.unknown_ngrams)

    def _successive_infer(self, ngrams: Sequence[str]) -> List[Tuple[str, float]]:
        return [self._score(model, ngrams) for model in self.models]

    def _parallel_infer(self, ngrams: Sequence[str]) -> List[Tuple[str, float]]:
        prob_table = []
        failures = []

        with ThreadPoolExecutor(max_workers=len(self.models)) as executor:
            futures = {
                executor.submit(self._score, model, ngrams): model.name
                for model in self.models
            }
            # All workers run to completion; failures are reported together
            for future in as_completed(futures):
                try:
                    prob_table.append(future.result())
                except Exception as e:
                    failures.append(f"{futures[future]}: {e}")

        if failures:
            raise InfererError(
                f"Scoring failed for {len(failures)} model(s): {'; '.join(sorted(failures))}"
            )
        return prob_table

    def _check_known_somewhere(self, ngrams: Sequence[str]):
        """Backoff covers n-grams unseen by a model, not ones no model knows."""
        for ngram in set(ngrams):
            if not any(ngram in model for model in self.models):
                raise InfererError(
                    f"Ngram {ngram!r} is unknown to every model; "
                    f"text and models use different alphabets"
                )

    def __repr__(self):
        return f"Inferer(models={self.model_names}, ngram_length={self.ngram_length})"
