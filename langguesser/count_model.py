#!/usr/bin/env python3
"""
Count models for all n-gram lengths from 1 up to a maximum.

The probability chain rule needs the counts of an n-gram and of its prefix,
so a CountModel keeps one dense NGramCounts per length and exposes them as
successive (prefix, ngram) pairs.
"""

from typing import Dict, Iterator, Tuple

from langguesser.alphabet import Alphabet
from langguesser.errors import CountModelError
from langguesser.ngram_model import NGramCounts
from langguesser.smoothing import SmoothingType, smooth
from langguesser.text_model import TextModel


class CountModel:
    """
    Occurrence counts for n-grams of length 1..max_ngram_length.

    Usage:
        >>> sigma = Alphabet.from_config(AlphabetType.TEST)
        >>> counts = CountModel.from_alphabet(sigma, 2)
        >>> counts.count_from_text(TextModel.from_raw("aab", sigma, 2))
        >>> counts.get_ngram_model(2).get_count('aa')
        1.0
    """

    def __init__(self, max_ngram_length: int, ngram_models: Dict[int, NGramCounts]):
        self.max_ngram_length = max_ngram_length
        self._ngram_models = ngram_models

    @classmethod
    def from_alphabet(cls, alphabet: Alphabet, max_ngram_length: int) -> "CountModel":
        """
        Build zero-initialised count maps over the full n-gram universe.

        Args:
            alphabet: Alphabet the n-grams are formed from
            max_ngram_length: Largest n-gram length to count (>= 1)
        """
        if max_ngram_length < 1:
            raise CountModelError(
                f"max_ngram_length must be positive, got {max_ngram_length}"
            )

        ngram_models = {
            length: NGramCounts.from_ngrams(alphabet.ngrams(length))
            for length in range(1, max_ngram_length + 1)
        }
        return cls(max_ngram_length, ngram_models)

    def get_ngram_model(self, ngram_length: int) -> NGramCounts:
        try:
            return self._ngram_models[ngram_length]
        except KeyError:
            raise CountModelError(
                f"Can't find count model for ngram length: {ngram_length}"
            ) from None

    def count_from_text(self, text_model: TextModel):
        """
        Count the n-grams of every length in ``text_model``.

        Every n-gram is checked against its universe before any count is
        touched, so a failed call leaves the model unchanged.

        Raises:
            CountModelError: If the text yields an n-gram outside the universe
        """
        pending = []
        for length in range(1, self.max_ngram_length + 1):
            ngram_model = self.get_ngram_model(length)
            ngrams = list(text_model.iter_ngrams(length))
            unknown = next((ngram for ngram in ngrams if ngram not in ngram_model), None)
            if unknown is not None:
                raise CountModelError(
                    f"Counting {length}-grams failed, text and alphabet disagree: "
                    f"Unknown ngram: {unknown!r}"
                )
            pending.append((ngram_model, ngrams))

        for ngram_model, ngrams in pending:
            ngram_model.add_ngrams(ngrams)

    def smooth(self, smoothing_type: SmoothingType):
        """Smooth the counts of every length independently, in place."""
        for length in range(1, self.max_ngram_length + 1):
            smooth(self.get_ngram_model(length), smoothing_type)

    def adjacent_pairs(self) -> Iterator[Tuple[NGramCounts, NGramCounts]]:
        """
        Yield (length k, length k+1) count maps for k = 1..max_ngram_length-1.

        Example: (1-gram counts, 2-gram counts), (2-gram counts, 3-gram counts)
        """
        for length in range(1, self.max_ngram_length):
            yield self.get_ngram_model(length), self.get_ngram_model(length + 1)

    def __repr__(self):
        return f"CountModel(max_ngram_length={self.max_ngram_length})"
