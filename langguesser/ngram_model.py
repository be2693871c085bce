#!/usr/bin/env python3
"""
Dense n-gram count map for a single n-gram length.

Counts are floats so that smoothing can redistribute fractional mass. The key
set is fixed at construction: counting an n-gram outside the universe is an
error, never an insertion.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from langguesser.errors import NGramModelError


class NGramCounts:
    """
    Mapping of every n-gram in a universe to its occurrence count.

    Usage:
        >>> counts = NGramCounts.from_ngrams(['a', 'b', 'c'])
        >>> counts.add_ngrams(['a', 'a', 'b'])
        >>> counts.get_count('a'), counts.total_count()
        (2.0, 3.0)
    """

    def __init__(self, counts: Dict[str, float]):
        self._counts = counts

    @classmethod
    def from_ngrams(cls, ngrams: Iterable[str]) -> "NGramCounts":
        """Initialise every n-gram of the universe with count 0."""
        return cls({ngram: 0.0 for ngram in ngrams})

    def add_ngram(self, ngram: str):
        if ngram not in self._counts:
            raise NGramModelError(f"Unknown ngram: {ngram!r}")
        self._counts[ngram] += 1.0

    def add_ngrams(self, ngrams: Iterable[str]):
        for ngram in ngrams:
            self.add_ngram(ngram)

    def get_count(self, ngram: str) -> Optional[float]:
        """Return the count of ``ngram``, or None if it is not in the universe."""
        return self._counts.get(ngram)

    def __contains__(self, ngram: str) -> bool:
        return ngram in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def total_count(self) -> float:
        """Sum of all counts."""
        return float(sum(self._counts.values()))

    def vocabulary_size(self) -> int:
        """Number of n-grams in the universe."""
        return len(self._counts)

    def seen_type_count(self) -> int:
        """Number of n-grams with a count above zero."""
        return sum(1 for count in self._counts.values() if count > 0.0)

    def unseen_type_count(self) -> int:
        """Number of n-grams never seen."""
        return sum(1 for count in self._counts.values() if count == 0.0)

    def keys(self) -> List[str]:
        return list(self._counts.keys())

    def values(self) -> np.ndarray:
        """Counts as an array, in ``keys()`` order."""
        return np.fromiter(self._counts.values(), dtype=np.float64, count=len(self._counts))

    def set_values(self, values: np.ndarray):
        """
        Overwrite all counts at once, in ``keys()`` order.

        Raises:
            NGramModelError: If the number of values does not match the universe
        """
        if len(values) != len(self._counts):
            raise NGramModelError(
                f"Expected {len(self._counts)} counts, got {len(values)}"
            )
        self._counts = dict(zip(self._counts.keys(), (float(v) for v in values)))

    def items(self) -> Iterator[Tuple[str, float]]:
        return iter(self._counts.items())

    def __repr__(self):
        return f"NGramCounts(vocabulary={len(self)}, total={self.total_count()})"
