#!/usr/bin/env python3
"""
Smoothing methods for n-gram count maps.

Smoothing moves count mass from seen to unseen n-grams so that no n-gram of
the universe ends up with probability zero. All methods work in place on one
NGramCounts and never add or remove keys.
"""

from enum import Enum

import numpy as np

from langguesser.errors import NGramModelError, SmoothingError
from langguesser.ngram_model import NGramCounts


class SmoothingType(str, Enum):
    """Available smoothing methods."""
    NO = "no"                     # raw relative frequencies
    ADD_ONE = "add_one"           # Laplace, rescaled to the original total
    WITTEN_BELL = "witten_bell"   # one count of novelty per seen type


def no_smoothing(ngram_counts: NGramCounts):
    """Leave the counts unchanged."""


def add_one_smoothing(ngram_counts: NGramCounts):
    """
    Add-one (Laplace) smoothing.

    c* = (c + 1) * N / (N + V)

    Where N is the total count and V the vocabulary size. The N / (N + V)
    factor keeps the smoothed counts on the scale of the original ones.
    """
    counts = ngram_counts.values()
    total = counts.sum()
    vocabulary_size = len(counts)
    _write_back(ngram_counts, (counts + 1.0) * total / (total + vocabulary_size))


def witten_bell_smoothing(ngram_counts: NGramCounts):
    """
    Witten-Bell smoothing.

    With N the total count, T the number of seen types and Z the number of
    unseen types:

        seen:   c* = c * N / (N + T)
        unseen: c* = T / Z * N / (N + T)

    If nothing was seen or nothing is unseen there is no mass to move and the
    counts are left unchanged.
    """
    counts = ngram_counts.values()
    seen_mask = counts > 0.0
    seen = int(seen_mask.sum())
    unseen = len(counts) - seen
    if seen == 0 or unseen == 0:
        return

    total = counts.sum()
    norm = total / (total + seen)
    smoothed = np.where(seen_mask, counts * norm, (seen / unseen) * norm)
    _write_back(ngram_counts, smoothed)


SMOOTHING_FUNCTIONS = {
    SmoothingType.NO: no_smoothing,
    SmoothingType.ADD_ONE: add_one_smoothing,
    SmoothingType.WITTEN_BELL: witten_bell_smoothing,
}


def smooth(ngram_counts: NGramCounts, smoothing_type: SmoothingType):
    """
    Apply a smoothing method to ``ngram_counts`` in place.

    Raises:
        SmoothingError: If the method is unknown or the counts can't be updated
    """
    try:
        smoothing_fn = SMOOTHING_FUNCTIONS[SmoothingType(smoothing_type)]
    except ValueError:
        raise SmoothingError(
            f"Unknown smoothing type '{smoothing_type}'. "
            f"Available: {[t.value for t in SmoothingType]}"
        ) from None
    smoothing_fn(ngram_counts)


def _write_back(ngram_counts: NGramCounts, values: np.ndarray):
    try:
        ngram_counts.set_values(values)
    except NGramModelError as e:
        raise SmoothingError(f"Can't update smoothed counts: {e}") from e
