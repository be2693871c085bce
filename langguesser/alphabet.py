#!/usr/bin/env python3
"""
Alphabets and n-gram universes.

An alphabet (sigma) is the fixed set of symbols a model is built over. Every
count and probability model is dense over the universe of all n-grams that
can be formed from the alphabet, which is what ``generate_ngrams`` builds.
"""

from enum import Enum
from typing import FrozenSet, Iterable, List, Optional

from langguesser.errors import TextError
from langguesser.symbol import Symbol

# Symbol used to pad the beginning and end of a text
DEFAULT_MARKER = Symbol.from_str('#')


class AlphabetType(str, Enum):
    """Available alphabet presets."""
    ALPHANUMERIC = "alphanumeric"  # 0-9, A-Z, a-z
    ASCII = "ascii"                # all 128 code points
    TEST = "test"                  # a, b, c
    UNICODE = "unicode"            # reserved, not implemented

    def symbols(self) -> FrozenSet[Symbol]:
        """Return the symbol set of this preset."""
        if self is AlphabetType.ALPHANUMERIC:
            codes = (
                list(range(ord('0'), ord('9') + 1))
                + list(range(ord('A'), ord('Z') + 1))
                + list(range(ord('a'), ord('z') + 1))
            )
        elif self is AlphabetType.ASCII:
            codes = list(range(128))
        elif self is AlphabetType.TEST:
            codes = list(range(ord('a'), ord('c') + 1))
        else:
            raise TextError(f"Alphabet '{self.value}' is not implemented")
        return frozenset(Symbol.from_byte(code) for code in codes)


class Alphabet:
    """
    Set of legal symbols plus an optional boundary marker.

    The marker, when given, is always a member of the alphabet so that padded
    n-grams are part of the universe.

    Usage:
        >>> sigma = Alphabet(AlphabetType.TEST, marker=DEFAULT_MARKER)
        >>> sigma.as_strings()
        ['#', 'a', 'b', 'c']
        >>> sorted(sigma.ngrams(2))[:3]
        ['##', '#a', '#b']
    """

    def __init__(
        self,
        alphabet_type: AlphabetType,
        marker: Optional[Symbol] = None
    ):
        self.alphabet_type = AlphabetType(alphabet_type)
        self.marker = marker

        symbols = set(self.alphabet_type.symbols())
        if marker is not None:
            symbols.add(marker)
        self._symbols: FrozenSet[Symbol] = frozenset(symbols)

    @classmethod
    def from_config(cls, alphabet_type: AlphabetType, set_marker: bool = False) -> "Alphabet":
        """Build an alphabet, using the default marker if ``set_marker`` is on."""
        return cls(alphabet_type, marker=DEFAULT_MARKER if set_marker else None)

    def contains(self, symbol: Symbol) -> bool:
        return symbol in self._symbols

    def __contains__(self, symbol: Symbol) -> bool:
        return self.contains(symbol)

    def __len__(self) -> int:
        return len(self._symbols)

    def universe(self) -> FrozenSet[Symbol]:
        """Return the legal symbol set, marker included."""
        return self._symbols

    def as_strings(self) -> List[str]:
        """Return the symbols as sorted strings."""
        return [symbol.as_str() for symbol in sorted(self._symbols)]

    def ngrams(self, ngram_length: int) -> List[str]:
        """Return the universe of all n-grams of the given length."""
        return generate_ngrams(self.as_strings(), ngram_length)

    def __repr__(self):
        marker = self.marker.as_str() if self.marker is not None else None
        return f"Alphabet({self.alphabet_type.value}, size={len(self)}, marker={marker!r})"


def generate_ngrams(unigrams: Iterable[str], ngram_length: int) -> List[str]:
    """
    Enumerate every n-gram over the given unigrams.

    Builds the cartesian closure iteratively: starting from the unigrams,
    each of the ``ngram_length - 1`` rounds extends every partial n-gram
    with every unigram. Cost is O(|unigrams| ** ngram_length).

    Args:
        unigrams: Textual symbols of the alphabet
        ngram_length: Length of the n-grams (>= 1)

    Returns:
        List of all n-grams (order unspecified)

    Raises:
        ValueError: If ngram_length < 1

    Example:
        >>> sorted(generate_ngrams(['a', 'b'], 2))
        ['aa', 'ab', 'ba', 'bb']
    """
    if ngram_length < 1:
        raise ValueError(f"ngram_length must be positive, got {ngram_length}")

    unigrams = list(unigrams)
    ngrams = list(unigrams)
    for _ in range(ngram_length - 1):
        ngrams = [ngram + unigram for ngram in ngrams for unigram in unigrams]
    return ngrams
