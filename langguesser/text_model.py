#!/usr/bin/env python3
"""
Text model: an alphabet-filtered symbol sequence with optional padding.

Symbols outside the alphabet are dropped silently. If the alphabet defines a
marker, the sequence is wrapped in a confix of ``ngram_length`` marker symbols
on each side, so that start- and end-of-text statistics are captured.
"""

from typing import Iterator, List, Union

from langguesser.alphabet import Alphabet
from langguesser.errors import TextError
from langguesser.symbol import Symbol, symbolize


class TextModel:
    """
    Filtered, optionally padded symbol sequence.

    Usage:
        >>> sigma = Alphabet.from_config(AlphabetType.TEST, set_marker=True)
        >>> text = TextModel(2, sigma)
        >>> text.extend("aabcbaa")
        >>> ''.join(s.as_str() for s in text.symbols())
        '##aabcbaa##'
        >>> text.ngrams(2)[:3]
        ['##', '#a', 'aa']
    """

    def __init__(self, ngram_length: int, alphabet: Alphabet):
        if ngram_length < 1:
            raise ValueError(f"ngram_length must be positive, got {ngram_length}")

        self.ngram_length = ngram_length
        self.alphabet = alphabet
        self._symbols: List[Symbol] = []

        if alphabet.marker is not None:
            self._confix: List[Symbol] = [alphabet.marker] * ngram_length
        else:
            self._confix = []

    @classmethod
    def from_raw(
        cls,
        raw_text: Union[str, bytes],
        alphabet: Alphabet,
        ngram_length: int
    ) -> "TextModel":
        """
        Build a text model from raw text.

        Raises:
            TextError: If no symbol of the text is part of the alphabet
        """
        text_model = cls(ngram_length, alphabet)
        text_model.extend(raw_text)
        if text_model.is_empty():
            raise TextError(
                f"Text is empty after filtering with {alphabet!r}"
            )
        return text_model

    def extend(self, raw_text: Union[str, bytes]):
        """Append the alphabet-filtered symbols of ``raw_text``."""
        self._symbols.extend(
            symbol for symbol in symbolize(raw_text)
            if self.alphabet.contains(symbol)
        )

    def is_empty(self) -> bool:
        return not self._symbols

    def __len__(self) -> int:
        """Number of filtered symbols, padding excluded."""
        return len(self._symbols)

    def symbols(self) -> List[Symbol]:
        """Return the padded symbol sequence."""
        return self._confix + self._symbols + self._confix

    def iter_ngrams(self, ngram_length: int) -> Iterator[str]:
        """
        Slide a window of ``ngram_length`` symbols over the padded sequence.

        Yields ``len(padded) - ngram_length + 1`` n-grams, or none if the
        padded sequence is shorter than the window.
        """
        if ngram_length < 1:
            raise ValueError(f"ngram_length must be positive, got {ngram_length}")

        texts = [symbol.as_str() for symbol in self.symbols()]
        for idx in range(len(texts) - ngram_length + 1):
            yield ''.join(texts[idx:idx + ngram_length])

    def ngrams(self, ngram_length: int) -> List[str]:
        return list(self.iter_ngrams(ngram_length))

    def __repr__(self):
        return f"TextModel(ngram_length={self.ngram_length}, symbols={len(self)})"
