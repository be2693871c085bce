#!/usr/bin/env python3
"""
Symbols: the smallest unit of text langguesser models.

A symbol is the byte group of one UTF-8 encoded character. The width of the
group is read from the high nibble of its leading byte, so text can be split
in a single forward pass without decoding it first.
"""

from dataclasses import dataclass
from typing import Iterator, Union

from langguesser.errors import TextError

# Width of a symbol indexed by the high nibble of its leading byte
CHAR_WIDTH_TABLE = (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 2, 2, 3, 4)


def char_width(byte: int) -> int:
    """
    Deduce the number of bytes of a symbol from its leading byte.

    Args:
        byte: Leading byte value (0-255)

    Returns:
        Symbol width in bytes (1-4)

    Example:
        >>> char_width(ord('a'))
        1
        >>> char_width(0xC3)
        2
        >>> char_width(0xF0)
        4
    """
    return CHAR_WIDTH_TABLE[byte >> 4]


@dataclass(frozen=True, order=True)
class Symbol:
    """
    Immutable byte group representing one character.

    Symbols compare, hash and sort by their byte content.
    """

    data: bytes

    @classmethod
    def from_str(cls, text: str) -> "Symbol":
        return cls(text.encode('utf-8'))

    @classmethod
    def from_byte(cls, byte: int) -> "Symbol":
        return cls(bytes([byte]))

    def as_str(self) -> str:
        """Decode the symbol to text."""
        try:
            return self.data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise TextError(f"Symbol {self.data!r} is not valid UTF-8: {e}") from e

    def __len__(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.as_str()


def symbolize(text: Union[str, bytes]) -> Iterator[Symbol]:
    """
    Iterate the symbols of a text, left to right.

    The iterator is lazy and can only be consumed once. A truncated or
    otherwise malformed byte group raises TextError at the position where it
    is reached.

    Args:
        text: Text as string (UTF-8 encoded first) or raw bytes

    Yields:
        One Symbol per character

    Example:
        >>> [s.as_str() for s in symbolize("añ")]
        ['a', 'ñ']
    """
    if isinstance(text, str):
        try:
            data = text.encode('utf-8')
        except UnicodeEncodeError as e:
            # Lone surrogates have no UTF-8 encoding
            raise TextError(f"Text is not encodable as UTF-8: {e}") from e
    else:
        data = bytes(text)
    length = len(data)
    idx = 0

    while idx < length:
        width = char_width(data[idx])
        offset = idx + width
        if offset > length:
            raise TextError(
                f"Truncated symbol at byte {idx}: expected {width} bytes, "
                f"got {length - idx}"
            )

        symbol = Symbol(data[idx:offset])
        # Rejects stray continuation bytes and bad trailing bytes
        symbol.as_str()
        yield symbol
        idx = offset
