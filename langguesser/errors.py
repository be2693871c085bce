#!/usr/bin/env python3
"""
Exception hierarchy for langguesser.

Every component raises its own error type. Errors coming from a lower
component are re-raised with added context (``raise ... from err``) when they
cross into the next one, so the CLI and the REST layer only ever need to
catch ``LangGuesserError``.
"""


class LangGuesserError(Exception):
    """Base class for all langguesser errors."""


class TextError(LangGuesserError):
    """Alphabet, symbolization or padding failure."""


class NGramModelError(LangGuesserError):
    """Counting against an n-gram universe that does not contain the key."""


class CountModelError(NGramModelError):
    """A count model was asked for an unknown length or failed to count."""


class SmoothingError(LangGuesserError):
    """Smoothing could not be applied to a count map."""


class ProbabilityModelError(LangGuesserError):
    """Chain-rule estimation or model file (de)serialization failed."""


class InfererError(LangGuesserError):
    """Model loading or scoring failed during inference."""


class ModelDirectoryError(InfererError):
    """A model directory is missing or holds no ``*.model`` files."""
