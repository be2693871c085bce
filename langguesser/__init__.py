"""
langguesser: Character n-gram language models for language guessing

Builds conditional-probability n-gram models from example texts and ranks
candidate languages for an unclassified text by log-likelihood.
"""

from langguesser.symbol import Symbol, symbolize
from langguesser.alphabet import Alphabet, AlphabetType, generate_ngrams
from langguesser.text_model import TextModel
from langguesser.ngram_model import NGramCounts
from langguesser.count_model import CountModel
from langguesser.smoothing import SmoothingType, smooth
from langguesser.probability_model import ProbabilityModel
from langguesser.inferer import Inferer, UnknownNGramPolicy
from langguesser import errors

__version__ = "0.1.0"
__author__ = "Alex Towell"
__email__ = "lex@metafunctor.com"

__all__ = [
    "Symbol",
    "symbolize",
    "Alphabet",
    "AlphabetType",
    "generate_ngrams",
    "TextModel",
    "NGramCounts",
    "CountModel",
    "SmoothingType",
    "smooth",
    "ProbabilityModel",
    "Inferer",
    "UnknownNGramPolicy",
    "errors",
]
