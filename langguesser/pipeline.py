#!/usr/bin/env python3
"""
Training and guessing pipelines.

Training: raw text -> TextModel -> CountModel -> smoothing ->
ProbabilityModel -> model file.

Guessing: raw text -> TextModel -> Inferer over all model files -> ranking.
"""

from pathlib import Path
from typing import List, Tuple, Union

from langguesser.config import GuessConfig, ModelConfig
from langguesser.count_model import CountModel
from langguesser.errors import ProbabilityModelError, TextError
from langguesser.inferer import Inferer
from langguesser.probability_model import ProbabilityModel
from langguesser.text_model import TextModel


def read_text(path: Union[str, Path]) -> bytes:
    """Read a text file as raw bytes; symbolization validates the encoding."""
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise TextError(f"Can't read text from {path}: {e}") from e


def build_model(config: ModelConfig, verbose: bool = False) -> ProbabilityModel:
    """
    Build a probability model from a training text and write it to disk.

    Args:
        config: Training settings
        verbose: Print progress

    Returns:
        The written probability model
    """
    alphabet = config.build_alphabet()
    text_model = TextModel.from_raw(read_text(config.path), alphabet, config.ngram_length)
    if verbose:
        print(f"Read {len(text_model)} symbols from {config.path} ({alphabet!r})")

    count_model = CountModel.from_alphabet(alphabet, config.ngram_length)
    if verbose:
        sizes = [
            len(count_model.get_ngram_model(length))
            for length in range(1, config.ngram_length + 1)
        ]
        print(f"Built n-gram universes of sizes {sizes}")

    count_model.count_from_text(text_model)
    count_model.smooth(config.smoothing_type)
    if verbose:
        print(f"Counted and smoothed ({config.smoothing_type.value})")

    probability_model = ProbabilityModel.from_counts(config.model_name, count_model)

    try:
        config.model_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProbabilityModelError(f"Can't create model directory {config.model_dir}: {e}") from e
    probability_model.write_to_file(config.outpath)
    if verbose:
        print(f"Wrote {len(probability_model)} probabilities to {config.outpath}")

    return probability_model


def guess_language(config: GuessConfig, verbose: bool = False) -> List[Tuple[str, float]]:
    """
    Rank the trained models of ``config.alphabet`` for a text.

    Returns:
        (language name, log2-likelihood) pairs, best first
    """
    alphabet = config.build_alphabet()
    text_model = TextModel.from_raw(read_text(config.path), alphabet, config.ngram_length)

    inferer = Inferer.from_models_dir(
        config.model_dir,
        config.ngram_length,
        unknown_ngrams=config.unknown_ngrams
    )
    if verbose:
        mode = "parallel" if config.in_parallel else "successive"
        print(f"Scoring against {len(inferer.models)} models ({mode})")

    return inferer.infer(text_model, in_parallel=config.in_parallel)
