#!/usr/bin/env python3
"""
Command line interface.

    langguesser model <path> <model-name> <alphabet> <n-gram-length> [--set-marker]
                      [--smoothing-type {no,add_one,witten_bell}]
    langguesser guess <path> <alphabet> <n-gram-length> [--set-marker] [--in-parallel]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from langguesser.alphabet import AlphabetType
from langguesser.config import DEFAULT_MODELS_DIR, GuessConfig, ModelConfig
from langguesser.errors import LangGuesserError
from langguesser.inferer import UnknownNGramPolicy
from langguesser.pipeline import build_model, guess_language
from langguesser.smoothing import SmoothingType


def _add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('alphabet', choices=[t.value for t in AlphabetType],
                        help="Alphabet of the n-grams")
    parser.add_argument('ngram_length', metavar='n-gram-length', type=int,
                        help="Length of the n-grams")
    parser.add_argument('--set-marker', action='store_true',
                        help="Pad texts with boundary markers")
    parser.add_argument('--models-dir', type=Path, default=DEFAULT_MODELS_DIR,
                        help=f"Models root directory (default: {DEFAULT_MODELS_DIR})")
    parser.add_argument('-v', '--verbose', action='store_true', help="Print progress")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='langguesser',
        description="Character n-gram language models and language guessing"
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    model_parser = subparsers.add_parser('model', help="Build a language model from a text")
    model_parser.add_argument('path', type=Path, help="Training text file")
    model_parser.add_argument('model_name', metavar='model-name', help="Language name")
    _add_common_arguments(model_parser)
    model_parser.add_argument('--smoothing-type', choices=[t.value for t in SmoothingType],
                              default=SmoothingType.NO.value, help="Smoothing method")

    guess_parser = subparsers.add_parser('guess', help="Guess the language of a text")
    guess_parser.add_argument('path', type=Path, help="Text file to classify")
    _add_common_arguments(guess_parser)
    guess_parser.add_argument('--in-parallel', action='store_true',
                              help="Score with one worker per model")
    guess_parser.add_argument('--unknown-ngrams', choices=[p.value for p in UnknownNGramPolicy],
                              default=UnknownNGramPolicy.ERROR.value,
                              help="Handling of n-grams a model doesn't know")

    return parser


def run(args: argparse.Namespace):
    if args.command == 'model':
        config = ModelConfig(
            path=args.path,
            model_name=args.model_name,
            alphabet=args.alphabet,
            ngram_length=args.ngram_length,
            set_marker=args.set_marker,
            smoothing_type=args.smoothing_type,
            models_dir=args.models_dir,
        )
        model = build_model(config, verbose=args.verbose)
        print(f"Model '{model.name}' written to {config.outpath}")
    else:
        config = GuessConfig(
            path=args.path,
            alphabet=args.alphabet,
            ngram_length=args.ngram_length,
            set_marker=args.set_marker,
            in_parallel=args.in_parallel,
            unknown_ngrams=args.unknown_ngrams,
            models_dir=args.models_dir,
        )
        for name, score in guess_language(config, verbose=args.verbose):
            print(f"Guessing {name} with : {score}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the langguesser command."""
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except (LangGuesserError, OSError, ValidationError) as e:
        print(f"Application error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
