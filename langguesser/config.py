#!/usr/bin/env python3
"""
Run configuration for training and guessing.

Both configurations are pydantic models, so they validate the same way
whether they come from the command line or from a REST request.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from langguesser.alphabet import Alphabet, AlphabetType
from langguesser.inferer import UnknownNGramPolicy
from langguesser.probability_model import MODEL_SUFFIX
from langguesser.smoothing import SmoothingType

# Trained models live in DEFAULT_MODELS_DIR/<alphabet>/<name>.model
DEFAULT_MODELS_DIR = Path("data") / "models"


class BaseConfig(BaseModel):
    """Settings shared by training and guessing."""
    path: Path
    alphabet: AlphabetType
    ngram_length: int = Field(gt=0)
    set_marker: bool = False
    models_dir: Path = DEFAULT_MODELS_DIR

    @property
    def model_dir(self) -> Path:
        """Directory holding the models of this alphabet."""
        return self.models_dir / self.alphabet.value

    def build_alphabet(self) -> Alphabet:
        return Alphabet.from_config(self.alphabet, self.set_marker)


class ModelConfig(BaseConfig):
    """Settings for building a probability model from a training text."""
    model_config = ConfigDict(protected_namespaces=())

    model_name: str = Field(min_length=1)
    smoothing_type: SmoothingType = SmoothingType.NO

    @field_validator('model_name')
    @classmethod
    def check_model_name(cls, value: str) -> str:
        if '/' in value or '\\' in value or value.startswith('.'):
            raise ValueError(f"Model name must be a plain file name, got '{value}'")
        return value

    @property
    def outpath(self) -> Path:
        return self.model_dir / f"{self.model_name}{MODEL_SUFFIX}"


class GuessConfig(BaseConfig):
    """Settings for classifying a text against the trained models."""
    in_parallel: bool = False
    unknown_ngrams: UnknownNGramPolicy = UnknownNGramPolicy.ERROR
