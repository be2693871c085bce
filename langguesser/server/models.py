"""
Model registry for the langguesser server.

Loads the probability models of each alphabet directory once and keeps them
in memory for subsequent guess requests.
"""

import threading
from typing import Dict, List, Optional
from pathlib import Path

from langguesser.alphabet import AlphabetType
from langguesser.config import DEFAULT_MODELS_DIR
from langguesser.inferer import Inferer, UnknownNGramPolicy
from langguesser.probability_model import ProbabilityModel, list_model_paths, parse_name_from_path


class ModelRegistry:
    """
    Caches loaded probability models per alphabet.

    Models are read from ``<models_dir>/<alphabet>/*.model``. Loading is
    serialised so concurrent first requests read each directory once. Models
    trained after the first load are picked up by ``reload``.
    """

    def __init__(self, models_dir: Optional[Path] = None):
        """Initialize the registry."""
        self.models_dir = Path(models_dir) if models_dir else DEFAULT_MODELS_DIR
        self.models: Dict[AlphabetType, List[ProbabilityModel]] = {}
        self._lock = threading.Lock()

    def model_dir(self, alphabet: AlphabetType) -> Path:
        return self.models_dir / AlphabetType(alphabet).value

    def load_models(self, alphabet: AlphabetType) -> List[ProbabilityModel]:
        """
        Load (or return cached) models of an alphabet.

        Raises:
            InfererError: If the directory is missing, empty or holds a bad model
        """
        alphabet = AlphabetType(alphabet)
        with self._lock:
            if alphabet not in self.models:
                self.models[alphabet] = self._read_models(alphabet)
            return self.models[alphabet]

    def reload(self, alphabet: AlphabetType) -> List[ProbabilityModel]:
        """
        Re-read the models of an alphabet from disk, replacing the cache.

        On failure the previously cached models are kept.
        """
        alphabet = AlphabetType(alphabet)
        with self._lock:
            self.models[alphabet] = self._read_models(alphabet)
            return self.models[alphabet]

    def _read_models(self, alphabet: AlphabetType) -> List[ProbabilityModel]:
        # ngram_length only matters for scoring, not for loading
        return Inferer.from_models_dir(self.model_dir(alphabet), ngram_length=1).models

    def get_inferer(
        self,
        alphabet: AlphabetType,
        ngram_length: int,
        unknown_ngrams: UnknownNGramPolicy = UnknownNGramPolicy.ERROR
    ) -> Inferer:
        """Build an inferer over the cached models of an alphabet."""
        return Inferer(self.load_models(alphabet), ngram_length, unknown_ngrams)

    def list_available_models(self, alphabet: AlphabetType) -> List[str]:
        """
        List model names found on disk for an alphabet.

        Returns an empty list if the alphabet has no model directory.
        """
        try:
            paths = list_model_paths(self.model_dir(alphabet))
        except FileNotFoundError:
            return []
        return [parse_name_from_path(path) for path in paths]

    def is_loaded(self, alphabet: AlphabetType) -> bool:
        return AlphabetType(alphabet) in self.models

    def unload(self, alphabet: Optional[AlphabetType] = None) -> None:
        """Drop cached models of one alphabet, or of all."""
        with self._lock:
            if alphabet is None:
                self.models.clear()
            else:
                self.models.pop(AlphabetType(alphabet), None)

    def list_loaded(self) -> Dict[str, List[str]]:
        return {
            alphabet.value: [model.name for model in models]
            for alphabet, models in self.models.items()
        }

