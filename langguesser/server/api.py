"""
FastAPI REST API for langguesser.

Serves language guesses for texts against the trained probability models.
"""

import math
from typing import Optional, List
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from langguesser.alphabet import Alphabet, AlphabetType
from langguesser.errors import InfererError, LangGuesserError, ModelDirectoryError
from langguesser.inferer import UnknownNGramPolicy
from langguesser.server.models import ModelRegistry
from langguesser.text_model import TextModel


# Global model registry
model_registry = ModelRegistry()


# Pydantic models for request/response validation
class GuessRequest(BaseModel):
    """Request body for /v1/guess endpoint."""
    text: str
    alphabet: AlphabetType = AlphabetType.ALPHANUMERIC
    ngram_length: int = Field(default=3, gt=0)
    set_marker: bool = False
    in_parallel: bool = False
    unknown_ngrams: UnknownNGramPolicy = UnknownNGramPolicy.ERROR


class Guess(BaseModel):
    """One ranked language."""
    name: str
    score: Optional[float] = None  # None for a log-likelihood of -inf


class GuessResponse(BaseModel):
    """Response body for /v1/guess endpoint."""
    object: str = "guess"
    alphabet: AlphabetType
    ngram_length: int
    guesses: List[Guess]


class ModelList(BaseModel):
    """Models available for an alphabet."""
    object: str = "list"
    alphabet: AlphabetType
    data: List[str]


app = FastAPI(
    title="langguesser API",
    description="Guess the language of a text with character n-gram models",
    version="0.1.0"
)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "langguesser API",
        "version": "0.1.0",
        "endpoints": {
            "guess": "/v1/guess",
            "models": "/v1/models",
            "reload": "/v1/models/reload",
            "health": "/health"
        }
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "models_dir": str(model_registry.models_dir),
        "loaded_models": model_registry.list_loaded(),
    }


@app.get("/v1/models", response_model=ModelList)
async def list_models(alphabet: AlphabetType = Query(AlphabetType.ALPHANUMERIC)):
    """List the models trained for an alphabet."""
    return ModelList(
        alphabet=alphabet,
        data=model_registry.list_available_models(alphabet)
    )


@app.post("/v1/models/reload", response_model=ModelList)
def reload_models(alphabet: AlphabetType = Query(AlphabetType.ALPHANUMERIC)):
    """Re-read the models of an alphabet, picking up newly trained ones."""
    try:
        models = model_registry.reload(alphabet)
    except ModelDirectoryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InfererError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ModelList(alphabet=alphabet, data=[model.name for model in models])


@app.post("/v1/guess", response_model=GuessResponse)
def guess(request: GuessRequest):
    """
    Rank the trained models of an alphabet for a text.

    Example:
        ```bash
        curl -X POST http://localhost:8000/v1/guess \\
          -H "Content-Type: application/json" \\
          -d '{"text": "Guten Morgen", "alphabet": "alphanumeric", "ngram_length": 3}'
        ```
    """
    try:
        inferer = model_registry.get_inferer(
            request.alphabet,
            request.ngram_length,
            request.unknown_ngrams
        )
    except ModelDirectoryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InfererError as e:
        # Models exist but can't be loaded
        raise HTTPException(status_code=500, detail=str(e))

    try:
        alphabet = Alphabet.from_config(request.alphabet, request.set_marker)
        text_model = TextModel.from_raw(request.text, alphabet, request.ngram_length)
        ranking = inferer.infer(text_model, in_parallel=request.in_parallel)
    except LangGuesserError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return GuessResponse(
        alphabet=request.alphabet,
        ngram_length=request.ngram_length,
        guesses=[
            Guess(name=name, score=score if math.isfinite(score) else None)
            for name, score in ranking
        ]
    )


def start_server(
    host: str = "0.0.0.0",
    port: int = 8000,
    models_dir: Optional[str] = None
):
    """
    Start the langguesser API server.

    Args:
        host: Host to bind to
        port: Port to bind to
        models_dir: Models root directory (default: data/models)
    """
    global model_registry

    if models_dir:
        model_registry = ModelRegistry(Path(models_dir))

    print(f"Serving models from {model_registry.models_dir}")
    uvicorn.run(app, host=host, port=port)


def main():
    """Entry point for langguesser-serve command."""
    import argparse

    parser = argparse.ArgumentParser(description="langguesser API Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--models-dir", help="Models root directory")

    args = parser.parse_args()

    start_server(host=args.host, port=args.port, models_dir=args.models_dir)


if __name__ == "__main__":
    main()
