"""
Model backend: narrow load/encode interface plus the sentence-transformers implementation.
The service depends only on the protocols so tests can supply a stub backend.
"""

import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ModelHandle(Protocol):
    """Loaded model+tokenizer pair. Immutable once loaded."""

    @property
    def dimension(self) -> int:
        """Length of every vector produced by encode."""
        ...

    def encode(self, text: str) -> Any:
        """Return the pooled output for text as an array-like of floats."""
        ...


class ModelBackend(Protocol):
    """Loads a model from a directory of asset files."""

    def load_model(self, directory: Path) -> ModelHandle:
        """Parse config, weights and tokenizer files; raise on failure."""
        ...


class SentenceTransformerHandle:
    """ModelHandle over a SentenceTransformer module pipeline."""

    def __init__(self, model: Any) -> None:
        self._model = model
        self._dimension = int(model.get_sentence_embedding_dimension())

    @property
    def dimension(self) -> int:
        return self._dimension

    def encode(self, text: str) -> Any:
        return self._model.encode(
            text,
            convert_to_numpy=True,
            show_progress_bar=False,
        )


class SentenceTransformerBackend:
    """
    Load a local BERT-style model directory with sentence-transformers.
    Pooling is set explicitly ("cls" = first token, "mean" = average over tokens)
    instead of relying on the library default.
    """

    def __init__(self, pooling: str = "cls", normalize: bool = False, device: str = "cpu") -> None:
        self.pooling = pooling
        self.normalize = normalize
        self.device = device

    def load_model(self, directory: Path) -> SentenceTransformerHandle:
        from sentence_transformers import SentenceTransformer, models

        transformer = models.Transformer(str(directory))
        pooling = models.Pooling(
            transformer.get_word_embedding_dimension(),
            pooling_mode=self.pooling,
        )
        modules = [transformer, pooling]
        if self.normalize:
            modules.append(models.Normalize())
        model = SentenceTransformer(modules=modules, device=self.device)
        model.eval()
        logger.info(
            "Built SentenceTransformer from %s (pooling=%s, normalize=%s, device=%s)",
            directory,
            self.pooling,
            self.normalize,
            self.device,
        )
        return SentenceTransformerHandle(model)
