"""
sentence-transformers backend for the grading embedding path.

Satisfies EmbeddingServiceProtocol. Loading is explicit (ModelHandle.load()
runs it in a worker thread); importing this module never imports torch.
"""
from __future__ import annotations

import importlib.util
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


class SentenceTransformerEmbeddingService:
    """
    Encodes answers with a sentence-transformers model.

    Default model is all-MiniLM-L6-v2: English, 384 dimensions, ~90MB download
    on first use (cached by the library afterwards). The library picks CUDA
    when present and the CPU otherwise.

    Example:
        >>> service = SentenceTransformerEmbeddingService()
        >>> service.is_available()
        True
        >>> service.load()
        >>> vectors = service.embed(["TCP is reliable", "UDP is connectionless"])
        >>> len(vectors[0])
        384
    """

    DEFAULT_MODEL = "all-MiniLM-L6-v2"

    BACKEND_PACKAGE = "sentence_transformers"

    def __init__(self, model_name: str | None = None, batch_size: int = 32) -> None:
        """
        Args:
            model_name: sentence-transformers model id (default all-MiniLM-L6-v2)
            batch_size: Texts per forward pass in encode()
        """
        self.model_name = model_name or self.DEFAULT_MODEL
        self.batch_size = batch_size
        self._model: SentenceTransformer | None = None

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def is_available(self) -> bool:
        """True if sentence-transformers is installed. Does not import it."""
        return importlib.util.find_spec(self.BACKEND_PACKAGE) is not None

    def load(self) -> None:
        """
        Download (first run) and load the model. Blocking; no-op when loaded.

        Raises:
            ImportError: sentence-transformers is not installed
            OSError: Download or weight-loading failure reported by the library
        """
        if self._model is not None:
            return

        logger.info(f"Loading embedding model {self.model_name}")

        # Deferred: pulls in torch
        from sentence_transformers import SentenceTransformer

        model = SentenceTransformer(self.model_name)
        logger.info(
            f"Embedding model {self.model_name} ready on {model.device} "
            f"({model.get_sentence_embedding_dimension()} dimensions)"
        )
        self._model = model

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Encode texts in one batched call.

        Returns:
            One vector per input text, in input order ([] for no texts)

        Raises:
            RuntimeError: If load() has not been called
        """
        if self._model is None:
            raise RuntimeError(f"Model '{self.model_name}' is not loaded")

        if not texts:
            return []

        matrix = self._model.encode(
            [text.strip() for text in texts],
            batch_size=self.batch_size,
            convert_to_numpy=True,
            show_progress_bar=False,
        )
        return matrix.tolist()

    def unload(self) -> None:
        """Drop the model reference so its memory can be reclaimed."""
        if self._model is not None:
            logger.info(f"Unloading embedding model {self.model_name}")
        self._model = None
