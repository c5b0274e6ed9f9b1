"""
Protocol for embedding service.

This module defines the interface for sentence-embedding backends.
Infrastructure layer provides concrete implementations using ML models.
"""

from typing import Protocol


class EmbeddingServiceProtocol(Protocol):
    """
    Protocol for text embedding service.

    Generates vector embeddings from text using ML models (e.g., sentence-transformers).
    Used by the embedding scorer for cosine similarity between answers.

    Implementations must support:
    - Cheap availability check (is the backend library installed?)
    - Explicit, blocking model load (run in a worker thread by ModelHandle)
    - Batch embedding of a list of texts
    - Unloading to release model memory

    Example:
        >>> service = SentenceTransformerEmbeddingService()  # from infrastructure
        >>> service.is_available()
        True
        >>> service.load()
        >>> vectors = service.embed(["stack is lifo", "queue is fifo"])
        >>> len(vectors)
        2
    """

    model_name: str

    def is_available(self) -> bool:
        """Return True if the embedding backend can be used in this environment."""
        ...

    def load(self) -> None:
        """
        Load the model (blocking).

        Raises:
            Exception: Any backend failure (download, weights, device)
        """
        ...

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Generate one embedding vector per input text.

        Args:
            texts: Non-empty list of texts

        Returns:
            List of embedding vectors. Length equals len(texts).
        """
        ...

    def unload(self) -> None:
        """Release the loaded model."""
        ...
