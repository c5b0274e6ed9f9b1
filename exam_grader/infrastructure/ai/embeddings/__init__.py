"""
Embedding backends.

Exports:
    - SentenceTransformerEmbeddingService: sentence-transformers implementation
"""

from .embedding_service import SentenceTransformerEmbeddingService

__all__ = ["SentenceTransformerEmbeddingService"]
