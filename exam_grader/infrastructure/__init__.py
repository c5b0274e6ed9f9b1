"""
Infrastructure Layer - External Dependencies

Implements technical capabilities that support the Domain Layer.

Modules:
    - ai.embeddings: sentence-transformers backend (implements EmbeddingServiceProtocol)
"""
