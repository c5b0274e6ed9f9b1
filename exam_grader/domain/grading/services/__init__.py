"""
Grading Domain Services

Scoring operations on answer pairs.

This module exports:
    - normalize_text: Canonical form of an answer
    - ManualScorer: Deterministic heuristic scorer (fallback path)
    - EmbeddingScorer: Cosine similarity of sentence embeddings (AI path)
    - EmbeddingServiceProtocol: Embedding backend interface
    - ModelHandle: Lifecycle owner of the loaded model
    - ThresholdStore: Mutable cut points and stream multipliers
"""

from .text_normalizer import normalize_text
from .threshold_store import ThresholdStore
from .manual_scorer import ManualScorer, extract_keywords, find_technical_terms
from .embedding_service import EmbeddingServiceProtocol
from .model_handle import ModelHandle, ModelState
from .embedding_scorer import EmbeddingScorer, cosine_similarity

__all__ = [
    "normalize_text",
    "ThresholdStore",
    "ManualScorer",
    "extract_keywords",
    "find_technical_terms",
    "EmbeddingServiceProtocol",
    "ModelHandle",
    "ModelState",
    "EmbeddingScorer",
    "cosine_similarity",
]
