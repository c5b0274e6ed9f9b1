"""
Shared Domain

Cross-subdomain concepts. Currently the exception hierarchy only.
"""

from .exceptions import (
    BackendUnavailableError,
    DomainException,
    EmbeddingBackendError,
    EvaluationError,
    InvalidInputError,
    InvalidThresholdsError,
    ModelNotLoadedError,
)

__all__ = [
    "DomainException",
    "InvalidInputError",
    "InvalidThresholdsError",
    "EvaluationError",
    "EmbeddingBackendError",
    "BackendUnavailableError",
    "ModelNotLoadedError",
]
