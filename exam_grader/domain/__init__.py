"""
Domain Layer - Core Business Logic

Grading rules, value objects and scoring services. Framework-independent;
the embedding backend is reached only through EmbeddingServiceProtocol.

Subdomains:
    - grading: answer scoring (manual and embedding paths)
    - shared: exception hierarchy
"""

from .grading import AnswerPair, EvaluationResult, EvaluationSummary
from .shared import DomainException

__all__ = [
    "AnswerPair",
    "EvaluationResult",
    "EvaluationSummary",
    "DomainException",
]
