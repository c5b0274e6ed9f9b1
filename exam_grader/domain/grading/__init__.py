"""
Grading Subdomain Module

Core business logic for descriptive answer grading.
Contains value objects, scoring services and configuration tables.

Exports:
    Value Objects:
        - AnswerPair: Input to the evaluator
        - EvaluationResult: Graded outcome
        - EvaluationSummary: Batch totals

    Services:
        - ManualScorer, EmbeddingScorer, ThresholdStore, ModelHandle
        - EmbeddingServiceProtocol: Embedding backend (Protocol interface)

Usage:
    >>> from exam_grader.domain.grading import AnswerPair, ManualScorer
    >>> from exam_grader.domain.grading.value_objects import Grade
"""

# Value Objects
from .value_objects import (
    AnswerPair,
    Classification,
    Confidence,
    Domain,
    EvaluationMethod,
    EvaluationResult,
    EvaluationSummary,
    Grade,
)

# Services
from .services import (
    EmbeddingScorer,
    EmbeddingServiceProtocol,
    ManualScorer,
    ModelHandle,
    ThresholdStore,
)

from . import constants
from . import grading_config

__all__ = [
    # Value Objects
    "AnswerPair",
    "Classification",
    "Confidence",
    "Domain",
    "EvaluationMethod",
    "EvaluationResult",
    "EvaluationSummary",
    "Grade",
    # Services
    "EmbeddingScorer",
    "EmbeddingServiceProtocol",
    "ManualScorer",
    "ModelHandle",
    "ThresholdStore",
    "constants",
    "grading_config",
]
