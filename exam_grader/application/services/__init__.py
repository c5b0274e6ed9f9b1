"""
Application Services

Contains:
    - AnswerEvaluator: grading facade with graceful degradation
    - EvaluatorSettings: environment-driven configuration
"""

from .evaluator_settings import EvaluatorSettings
from .answer_evaluator import AnswerEvaluator

__all__ = [
    "AnswerEvaluator",
    "EvaluatorSettings",
]
