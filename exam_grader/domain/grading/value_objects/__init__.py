"""
Grading Value Objects.

Immutable objects that represent grading concepts by their value.

Available Value Objects:
    - AnswerPair: Input to the evaluator (student answer + model answer)
    - EvaluationResult: Graded outcome of one pair
    - Breakdown: Manual scorer component percentages
    - EvaluationSummary: Totals for a graded batch
    - Enums: Domain, Classification, Grade, EvaluationMethod, Confidence
"""

from exam_grader.domain.grading.value_objects.grading_enums import (
    Classification,
    Confidence,
    Domain,
    EvaluationMethod,
    Grade,
)
from exam_grader.domain.grading.value_objects.answer_pair import AnswerPair
from exam_grader.domain.grading.value_objects.evaluation_result import (
    Breakdown,
    EvaluationResult,
)
from exam_grader.domain.grading.value_objects.evaluation_summary import (
    EvaluationSummary,
)

__all__ = [
    "AnswerPair",
    "Breakdown",
    "Classification",
    "Confidence",
    "Domain",
    "EvaluationMethod",
    "EvaluationResult",
    "EvaluationSummary",
    "Grade",
]
