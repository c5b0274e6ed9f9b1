"""
EvaluationSummary Value Object

Aggregate of a graded batch (one exam submission's descriptive answers):
total marks, how many answers were graded by AI vs. manually, and how many
need human review.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from exam_grader.domain.grading.value_objects.evaluation_result import EvaluationResult
from exam_grader.domain.grading.value_objects.grading_enums import EvaluationMethod
from exam_grader.shared.utils import round_half_up

EVALUATION_TYPE_AI = "AI"
EVALUATION_TYPE_MANUAL = "Manual"
EVALUATION_TYPE_MIXED = "Mixed"


class EvaluationSummary(BaseModel):
    """
    Totals for a list of EvaluationResult.

    Attributes:
        total_marks: Sum of awarded marks
        total_max_marks: Sum of available marks
        percentage: total_marks / total_max_marks * 100 (0 when nothing graded)
        ai_evaluated: Results produced by the embedding path
        manual_evaluated: Results produced by the manual scorer
        failed: Results that could not be evaluated (ERROR_FALLBACK)
        requires_review: Results flagged for human review
        evaluation_type: "AI", "Manual" or "Mixed"

    Examples:
        >>> summary = EvaluationSummary.from_results([])
        >>> summary.evaluation_type
        'Manual'
    """

    total_marks: float = Field(default=0.0, ge=0.0)
    total_max_marks: float = Field(default=0.0, ge=0.0)
    percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    ai_evaluated: int = 0
    manual_evaluated: int = 0
    failed: int = 0
    requires_review: int = 0
    evaluation_type: str = EVALUATION_TYPE_MANUAL

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @classmethod
    def from_results(cls, results: list[EvaluationResult]) -> "EvaluationSummary":
        total_marks = sum(r.marks for r in results)
        total_max = sum(r.max_marks for r in results)
        ai = sum(1 for r in results if r.evaluation_method == EvaluationMethod.EMBEDDING)
        manual = sum(1 for r in results if r.evaluation_method == EvaluationMethod.MANUAL)
        failed = sum(
            1 for r in results if r.evaluation_method == EvaluationMethod.ERROR_FALLBACK
        )

        if ai and ai == len(results):
            evaluation_type = EVALUATION_TYPE_AI
        elif ai:
            evaluation_type = EVALUATION_TYPE_MIXED
        else:
            evaluation_type = EVALUATION_TYPE_MANUAL

        percentage = round_half_up(total_marks / total_max * 100, 1) if total_max else 0.0

        return cls(
            total_marks=round_half_up(total_marks, 1),
            total_max_marks=round_half_up(total_max, 1),
            percentage=min(percentage, 100.0),
            ai_evaluated=ai,
            manual_evaluated=manual,
            failed=failed,
            requires_review=sum(1 for r in results if r.requires_review),
            evaluation_type=evaluation_type,
        )
