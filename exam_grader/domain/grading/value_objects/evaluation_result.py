"""
EvaluationResult Value Object

Outcome of grading one answer pair: similarity, band, grade, marks and
which scorer produced it.

Responsibility:
    - Encapsulate the grading outcome for UI display and audit
    - Validate cross-field invariants (bounds, percentage consistency)
    - Provide factories for the special "No Answer" and "Error" outcomes
    - Immutable value object

Architecture Notes:
    - Value Object (immutable, defined by values)
    - Uses Pydantic for validation
    - Serializes to camelCase (by_alias=True) for the exam portal UI
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from exam_grader.domain.grading.constants import FEEDBACK_MESSAGES
from exam_grader.domain.grading.value_objects.grading_enums import (
    Classification,
    Confidence,
    EvaluationMethod,
    Grade,
)
from exam_grader.shared.utils import round_half_up

MANUAL_QUALIFIER = " (Manual)"


class Breakdown(BaseModel):
    """
    Per-signal percentages of the manual scorer (0-100 each).

    Attributes:
        keywords: Keyword overlap with the model answer
        length: Length ratio (capped for very short answers)
        structure: Sentences, commas, capitalisation, punctuation
        technical: Stream vocabulary overlap
    """

    keywords: int = Field(..., ge=0, le=100)
    length: int = Field(..., ge=0, le=100)
    structure: int = Field(..., ge=0, le=100)
    technical: int = Field(..., ge=0, le=100)

    model_config = {"frozen": True}

    @classmethod
    def from_scores(
        cls, keywords: float, length: float, structure: float, technical: float
    ) -> "Breakdown":
        """Build from 0-1 component scores."""
        return cls(
            keywords=int(round_half_up(keywords * 100)),
            length=int(round_half_up(length * 100)),
            structure=int(round_half_up(structure * 100)),
            technical=int(round_half_up(technical * 100)),
        )


class EvaluationResult(BaseModel):
    """
    Immutable value object representing a graded answer.

    Attributes:
        similarity: Final similarity score in [0, 1]
        percentage: round(similarity * 100), half up
        classification: Quality band
        classification_label: Display label; manual results carry " (Manual)"
        grade: Letter grade consistent with the band
        marks: Awarded marks, 0 <= marks <= max_marks, 1 decimal
        max_marks: Marks available for the question
        evaluation_method: Scorer that actually produced the result
        confidence: high for the embedding path; computed on the manual path
        breakdown: Component percentages (manual path only)
        requires_review: True when a human should double-check the grade
        feedback: One-sentence explanation for the student
        error: Failure message when the evaluation degraded or aborted

    Examples:
        >>> result = EvaluationResult.no_answer(max_marks=10)
        >>> result.marks
        0.0
        >>> result.classification
        <Classification.NO_ANSWER: 'No Answer'>
    """

    similarity: float = Field(..., ge=0.0, le=1.0)
    percentage: int = Field(..., ge=0, le=100)
    classification: Classification
    classification_label: str
    grade: Grade
    marks: float = Field(..., ge=0.0)
    max_marks: float = Field(..., gt=0.0)
    evaluation_method: EvaluationMethod
    confidence: Confidence
    breakdown: Optional[Breakdown] = None
    requires_review: bool = False
    feedback: str = ""
    error: Optional[str] = None

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def validate_consistency(self) -> "EvaluationResult":
        """
        Validate cross-field invariants.

        Raises:
            ValueError: If marks exceed max_marks or percentage disagrees with similarity
        """
        if self.marks > self.max_marks:
            raise ValueError(
                f"marks ({self.marks}) cannot exceed max_marks ({self.max_marks})"
            )

        expected_percentage = int(round_half_up(self.similarity * 100))
        if self.percentage != expected_percentage:
            raise ValueError(
                f"percentage ({self.percentage}) must equal round(similarity*100) "
                f"= {expected_percentage}"
            )

        return self

    @property
    def auto_evaluated(self) -> bool:
        """True when the AI (embedding) path produced this result."""
        return self.evaluation_method == EvaluationMethod.EMBEDDING

    @staticmethod
    def label_for(classification: Classification, method: EvaluationMethod) -> str:
        """Display label for a classification produced by the given method."""
        if method == EvaluationMethod.MANUAL:
            return f"{classification.value}{MANUAL_QUALIFIER}"
        return classification.value

    @classmethod
    def no_answer(
        cls,
        max_marks: float,
        method: EvaluationMethod = EvaluationMethod.MANUAL,
    ) -> "EvaluationResult":
        """
        Zero-score result for an empty answer.

        Deterministic and confident: an empty answer is unambiguous.
        """
        return cls(
            similarity=0.0,
            percentage=0,
            classification=Classification.NO_ANSWER,
            classification_label=cls.label_for(Classification.NO_ANSWER, method),
            grade=Grade.F,
            marks=0.0,
            max_marks=max_marks,
            evaluation_method=method,
            confidence=Confidence.HIGH,
            requires_review=False,
            feedback=FEEDBACK_MESSAGES[Classification.NO_ANSWER.value],
        )

    @classmethod
    def failed(cls, max_marks: float, error: str) -> "EvaluationResult":
        """
        Zero-mark result for a pair neither scorer could evaluate.

        Flags the answer for manual review instead of aborting the batch.
        """
        return cls(
            similarity=0.0,
            percentage=0,
            classification=Classification.ERROR,
            classification_label=Classification.ERROR.value,
            grade=Grade.F,
            marks=0.0,
            max_marks=max_marks,
            evaluation_method=EvaluationMethod.ERROR_FALLBACK,
            confidence=Confidence.LOW,
            requires_review=True,
            feedback=FEEDBACK_MESSAGES[Classification.ERROR.value],
            error=error,
        )

    def to_dict(self) -> dict:
        """camelCase dictionary for the UI layer and JSON export."""
        return self.model_dump(mode="json", by_alias=True)
