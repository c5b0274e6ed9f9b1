"""
AnswerPair Value Object

One descriptive question to grade: the student's answer, the model answer,
the marks available and the engineering stream.

Architecture Notes:
    - Value Object (immutable, defined by values)
    - Uses Pydantic for validation
    - Accepts the camelCase keys sent by the exam portal UI
      (studentAnswer, modelAnswer, maxMarks, question, stream)
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from exam_grader.domain.grading.value_objects.grading_enums import Domain

DEFAULT_MAX_MARKS = 10.0


class AnswerPair(BaseModel):
    """
    Immutable input to the evaluator.

    Attributes:
        student_answer: Answer typed by the student. May be empty (scores zero).
            Non-string values are coerced to "" and graded as "No Answer".
        model_answer: Reference answer from the question bank.
        max_marks: Marks available for the question (> 0, default 10).
        domain: Engineering stream. Unknown values fall back to CSE.
        question_text: Question wording. Only used to decide whether the
            question is phrased with stream vocabulary (technical multiplier).

    Examples:
        >>> pair = AnswerPair(
        ...     student_answer="TCP retransmits lost packets.",
        ...     model_answer="TCP is reliable because it retransmits lost packets.",
        ... )
        >>> pair.max_marks
        10.0
        >>> pair.domain
        <Domain.CSE: 'CSE'>

        >>> AnswerPair.model_validate(
        ...     {"studentAnswer": "Ohm's law", "modelAnswer": "V = IR", "stream": "EEE"}
        ... ).domain
        <Domain.EEE: 'EEE'>
    """

    student_answer: str = Field(
        default="",
        validation_alias=AliasChoices("student_answer", "studentAnswer"),
        description="Student's free-text answer",
    )

    model_answer: str = Field(
        default="",
        validation_alias=AliasChoices("model_answer", "modelAnswer"),
        description="Reference answer",
    )

    max_marks: float = Field(
        default=DEFAULT_MAX_MARKS,
        gt=0.0,
        validation_alias=AliasChoices("max_marks", "maxMarks"),
        description="Marks available for this question",
    )

    domain: Domain = Field(
        default=Domain.CSE,
        validation_alias=AliasChoices("domain", "stream"),
        description="Engineering stream",
    )

    question_text: str = Field(
        default="",
        validation_alias=AliasChoices("question_text", "questionText", "question"),
        description="Question wording (optional)",
    )

    model_config = {
        "frozen": True,
        "protected_namespaces": (),
        "json_schema_extra": {
            "examples": [
                {
                    "student_answer": "TCP ensures reliable delivery using acknowledgments.",
                    "model_answer": "TCP provides reliable transmission with acknowledgments and retransmission.",
                    "max_marks": 10,
                    "domain": "CSE",
                    "question_text": "Explain how TCP achieves reliability.",
                }
            ]
        },
    }

    @field_validator("student_answer", "model_answer", "question_text", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        """Non-string answers are treated as missing."""
        return value if isinstance(value, str) else ""

    @field_validator("domain", mode="before")
    @classmethod
    def coerce_domain(cls, value: Any) -> Domain:
        """Unknown streams fall back to CSE."""
        return Domain.parse(value)
