"""
Grading Enumerations

String-valued enums shared by value objects, scorers and the evaluator.
Values are the display strings used by the exam portal UI.
"""

from enum import Enum
from typing import Any

from exam_grader.domain.grading.constants import DOMAIN_ALIASES


class Domain(str, Enum):
    """
    Engineering stream an answer belongs to.

    Selects the technical vocabulary and similarity multipliers.
    Unknown or missing values fall back to CSE (see parse()).
    """

    CSE = "CSE"
    EEE = "EEE"
    ECE = "ECE"
    CIVIL = "CIVIL"
    MECHANICAL = "MECHANICAL"

    @classmethod
    def parse(cls, value: Any) -> "Domain":
        """
        Lenient conversion used for inputs coming from the UI layer.

        Examples:
            >>> Domain.parse("eee")
            <Domain.EEE: 'EEE'>
            >>> Domain.parse("Mechanical")
            <Domain.MECHANICAL: 'MECHANICAL'>
            >>> Domain.parse("MECH")
            <Domain.MECHANICAL: 'MECHANICAL'>
            >>> Domain.parse(None)
            <Domain.CSE: 'CSE'>
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.CSE

        key = value.strip().upper()
        key = DOMAIN_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.CSE


class Classification(str, Enum):
    """Quality band of an evaluated answer."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below Average"
    POOR = "Poor"
    VERY_POOR = "Very Poor"
    NO_ANSWER = "No Answer"
    ERROR = "Error"


class Grade(str, Enum):
    """Letter grade."""

    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class EvaluationMethod(str, Enum):
    """
    Which scorer actually produced a result.

    Attributes:
        EMBEDDING: Sentence-embedding cosine similarity (AI path)
        MANUAL: Heuristic keyword/length/structure/technical scorer
        ERROR_FALLBACK: Neither scorer could evaluate the pair (zero marks)
    """

    EMBEDDING = "EMBEDDING"
    MANUAL = "MANUAL"
    ERROR_FALLBACK = "ERROR_FALLBACK"


class Confidence(str, Enum):
    """How much the automatic grade can be trusted without human review."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
