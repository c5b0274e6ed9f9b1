"""
Grading Configuration

Weights, band tables and similarity thresholds shared by the manual and
embedding scorers. Defines the business rules that turn a similarity score
into a classification, a letter grade and marks.

Business Context:
    The manual (heuristic) scorer combines four signals:
    - Keywords (40%) - overlap with model answer vocabulary
    - Length (25%) - penalises terse answers
    - Structure (20%) - sentences, commas, capitalisation, punctuation
    - Technical (15%) - stream vocabulary overlap

    The embedding scorer uses cosine similarity against mutable cut points
    (ThresholdConfig) that teachers can tune at runtime.

Design Principles:
    - Configuration as code (not database)
    - Band tables are authoritative: grade and classification always agree
    - Immutable snapshots; ThresholdStore swaps whole snapshots on update
"""

from dataclasses import dataclass
from typing import Any, Final

from pydantic import BaseModel, Field, model_validator

from exam_grader.domain.grading.value_objects.grading_enums import Classification, Grade


# ============================================================================
# MANUAL SCORER WEIGHTS
# ============================================================================

WEIGHT_KEYWORDS: Final[float] = 0.40
WEIGHT_LENGTH: Final[float] = 0.25
WEIGHT_STRUCTURE: Final[float] = 0.20
WEIGHT_TECHNICAL: Final[float] = 0.15

MANUAL_WEIGHTS_SUM: Final[float] = (
    WEIGHT_KEYWORDS + WEIGHT_LENGTH + WEIGHT_STRUCTURE + WEIGHT_TECHNICAL
)


# ============================================================================
# MANUAL SCORER RULES
# ============================================================================

# Keyword matching
KEYWORD_EXACT_SCORE: Final[float] = 1.0
KEYWORD_SIMILAR_SCORE: Final[float] = 0.7
KEYWORD_NEUTRAL_SCORE: Final[float] = 0.5  # model answer has no keywords
EDIT_DISTANCE_RATIO: Final[float] = 0.3  # of the shorter word, at least 1

# Length
SHORT_ANSWER_RATIO: Final[float] = 0.2  # below 20% of model length...
SHORT_ANSWER_LENGTH_CAP: Final[float] = 0.3  # ...length score capped here

# Structure signals (additive, capped at 1.0)
STRUCTURE_MULTI_SENTENCE: Final[float] = 0.3
STRUCTURE_COMMA: Final[float] = 0.2
STRUCTURE_CAPITAL: Final[float] = 0.2
STRUCTURE_PERIOD: Final[float] = 0.3

# Technical terms
TECHNICAL_NEUTRAL_SCORE: Final[float] = 0.7  # model answer has no stream terms

# Confidence from (keyword + structure) / 2
HIGH_CONFIDENCE_THRESHOLD: Final[float] = 0.7
MEDIUM_CONFIDENCE_THRESHOLD: Final[float] = 0.4


# ============================================================================
# BAND TABLES
# ============================================================================


@dataclass(frozen=True)
class Band:
    """
    One row of a band table.

    Attributes:
        lower_bound: Minimum score (inclusive) for this band
        classification: Quality band
        grade: Letter grade
        marks_multiplier: Fraction of max_marks awarded
    """

    lower_bound: float
    classification: Classification
    grade: Grade
    marks_multiplier: float


# Ordered from best to worst; first band whose lower_bound <= score wins
MANUAL_BANDS: Final[tuple[Band, ...]] = (
    Band(0.80, Classification.EXCELLENT, Grade.A_PLUS, 0.90),
    Band(0.70, Classification.GOOD, Grade.B_PLUS, 0.80),
    Band(0.60, Classification.AVERAGE, Grade.B, 0.70),
    Band(0.45, Classification.BELOW_AVERAGE, Grade.C, 0.55),
    Band(0.30, Classification.POOR, Grade.D, 0.35),
    Band(0.00, Classification.VERY_POOR, Grade.F, 0.15),
)

# Embedding path: lower bounds come from ThresholdConfig at call time
EMBEDDING_BAND_RULES: Final[tuple[tuple[str, Classification, Grade, float], ...]] = (
    ("excellent", Classification.EXCELLENT, Grade.A_PLUS, 0.95),
    ("good", Classification.GOOD, Grade.A, 0.82),
    ("average", Classification.AVERAGE, Grade.B, 0.70),
    ("poor", Classification.BELOW_AVERAGE, Grade.C, 0.55),
    ("fail", Classification.POOR, Grade.D, 0.35),
)


def manual_band_for(score: float) -> Band:
    """
    Map a manual score (0-1) to its band.

    Examples:
        >>> manual_band_for(0.86).grade
        <Grade.A_PLUS: 'A+'>
        >>> manual_band_for(0.29).classification
        <Classification.VERY_POOR: 'Very Poor'>
    """
    for band in MANUAL_BANDS:
        if score >= band.lower_bound:
            return band
    return MANUAL_BANDS[-1]


def embedding_band_for(similarity: float, thresholds: "ThresholdConfig") -> Band:
    """
    Map an embedding similarity (0-1) to its band using the current cut points.

    Anything below `poor` lands in the last band regardless of `fail`.

    Examples:
        >>> embedding_band_for(0.80, ThresholdConfig()).grade
        <Grade.A: 'A'>
    """
    for name, classification, grade, multiplier in EMBEDDING_BAND_RULES[:-1]:
        lower_bound = getattr(thresholds, name)
        if similarity >= lower_bound:
            return Band(lower_bound, classification, grade, multiplier)

    _, classification, grade, multiplier = EMBEDDING_BAND_RULES[-1]
    return Band(thresholds.fail, classification, grade, multiplier)


# ============================================================================
# SIMILARITY THRESHOLDS
# ============================================================================

DEFAULT_THRESHOLDS: Final[dict[str, float]] = {
    "excellent": 0.85,
    "good": 0.75,
    "average": 0.60,
    "poor": 0.45,
    "fail": 0.00,
}

THRESHOLD_ORDER: Final[tuple[str, ...]] = ("excellent", "good", "average", "poor", "fail")


class ThresholdConfig(BaseModel):
    """
    Immutable snapshot of the embedding-path cut points.

    Invariant: every cut point lies in [0, 1] and
    excellent >= good >= average >= poor >= fail.

    Examples:
        >>> ThresholdConfig().excellent
        0.85
        >>> ThresholdConfig(good=0.9)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    excellent: float = Field(default=DEFAULT_THRESHOLDS["excellent"], ge=0.0, le=1.0)
    good: float = Field(default=DEFAULT_THRESHOLDS["good"], ge=0.0, le=1.0)
    average: float = Field(default=DEFAULT_THRESHOLDS["average"], ge=0.0, le=1.0)
    poor: float = Field(default=DEFAULT_THRESHOLDS["poor"], ge=0.0, le=1.0)
    fail: float = Field(default=DEFAULT_THRESHOLDS["fail"], ge=0.0, le=1.0)

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def validate_order(self) -> "ThresholdConfig":
        """Cut points must be non-increasing from excellent down to fail."""
        violations = self.order_violations(self.to_dict())
        if violations:
            raise ValueError("; ".join(violations))
        return self

    @staticmethod
    def order_violations(values: dict[str, float]) -> list[str]:
        """List every adjacent pair that breaks the non-increasing order."""
        violations = []
        for higher, lower in zip(THRESHOLD_ORDER, THRESHOLD_ORDER[1:]):
            if values[lower] > values[higher]:
                violations.append(
                    f"{lower} ({values[lower]}) must be <= {higher} ({values[higher]})"
                )
        return violations

    def to_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in THRESHOLD_ORDER}


# ============================================================================
# MANUAL SCORER CONFIGURATION
# ============================================================================


@dataclass(frozen=True)
class ManualWeights:
    """
    Weight distribution of the four manual signals.

    Usage:
        weights = ManualWeights.default()
        score = weights.keywords * keyword_score + ...
    """

    keywords: float = WEIGHT_KEYWORDS
    length: float = WEIGHT_LENGTH
    structure: float = WEIGHT_STRUCTURE
    technical: float = WEIGHT_TECHNICAL

    def __post_init__(self) -> None:
        """Validate that weights sum to approximately 1.0"""
        total = self.keywords + self.length + self.structure + self.technical
        if not 0.99 <= total <= 1.01:
            raise ValueError(
                f"Manual weights must sum to 1.0, got {total:.4f}. "
                f"Weights: keywords={self.keywords}, length={self.length}, "
                f"structure={self.structure}, technical={self.technical}"
            )

    @classmethod
    def default(cls) -> "ManualWeights":
        return cls()

    def to_dict(self) -> dict[str, float]:
        return {
            "keywords": self.keywords,
            "length": self.length,
            "structure": self.structure,
            "technical": self.technical,
        }


@dataclass(frozen=True)
class ManualScorerConfig:
    """
    Complete configuration for ManualScorer.

    Attributes:
        weights: Signal weights (sum to 1.0)
        similar_keyword_score: Credit for a near-miss keyword (0.7)
        edit_distance_ratio: Allowed edits as a fraction of the shorter word (0.3)
        short_answer_ratio: Length ratio below which the length score is capped (0.2)
        short_answer_length_cap: The cap itself (0.3)
        high_confidence_threshold: (keyword+structure)/2 for "high" (0.7)
        medium_confidence_threshold: (keyword+structure)/2 for "medium" (0.4)
    """

    weights: ManualWeights = ManualWeights.default()
    similar_keyword_score: float = KEYWORD_SIMILAR_SCORE
    edit_distance_ratio: float = EDIT_DISTANCE_RATIO
    short_answer_ratio: float = SHORT_ANSWER_RATIO
    short_answer_length_cap: float = SHORT_ANSWER_LENGTH_CAP
    high_confidence_threshold: float = HIGH_CONFIDENCE_THRESHOLD
    medium_confidence_threshold: float = MEDIUM_CONFIDENCE_THRESHOLD

    def __post_init__(self) -> None:
        if self.medium_confidence_threshold > self.high_confidence_threshold:
            raise ValueError(
                f"medium_confidence_threshold ({self.medium_confidence_threshold}) "
                f"must be <= high_confidence_threshold ({self.high_confidence_threshold})"
            )

    @classmethod
    def default(cls) -> "ManualScorerConfig":
        return cls()

    @classmethod
    def for_testing(cls, **overrides: Any) -> "ManualScorerConfig":
        """
        Create configuration with custom overrides for testing.

        Examples:
            >>> config = ManualScorerConfig.for_testing(similar_keyword_score=0.5)
            >>> config.similar_keyword_score
            0.5
        """
        defaults: dict[str, Any] = {
            "weights": ManualWeights.default(),
            "similar_keyword_score": KEYWORD_SIMILAR_SCORE,
            "edit_distance_ratio": EDIT_DISTANCE_RATIO,
            "short_answer_ratio": SHORT_ANSWER_RATIO,
            "short_answer_length_cap": SHORT_ANSWER_LENGTH_CAP,
            "high_confidence_threshold": HIGH_CONFIDENCE_THRESHOLD,
            "medium_confidence_threshold": MEDIUM_CONFIDENCE_THRESHOLD,
        }
        defaults.update(overrides)
        return cls(**defaults)


# ============================================================================
# MODULE-LEVEL VALIDATION
# ============================================================================

assert (
    0.99 <= MANUAL_WEIGHTS_SUM <= 1.01
), f"Manual weights must sum to 1.0, got {MANUAL_WEIGHTS_SUM}"
