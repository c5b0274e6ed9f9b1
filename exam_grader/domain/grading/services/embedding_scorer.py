"""
EmbeddingScorer - Semantic similarity via sentence embeddings.

Primary (AI) grading path. Embeds the student and model answers with the
loaded model, takes their cosine similarity and maps it through the
embedding band table using the current ThresholdConfig.

Stream adjustment:
    If the question is phrased with the stream's vocabulary the stream's
    "technical" multiplier applies, otherwise its "conceptual" one.
"""

import logging
import random
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional, Sequence

import numpy as np

from exam_grader.domain.grading.constants import FEEDBACK_MESSAGES
from exam_grader.domain.grading.grading_config import embedding_band_for
from exam_grader.domain.grading.services.manual_scorer import find_technical_terms
from exam_grader.domain.grading.services.model_handle import ModelHandle
from exam_grader.domain.grading.services.text_normalizer import normalize_text
from exam_grader.domain.grading.services.threshold_store import ThresholdStore
from exam_grader.domain.grading.value_objects import (
    AnswerPair,
    Confidence,
    EvaluationMethod,
    EvaluationResult,
)
from exam_grader.domain.shared.exceptions import InvalidInputError, ModelNotLoadedError
from exam_grader.shared.utils import round_half_up

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors, clamped to [0, 1].

    Zero vectors give 0.0. Negative similarities (opposed meaning) also
    count as 0.0 for grading purposes.

    Examples:
        >>> cosine_similarity([1.0, 0.0], [1.0, 0.0])
        1.0
        >>> cosine_similarity([1.0, 0.0], [0.0, 0.0])
        0.0
    """
    vector_a = np.asarray(a, dtype=np.float64)
    vector_b = np.asarray(b, dtype=np.float64)

    norm_a = np.linalg.norm(vector_a)
    norm_b = np.linalg.norm(vector_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    similarity = float(np.dot(vector_a, vector_b) / (norm_a * norm_b))
    if not np.isfinite(similarity):
        return 0.0
    return max(0.0, min(1.0, similarity))


class EmbeddingScorer:
    """
    Grades an AnswerPair with cosine similarity of sentence embeddings.

    Attributes:
        model_handle: Loaded model owned by the evaluator
        threshold_store: Current cut points and stream multipliers
        marks_jitter: Optional +-jitter/2 perturbation of marks (fraction of
            max_marks). 0.0 keeps marks deterministic.

    Usage Example:
        >>> scorer = EmbeddingScorer(handle, ThresholdStore())
        >>> result = await scorer.score(pair)
        >>> result.evaluation_method
        <EvaluationMethod.EMBEDDING: 'EMBEDDING'>
    """

    def __init__(
        self,
        model_handle: ModelHandle,
        threshold_store: ThresholdStore,
        marks_jitter: float = 0.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.model_handle = model_handle
        self.threshold_store = threshold_store
        self.marks_jitter = marks_jitter
        self._rng = rng or random.Random()

    async def score(self, pair: AnswerPair) -> EvaluationResult:
        """
        Grade one pair on the embedding path.

        Raises:
            ModelNotLoadedError: If the model handle is not loaded
            InvalidInputError: If either answer is empty after normalization
            EmbeddingBackendError / Exception: Backend failures propagate to the
                evaluator, which falls back to the manual scorer
        """
        if not self.model_handle.is_loaded:
            raise ModelNotLoadedError("Embedding model is not loaded")

        student = normalize_text(pair.student_answer)
        model = normalize_text(pair.model_answer)
        if not student or not model:
            raise InvalidInputError(
                "Student answer and model answer must both be non-empty",
                field_name="student_answer" if not student else "model_answer",
            )

        vectors = await self.model_handle.embed([student, model])
        with self._scoped_vectors(vectors) as (student_vector, model_vector):
            raw_similarity = cosine_similarity(student_vector, model_vector)

        technical = bool(
            find_technical_terms(normalize_text(pair.question_text), pair.domain)
        )
        multiplier = self.threshold_store.multiplier_for(pair.domain, technical=technical)
        similarity = max(0.0, min(1.0, raw_similarity * multiplier))

        band = embedding_band_for(similarity, self.threshold_store.thresholds)
        marks = self._marks_for(pair.max_marks, band.marks_multiplier)

        logger.debug(
            f"Embedding similarity {raw_similarity:.3f} x {multiplier} = {similarity:.3f} "
            f"({pair.domain.value}, technical={technical}) -> "
            f"{band.classification.value}/{band.grade.value}"
        )

        return EvaluationResult(
            similarity=similarity,
            percentage=int(round_half_up(similarity * 100)),
            classification=band.classification,
            classification_label=EvaluationResult.label_for(
                band.classification, EvaluationMethod.EMBEDDING
            ),
            grade=band.grade,
            marks=marks,
            max_marks=pair.max_marks,
            evaluation_method=EvaluationMethod.EMBEDDING,
            confidence=Confidence.HIGH,
            feedback=FEEDBACK_MESSAGES[band.classification.value],
        )

    def _marks_for(self, max_marks: float, multiplier: float) -> float:
        raw = max_marks * multiplier
        if self.marks_jitter > 0:
            half = self.marks_jitter / 2
            raw += self._rng.uniform(-half, half) * max_marks
        return round_half_up(max(0.0, min(max_marks, raw)), 1)

    @staticmethod
    @contextmanager
    def _scoped_vectors(vectors: list[list[float]]) -> Iterator[tuple[list[float], list[float]]]:
        """Yield the two vectors and drop them on every exit path."""
        if len(vectors) != 2:
            raise ValueError(f"Expected 2 embeddings, got {len(vectors)}")
        try:
            yield vectors[0], vectors[1]
        finally:
            vectors.clear()
