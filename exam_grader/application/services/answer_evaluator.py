"""
Answer Evaluator - Application Facade

Responsibility:
    Single entry point for grading descriptive answers. Owns the embedding
    model lifecycle and implements graceful degradation between the AI
    (embedding) path and the deterministic manual path.

Architecture Notes:
    - Part of Application Layer (Services)
    - Orchestrates Domain services (EmbeddingScorer, ManualScorer, ThresholdStore)
    - Embedding backend injected via EmbeddingServiceProtocol
      (defaults to the sentence-transformers implementation)
    - Explicitly constructed by the caller; no module-level singleton

Lifecycle:
    UNINITIALIZED --initialize()--> INITIALIZING --> READY | UNAVAILABLE
    dispose() returns to UNINITIALIZED from any state.

Degradation Protocol:
    - READY: embedding path; on failure fall back to manual (flagged for review)
    - Not READY: manual path
    - Both paths fail / malformed input: "Error" result, never an exception

Status Observation:
    subscribe(listener) registers a callback receiving an EvaluatorStatus on
    every state transition. Presentation is entirely up to the listener.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Optional, Union

import numpy as np
from pydantic import ValidationError

from exam_grader.application.models import (
    EVALUATION_MODE_AI,
    EVALUATION_MODE_MANUAL,
    EvaluatorState,
    EvaluatorStatus,
)
from exam_grader.application.services.evaluator_settings import EvaluatorSettings
from exam_grader.domain.grading.constants import SELF_TEST_SENTENCES
from exam_grader.domain.grading.grading_config import ThresholdConfig
from exam_grader.domain.grading.services import (
    EmbeddingScorer,
    EmbeddingServiceProtocol,
    ManualScorer,
    ModelHandle,
    ThresholdStore,
)
from exam_grader.domain.grading.value_objects import (
    AnswerPair,
    Domain,
    EvaluationResult,
)
from exam_grader.domain.grading.value_objects.answer_pair import DEFAULT_MAX_MARKS
from exam_grader.domain.shared.exceptions import (
    BackendUnavailableError,
    EvaluationError,
    InvalidInputError,
)
from exam_grader.infrastructure.ai.embeddings import SentenceTransformerEmbeddingService

logger = logging.getLogger(__name__)

StatusListener = Callable[[EvaluatorStatus], None]
PairInput = Union[AnswerPair, Mapping[str, Any]]


class AnswerEvaluator:
    """
    Grades answer pairs, choosing the embedding or manual path per evaluator state.

    Dependencies:
        - embedding_service: Backend wrapped in a ModelHandle owned by this evaluator
        - settings: Timeouts, retry policy, batch pacing
        - threshold_store: Shared cut points (also used by the manual scorer)

    Usage Example:
        >>> evaluator = AnswerEvaluator(settings=EvaluatorSettings.from_env())
        >>> await evaluator.initialize()
        True
        >>> result = await evaluator.evaluate(
        ...     {"studentAnswer": "A stack is LIFO.", "modelAnswer": "Stack is LIFO."}
        ... )
        >>> result.auto_evaluated
        True
        >>> evaluator.dispose()
    """

    def __init__(
        self,
        embedding_service: Optional[EmbeddingServiceProtocol] = None,
        settings: Optional[EvaluatorSettings] = None,
        threshold_store: Optional[ThresholdStore] = None,
        manual_scorer: Optional[ManualScorer] = None,
    ) -> None:
        self.settings = settings or EvaluatorSettings.default()
        self.threshold_store = threshold_store or ThresholdStore()
        self.manual_scorer = manual_scorer or ManualScorer(self.threshold_store)

        service = embedding_service or SentenceTransformerEmbeddingService(
            model_name=self.settings.model_name
        )
        self._handle = ModelHandle(service)
        self._embedding_scorer = EmbeddingScorer(
            self._handle,
            self.threshold_store,
            marks_jitter=self.settings.marks_jitter,
        )

        self._state = EvaluatorState.UNINITIALIZED
        self._init_task: Optional[asyncio.Task[bool]] = None
        self._retry_count = 0
        self._last_error: Optional[str] = None
        self._listeners: list[StatusListener] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> EvaluatorState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == EvaluatorState.READY

    @property
    def evaluation_mode(self) -> str:
        return EVALUATION_MODE_AI if self.is_ready else EVALUATION_MODE_MANUAL

    async def initialize(self) -> bool:
        """
        Load the embedding model and run the self-test.

        Concurrent callers share one in-flight initialization. Each attempt is
        bounded by settings.init_timeout_seconds; failed attempts are retried
        after settings.retry_delay_seconds, up to settings.max_init_attempts.

        Returns:
            True if the evaluator ended READY, False if it settled UNAVAILABLE
            (or the initialization was abandoned by dispose()).
        """
        if self._state == EvaluatorState.READY:
            return True

        if not self.settings.enable_ai:
            logger.info("AI evaluation disabled by settings, using manual scorer only")
            self._set_state(EvaluatorState.UNAVAILABLE)
            return False

        if self._init_task is None or self._init_task.done():
            self._init_task = asyncio.create_task(self._run_initialization())

        task = self._init_task
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                return False
            raise

    async def _run_initialization(self) -> bool:
        self._retry_count = 0
        self._set_state(EvaluatorState.INITIALIZING)

        attempts = self.settings.max_init_attempts
        for attempt in range(1, attempts + 1):
            try:
                await self._attempt_load()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._retry_count += 1
                self._last_error = str(e)
                logger.warning(
                    f"Embedding model initialization attempt {attempt}/{attempts} failed: {e}"
                )
                if attempt < attempts:
                    self._notify()
                    await asyncio.sleep(self.settings.retry_delay_seconds)
                continue

            self._retry_count = 0
            self._last_error = None
            logger.info(f"AI evaluation ready (model: {self._handle.model_name})")
            self._set_state(EvaluatorState.READY)
            return True

        logger.warning(
            f"Embedding model unavailable after {attempts} attempts, "
            f"falling back to manual evaluation"
        )
        self._set_state(EvaluatorState.UNAVAILABLE)
        return False

    async def _attempt_load(self) -> None:
        """One load attempt: availability check, bounded load, self-test."""
        if not self._handle.is_backend_available():
            raise BackendUnavailableError(
                "Embedding backend is not installed", model_name=self._handle.model_name
            )

        timeout = self.settings.init_timeout_seconds
        try:
            await asyncio.wait_for(self._handle.load(), timeout=timeout)
        except asyncio.TimeoutError:
            self._handle.mark_failed(f"Model load timed out after {timeout}s")
            raise BackendUnavailableError(
                f"Model load timed out after {timeout}s", model_name=self._handle.model_name
            ) from None

        await self._self_test()

    async def _self_test(self) -> None:
        """
        Embed two fixed sentences and require a finite similarity in [0, 1].

        Raises:
            EvaluationError: If the model produces unusable vectors
        """
        try:
            vectors = await asyncio.wait_for(
                self._handle.embed(list(SELF_TEST_SENTENCES)),
                timeout=self.settings.init_timeout_seconds,
            )
            first, second = (np.asarray(vector, dtype=np.float64) for vector in vectors)
            norms = np.linalg.norm(first) * np.linalg.norm(second)
            similarity = float(np.dot(first, second) / norms) if norms else float("nan")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._handle.mark_failed(f"Self-test failed: {e}")
            raise EvaluationError("Model self-test failed", cause=e) from e

        if not np.isfinite(similarity) or not -1e-6 <= similarity <= 1.0 + 1e-6:
            self._handle.mark_failed(f"Self-test similarity out of range: {similarity}")
            raise EvaluationError(
                f"Model self-test produced invalid similarity: {similarity}"
            )

        logger.debug(f"Model self-test passed (similarity={similarity:.3f})")

    def dispose(self) -> None:
        """Release the model and return to UNINITIALIZED."""
        if self._init_task is not None and not self._init_task.done():
            self._init_task.cancel()
        self._init_task = None
        self._handle.dispose()
        self._retry_count = 0
        self._last_error = None
        self._set_state(EvaluatorState.UNINITIALIZED)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    async def evaluate(self, pair: PairInput) -> EvaluationResult:
        """
        Grade one answer pair. Never raises.

        Args:
            pair: AnswerPair or a mapping with snake_case / camelCase keys

        Returns:
            EvaluationResult. ERROR_FALLBACK result for malformed input or
            when both scoring paths fail.
        """
        try:
            answer_pair = pair if isinstance(pair, AnswerPair) else AnswerPair.model_validate(pair)
        except ValidationError as e:
            logger.warning(f"Malformed answer pair rejected: {e.error_count()} error(s)")
            return EvaluationResult.failed(
                max_marks=DEFAULT_MAX_MARKS, error=f"Invalid answer pair: {e}"
            )

        if self._state != EvaluatorState.READY:
            return self._score_manually(answer_pair)

        try:
            return await self._embedding_scorer.score(answer_pair)
        except InvalidInputError:
            return self._score_manually(answer_pair)
        except Exception as e:
            logger.warning(f"Embedding evaluation failed, using manual scorer: {e}")
            return self._score_manually(answer_pair, error=str(e))

    def _score_manually(
        self, pair: AnswerPair, error: Optional[str] = None
    ) -> EvaluationResult:
        try:
            result = self.manual_scorer.score(
                pair.student_answer,
                pair.model_answer,
                domain=pair.domain,
                max_marks=pair.max_marks,
            )
        except Exception as e:
            logger.error(f"Manual scoring failed: {e}", exc_info=True)
            message = f"{error}; {e}" if error else str(e)
            return EvaluationResult.failed(max_marks=pair.max_marks, error=message)

        if error is not None:
            return result.model_copy(update={"requires_review": True, "error": error})
        return result

    async def evaluate_batch(self, pairs: Sequence[PairInput]) -> list[EvaluationResult]:
        """
        Grade many pairs, preserving input order.

        Pairs are evaluated concurrently in groups of settings.batch_group_size
        with settings.batch_pacing_seconds between groups.
        """
        pairs = list(pairs)
        if not pairs:
            return []

        group_size = self.settings.batch_group_size
        logger.info(
            f"Evaluating batch of {len(pairs)} answers ({self.evaluation_mode} mode)"
        )

        results: list[EvaluationResult] = []
        for start in range(0, len(pairs), group_size):
            group = pairs[start : start + group_size]
            results.extend(await asyncio.gather(*(self.evaluate(pair) for pair in group)))

            if start + group_size < len(pairs) and self.settings.batch_pacing_seconds > 0:
                await asyncio.sleep(self.settings.batch_pacing_seconds)

        logger.info(f"Batch evaluation completed: {len(results)} answers")
        return results

    # ------------------------------------------------------------------
    # Configuration & status
    # ------------------------------------------------------------------

    def update_thresholds(self, partial: Mapping[str, float]) -> ThresholdConfig:
        """
        Replace some or all similarity cut points.

        Raises:
            InvalidThresholdsError: If the result is out of range or mis-ordered
        """
        updated = self.threshold_store.update(partial)
        self._notify()
        return updated

    def get_status(self) -> EvaluatorStatus:
        return EvaluatorStatus(
            state=self._state,
            is_loaded=self._state == EvaluatorState.READY,
            is_initializing=self._state == EvaluatorState.INITIALIZING,
            evaluation_mode=self.evaluation_mode,
            model_name=self._handle.model_name,
            thresholds=self.threshold_store.thresholds.to_dict(),
            supported_domains=[domain.value for domain in Domain],
            retry_count=self._retry_count,
            last_error=self._last_error,
        )

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """
        Register a status listener.

        Returns:
            Function that unregisters the listener (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: EvaluatorState) -> None:
        if state == self._state:
            return
        logger.info(f"Evaluator state: {self._state.value} -> {state.value}")
        self._state = state
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        status = self.get_status()
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception:
                logger.exception("Evaluator status listener failed")
