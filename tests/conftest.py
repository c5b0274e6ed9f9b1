"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, integration).

Fixtures:
    - fake_service_factory: builds FakeEmbeddingService with custom behaviour
    - fake_embedding_service: default fake backend (loads instantly, never fails)
    - threshold_store: fresh ThresholdStore with default cut points
    - manual_scorer: ManualScorer bound to threshold_store
    - test_settings: EvaluatorSettings without delays
    - evaluator: AnswerEvaluator wired to the fake backend (not initialized)
    - tcp_pair: the TCP reliability question used across suites

Architecture Notes:
    - No real sentence-transformers model is ever loaded in tests
    - FakeEmbeddingService is a deterministic bag-of-words hashing embedder:
      identical texts give identical vectors, disjoint vocabularies give
      orthogonal vectors
"""

import logging
import re
import time
import zlib
from typing import Callable

import pytest

from exam_grader.application.services import AnswerEvaluator, EvaluatorSettings
from exam_grader.domain.grading.services import ManualScorer, ThresholdStore
from exam_grader.domain.grading.value_objects import AnswerPair, Domain

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"[a-z0-9]+")

TCP_STUDENT_ANSWER = (
    "TCP ensures reliable communication through acknowledgments and "
    "retransmission of lost packets."
)
TCP_MODEL_ANSWER = (
    "TCP provides reliable data transmission by using acknowledgment messages "
    "and automatic retransmission of lost data packets."
)


# ============================================================================
# FAKE EMBEDDING BACKEND
# ============================================================================


class FakeEmbeddingService:
    """
    In-memory EmbeddingServiceProtocol implementation.

    Args:
        available: Value returned by is_available()
        fail_loads: Number of initial load() calls that raise
        load_delay: Seconds load() blocks (to exercise timeouts/concurrency)
        fail_embed: Make embed() raise
        dimension: Vector size
    """

    def __init__(
        self,
        model_name: str = "fake-minilm",
        available: bool = True,
        fail_loads: int = 0,
        load_delay: float = 0.0,
        fail_embed: bool = False,
        dimension: int = 64,
    ) -> None:
        self.model_name = model_name
        self.available = available
        self.fail_loads = fail_loads
        self.load_delay = load_delay
        self.fail_embed = fail_embed
        self.dimension = dimension
        self.loaded = False
        self.load_calls = 0
        self.embed_calls = 0
        self.unload_calls = 0

    def is_available(self) -> bool:
        return self.available

    def load(self) -> None:
        self.load_calls += 1
        if self.load_delay:
            time.sleep(self.load_delay)
        if self.load_calls <= self.fail_loads:
            raise RuntimeError(f"simulated load failure #{self.load_calls}")
        self.loaded = True

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.embed_calls += 1
        if self.fail_embed:
            raise RuntimeError("simulated embedding failure")
        return [self.vector_for(text) for text in texts]

    def vector_for(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in _TOKEN.findall(text.lower()):
            vector[zlib.crc32(token.encode("utf-8")) % self.dimension] += 1.0
        return vector

    def unload(self) -> None:
        self.unload_calls += 1
        self.loaded = False


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def fake_service_factory() -> Callable[..., FakeEmbeddingService]:
    """
    Factory for FakeEmbeddingService with custom behaviour.

    Examples:
        >>> def test_retry(fake_service_factory):
        ...     service = fake_service_factory(fail_loads=2)
    """
    return FakeEmbeddingService


@pytest.fixture
def fake_embedding_service() -> FakeEmbeddingService:
    return FakeEmbeddingService()


@pytest.fixture
def threshold_store() -> ThresholdStore:
    return ThresholdStore()


@pytest.fixture
def manual_scorer(threshold_store) -> ManualScorer:
    return ManualScorer(threshold_store)


@pytest.fixture
def test_settings() -> EvaluatorSettings:
    return EvaluatorSettings.for_testing()


@pytest.fixture
def evaluator(fake_embedding_service, test_settings, threshold_store) -> AnswerEvaluator:
    """AnswerEvaluator on the fake backend. Tests call initialize() themselves."""
    return AnswerEvaluator(
        embedding_service=fake_embedding_service,
        settings=test_settings,
        threshold_store=threshold_store,
    )


@pytest.fixture
def tcp_pair() -> AnswerPair:
    return AnswerPair(
        student_answer=TCP_STUDENT_ANSWER,
        model_answer=TCP_MODEL_ANSWER,
        max_marks=10,
        domain=Domain.CSE,
        question_text="Explain how TCP achieves reliable delivery.",
    )
