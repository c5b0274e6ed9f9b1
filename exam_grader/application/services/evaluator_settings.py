"""
Evaluator Settings

Runtime knobs of the AnswerEvaluator, read from the environment
(GRADER_* variables, optionally from a .env file loaded by the entry point).
"""

import os
from dataclasses import dataclass
from typing import Any

DEFAULT_MODEL_NAME = "all-MiniLM-L6-v2"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EvaluatorSettings:
    """
    Configuration for AnswerEvaluator.

    Attributes:
        enable_ai: Try to load the embedding model at all (False = manual only)
        model_name: sentence-transformers model identifier
        init_timeout_seconds: Upper bound on one model load attempt (45s)
        max_init_attempts: Load attempts in total before giving up (3)
        retry_delay_seconds: Pause between failed attempts (3s)
        batch_group_size: Pairs evaluated concurrently in a batch (4)
        batch_pacing_seconds: Pause between batch groups (0.1s)
        marks_jitter: Optional marks perturbation on the embedding path (0 = off)

    Examples:
        >>> settings = EvaluatorSettings.for_testing(max_init_attempts=1)
        >>> settings.retry_delay_seconds
        0.0
    """

    enable_ai: bool = True
    model_name: str = DEFAULT_MODEL_NAME
    init_timeout_seconds: float = 45.0
    max_init_attempts: int = 3
    retry_delay_seconds: float = 3.0
    batch_group_size: int = 4
    batch_pacing_seconds: float = 0.1
    marks_jitter: float = 0.0

    def __post_init__(self) -> None:
        if self.max_init_attempts < 1:
            raise ValueError(f"max_init_attempts must be >= 1, got {self.max_init_attempts}")
        if self.batch_group_size < 1:
            raise ValueError(f"batch_group_size must be >= 1, got {self.batch_group_size}")
        if self.init_timeout_seconds <= 0:
            raise ValueError(
                f"init_timeout_seconds must be > 0, got {self.init_timeout_seconds}"
            )
        if not 0.0 <= self.marks_jitter <= 1.0:
            raise ValueError(f"marks_jitter must be in [0, 1], got {self.marks_jitter}")

    @classmethod
    def default(cls) -> "EvaluatorSettings":
        return cls()

    @classmethod
    def from_env(cls) -> "EvaluatorSettings":
        """Build settings from GRADER_* environment variables."""
        return cls(
            enable_ai=_env_bool("GRADER_ENABLE_AI", True),
            model_name=os.getenv("GRADER_MODEL_NAME", DEFAULT_MODEL_NAME),
            init_timeout_seconds=float(os.getenv("GRADER_INIT_TIMEOUT", "45")),
            max_init_attempts=int(os.getenv("GRADER_MAX_INIT_ATTEMPTS", "3")),
            retry_delay_seconds=float(os.getenv("GRADER_RETRY_DELAY", "3")),
            batch_group_size=int(os.getenv("GRADER_BATCH_GROUP_SIZE", "4")),
            batch_pacing_seconds=float(os.getenv("GRADER_BATCH_PACING", "0.1")),
            marks_jitter=float(os.getenv("GRADER_MARKS_JITTER", "0")),
        )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "EvaluatorSettings":
        """
        Settings with no waiting, for fast tests.

        Examples:
            >>> EvaluatorSettings.for_testing(enable_ai=False).enable_ai
            False
        """
        defaults: dict[str, Any] = {
            "init_timeout_seconds": 5.0,
            "retry_delay_seconds": 0.0,
            "batch_pacing_seconds": 0.0,
        }
        defaults.update(overrides)
        return cls(**defaults)
