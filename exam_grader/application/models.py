"""
Shared Application Models

Responsibility:
    Lifecycle enum and status DTO of the evaluator facade.
    Used by AnswerEvaluator, status listeners and the API layer.

Contains:
    - EvaluatorState: Lifecycle states of AnswerEvaluator
    - EvaluatorStatus: Snapshot pushed to listeners / returned by get_status()

Does NOT contain:
    - Business logic (belongs to Domain Layer)
    - HTTP models (belongs to API Layer)
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

EVALUATION_MODE_AI = "AI"
EVALUATION_MODE_MANUAL = "Manual"


class EvaluatorState(str, Enum):
    """
    Lifecycle of the evaluator.

    Attributes:
        UNINITIALIZED: Constructed (or disposed), no load attempted
        INITIALIZING: Model load / self-test in progress
        READY: Model loaded and self-test passed; AI path in use
        UNAVAILABLE: Load failed after all attempts (or AI disabled); manual path only

    Usage:
        >>> state = EvaluatorState.READY
        >>> state.value
        'ready'
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class EvaluatorStatus(BaseModel):
    """
    Read-only status snapshot of the evaluator.

    Attributes:
        state: Current lifecycle state
        is_loaded: True when the embedding model is loaded (state READY)
        is_initializing: True while a load is in flight
        evaluation_mode: "AI" when READY, otherwise "Manual"
        model_name: Embedding model identifier
        thresholds: Current cut points (excellent..fail)
        supported_domains: Engineering streams with vocabulary tables
        retry_count: Failed load attempts since the last successful load
        last_error: Message of the most recent load failure
    """

    state: EvaluatorState
    is_loaded: bool = False
    is_initializing: bool = False
    evaluation_mode: str = EVALUATION_MODE_MANUAL
    model_name: str
    thresholds: dict[str, float] = Field(default_factory=dict)
    supported_domains: list[str] = Field(default_factory=list)
    retry_count: int = Field(default=0, ge=0)
    last_error: Optional[str] = None

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "protected_namespaces": (),
    }
